"""
Deterministic ordering of metadata before rendering.

Every helper sorts its argument in place and returns it, so calls can be
chained inside expressions. Sort keys are unique within a response.
"""

from operator import attrgetter
from typing import List

from brokermeta.metadata import Broker, Partition, Topic


def sort_brokers(brokers: List[Broker]) -> List[Broker]:
    """Sort brokers ascending by node ID."""
    brokers.sort(key=attrgetter("node_id"))
    return brokers


def sort_topics(topics: List[Topic]) -> List[Topic]:
    """Sort topics ascending by name."""
    topics.sort(key=attrgetter("name"))
    return topics


def sort_partitions(partitions: List[Partition]) -> List[Partition]:
    """Sort partitions ascending by index."""
    partitions.sort(key=attrgetter("index"))
    return partitions


def sort_ids(ids: List[int]) -> List[int]:
    """Sort broker IDs ascending."""
    ids.sort()
    return ids
