"""
Cluster metadata model.

Plain dataclasses describing one decoded metadata response: the cluster,
its brokers, and the topic/partition layout. Protocol sentinels are turned
into explicit absence when a model is built from raw data:

- leader epoch -1 becomes None
- partition error code 0 becomes None
- controller id -1 becomes None

Rendering sorts the broker, topic, partition and replica lists of a
response in place. Use MetadataResponse.copy() first when the original
order has to survive.
"""

import copy
from dataclasses import dataclass, field
from typing import List, Optional

NO_EPOCH = -1
NO_CONTROLLER = -1
NO_ERROR = 0


def _epoch_or_none(value: Optional[int]) -> Optional[int]:
    if value is None or value == NO_EPOCH:
        return None
    return value


def _error_or_none(value: Optional[int]) -> Optional[int]:
    if value is None or value == NO_ERROR:
        return None
    return value


@dataclass
class Broker:
    """
    A broker as reported in a metadata response.

    Attributes:
        node_id: Unique broker identifier
        host: Advertised hostname/IP
        port: Advertised port
        rack: Optional rack ID
    """
    node_id: int
    host: str
    port: int
    rack: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Broker":
        """Create from a decoded response entry."""
        return cls(
            node_id=data["node_id"],
            host=data["host"],
            port=data["port"],
            rack=data.get("rack"),
        )


@dataclass
class Partition:
    """
    A topic partition as reported in a metadata response.

    Attributes:
        index: Partition number
        leader: Leader broker ID
        leader_epoch: Leader epoch, None when not reported
        replicas: Replica broker IDs
        offline_replicas: Replica broker IDs currently offline
        isr: In-sync replica broker IDs
        error_code: Load error code, None when the partition loaded cleanly
    """
    index: int
    leader: int
    leader_epoch: Optional[int] = None
    replicas: List[int] = field(default_factory=list)
    offline_replicas: List[int] = field(default_factory=list)
    isr: List[int] = field(default_factory=list)
    error_code: Optional[int] = None

    def has_error(self) -> bool:
        """Check if the partition reported a load error."""
        return self.error_code is not None

    @classmethod
    def from_dict(cls, data: dict) -> "Partition":
        """Create from a decoded response entry."""
        index = data["partition"] if "partition" in data else data["partition_index"]
        return cls(
            index=index,
            leader=data["leader"],
            leader_epoch=_epoch_or_none(data.get("leader_epoch")),
            replicas=list(data.get("replicas") or []),
            offline_replicas=list(data.get("offline_replicas") or []),
            isr=list(data.get("isr") or []),
            error_code=_error_or_none(data.get("error_code")),
        )


@dataclass
class Topic:
    """
    A topic and its partitions.

    Attributes:
        name: Topic name
        is_internal: Whether the topic is internal to the cluster
        partitions: Partitions of the topic
    """
    name: str
    is_internal: bool = False
    partitions: List[Partition] = field(default_factory=list)

    def num_partitions(self) -> int:
        """Get number of partitions."""
        return len(self.partitions)

    @classmethod
    def from_dict(cls, data: dict) -> "Topic":
        """Create from a decoded response entry."""
        return cls(
            name=data["topic"] if "topic" in data else data["name"],
            is_internal=bool(data.get("is_internal", False)),
            partitions=[Partition.from_dict(p) for p in data.get("partitions") or []],
        )


@dataclass
class MetadataResponse:
    """
    A decoded metadata response.

    Attributes:
        cluster_id: Cluster identifier, None if the broker did not report one
        controller_id: Controller broker ID, None if there is no controller
        brokers: Brokers in the cluster
        topics: Requested topics
    """
    cluster_id: Optional[str] = None
    controller_id: Optional[int] = None
    brokers: List[Broker] = field(default_factory=list)
    topics: List[Topic] = field(default_factory=list)

    def copy(self) -> "MetadataResponse":
        """Deep copy, for callers that must keep the original ordering."""
        return copy.deepcopy(self)

    @classmethod
    def from_dict(cls, data: dict) -> "MetadataResponse":
        """Create from a decoded response."""
        controller_id = data.get("controller_id")
        if controller_id == NO_CONTROLLER:
            controller_id = None
        return cls(
            cluster_id=data.get("cluster_id"),
            controller_id=controller_id,
            brokers=[Broker.from_dict(b) for b in data.get("brokers") or []],
            topics=[Topic.from_dict(t) for t in data.get("topics") or []],
        )
