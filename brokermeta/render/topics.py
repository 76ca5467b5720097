"""
Topic rendering, in summary and per-partition detail form.

Both forms sort topics by name and skip internal topics unless asked to
include them. The replica count of a topic is the replica count of its
first partition in index order, assuming a uniform replication factor.
"""

from typing import Callable, List, Optional

from brokermeta.errors import error_message
from brokermeta.metadata import Partition, Topic
from brokermeta.render.sorting import sort_ids, sort_partitions, sort_topics
from brokermeta.render.table import Column, Table, build_table

ErrorLookup = Callable[[int], Optional[str]]

NO_ERROR_PLACEHOLDER = "-"


def _visible(topics: List[Topic], internal: bool) -> List[Topic]:
    return [t for t in sort_topics(topics) if internal or not t.is_internal]


def replica_count(topic: Topic) -> int:
    """Replica count of the lowest-index partition, or 0 without partitions."""
    if not topic.partitions:
        return 0
    first = min(topic.partitions, key=lambda p: p.index)
    return len(first.replicas)


def render_topic_summary(topics: List[Topic], internal: bool) -> str:
    """
    Render one row per topic with its partition and replica counts.

    Args:
        topics: Topics to render (sorted in place)
        internal: Include internal topics

    Returns:
        Table text
    """
    table = Table("NAME", "PARTITIONS", "REPLICAS")
    for topic in _visible(topics, internal):
        table.add_row(topic.name, topic.num_partitions(), replica_count(topic))
    return table.render()


def topic_heading(topic: Topic) -> str:
    """
    Heading line of a detailed topic, e.g. "foo, 20 partitions, 3 replicas".
    """
    heading = topic.name
    if topic.is_internal:
        heading += " (internal)"
    heading += f", {topic.num_partitions()} partitions"
    if topic.partitions:
        heading += f", {replica_count(topic)} replicas"
    return heading


def partition_columns(
    partitions: List[Partition],
    error_lookup: ErrorLookup = error_message,
) -> List[Column[Partition]]:
    """
    Decide the partition table columns from one scan of a topic's partitions.

    EPOCH, OFFLINE-REPLICAS and LOAD-ERROR are only emitted when some
    partition carries a value for them. The leading blank column indents
    the table under its topic heading.

    Args:
        partitions: Partitions of one topic
        error_lookup: Resolves a load error code to a message

    Returns:
        Ordered column descriptors
    """
    use_epoch = any(p.leader_epoch is not None for p in partitions)
    use_offline = any(p.offline_replicas for p in partitions)
    use_error = any(p.has_error() for p in partitions)

    def load_error(p: Partition) -> str:
        if not p.has_error():
            return NO_ERROR_PLACEHOLDER
        return error_lookup(p.error_code) or NO_ERROR_PLACEHOLDER

    columns = [
        Column("", lambda p: ""),
        Column("PARTITION", lambda p: p.index),
        Column("LEADER", lambda p: p.leader),
    ]
    if use_epoch:
        columns.append(Column("EPOCH", lambda p: p.leader_epoch))
    # TODO: add an ISR column after REPLICAS.
    columns.append(Column("REPLICAS", lambda p: sort_ids(p.replicas)))
    if use_offline:
        columns.append(Column("OFFLINE-REPLICAS", lambda p: sort_ids(p.offline_replicas)))
    if use_error:
        columns.append(Column("LOAD-ERROR", load_error))
    return columns


def render_topic_details(
    topics: List[Topic],
    internal: bool,
    error_lookup: ErrorLookup = error_message,
) -> str:
    """
    Render a heading and a nested partition table per topic.

    Topics, partitions and replica lists are sorted in place. Topics are
    separated by a blank line.

    Args:
        topics: Topics to render
        internal: Include internal topics
        error_lookup: Resolves a load error code to a message

    Returns:
        Rendered text
    """
    blocks = []
    for topic in _visible(topics, internal):
        partitions = sort_partitions(topic.partitions)
        table = build_table(partition_columns(partitions, error_lookup), partitions)
        blocks.append(topic_heading(topic) + "\n" + table.render())
    return "\n".join(blocks)
