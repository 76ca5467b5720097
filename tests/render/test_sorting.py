"""Tests for metadata sorting helpers."""

from brokermeta.metadata import Broker, Partition, Topic
from brokermeta.render.sorting import sort_brokers, sort_ids, sort_partitions, sort_topics


class TestSorting:
    """Test in-place sorting helpers."""

    def test_sort_brokers(self):
        """Test brokers sort by node ID."""
        brokers = [Broker(3, "c", 9092), Broker(1, "a", 9092), Broker(2, "b", 9092)]

        result = sort_brokers(brokers)

        assert result is brokers
        assert [b.node_id for b in brokers] == [1, 2, 3]

    def test_sort_topics(self):
        """Test topics sort by name."""
        topics = [Topic("orders"), Topic("audit"), Topic("payments")]

        sort_topics(topics)

        assert [t.name for t in topics] == ["audit", "orders", "payments"]

    def test_sort_partitions(self):
        """Test partitions sort by index."""
        partitions = [Partition(2, 1), Partition(0, 1), Partition(1, 1)]

        sort_partitions(partitions)

        assert [p.index for p in partitions] == [0, 1, 2]

    def test_sort_ids(self):
        """Test ID lists sort numerically in place."""
        ids = [10, 2, 1]

        assert sort_ids(ids) is ids
        assert ids == [1, 2, 10]
