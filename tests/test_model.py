"""Tests for the cluster metadata model."""

from brokermeta.metadata import Broker, MetadataResponse, Partition, Topic


class TestBroker:
    """Test Broker."""

    def test_from_dict(self):
        """Test building from a decoded entry."""
        broker = Broker.from_dict({"node_id": 1, "host": "h", "port": 9092, "rack": "r1"})

        assert broker == Broker(1, "h", 9092, "r1")

    def test_from_dict_without_rack(self):
        """Test brokers from old responses have no rack."""
        assert Broker.from_dict({"node_id": 1, "host": "h", "port": 9092}).rack is None


class TestPartition:
    """Test Partition."""

    def test_sentinels_become_none(self):
        """Test epoch -1 and error 0 are treated as not reported."""
        partition = Partition.from_dict({
            "error_code": 0,
            "partition": 0,
            "leader": 1,
            "leader_epoch": -1,
            "replicas": [1, 2],
            "isr": [1],
            "offline_replicas": [],
        })

        assert partition.leader_epoch is None
        assert partition.error_code is None
        assert not partition.has_error()
        assert partition.isr == [1]

    def test_real_values_kept(self):
        """Test real epochs and errors survive."""
        partition = Partition.from_dict({
            "error_code": 5,
            "partition_index": 3,
            "leader": -1,
            "leader_epoch": 0,
            "replicas": [1],
        })

        assert partition.index == 3
        assert partition.leader_epoch == 0
        assert partition.error_code == 5
        assert partition.has_error()
        assert partition.offline_replicas == []


class TestMetadataResponse:
    """Test MetadataResponse."""

    def test_from_dict(self):
        """Test decoding a whole response."""
        response = MetadataResponse.from_dict({
            "cluster_id": "c1",
            "controller_id": 2,
            "brokers": [{"node_id": 2, "host": "h", "port": 9092, "rack": None}],
            "topics": [{
                "error_code": 0,
                "topic": "orders",
                "is_internal": False,
                "partitions": [{"error_code": 0, "partition": 0, "leader": 2,
                                "replicas": [2], "isr": [2]}],
            }],
        })

        assert response.cluster_id == "c1"
        assert response.controller_id == 2
        assert response.brokers[0].node_id == 2
        assert response.topics[0].name == "orders"
        assert response.topics[0].num_partitions() == 1

    def test_no_controller(self):
        """Test controller -1 means no controller."""
        assert MetadataResponse.from_dict({"controller_id": -1}).controller_id is None

    def test_copy_is_independent(self):
        """Test copies keep the original ordering."""
        response = MetadataResponse(topics=[
            Topic("t", partitions=[Partition(0, 1, replicas=[2, 1])]),
        ])

        copied = response.copy()
        copied.topics[0].partitions[0].replicas.sort()

        assert response.topics[0].partitions[0].replicas == [2, 1]
