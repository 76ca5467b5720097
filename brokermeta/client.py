"""
Metadata request client.

Sends a single Kafka MetadataRequest through kafka-python and decodes the
response into brokermeta.metadata models. Requests are not retried.
"""

import time
from typing import Any, Callable, List, Optional

from kafka import KafkaClient
from kafka.errors import KafkaError, UnknownTopicOrPartitionError
from kafka.protocol.metadata import MetadataRequest

from brokermeta.errors import ConfigError, MetadataRequestError
from brokermeta.metadata import MetadataResponse, Topic
from brokermeta.utils.config import Config
from brokermeta.utils.logging import get_logger

logger = get_logger(__name__)

# Versions 1-8 share the plain topic-name request layout and the
# response layout handled by decode_response.
MIN_METADATA_VERSION = 1
MAX_METADATA_VERSION = 8


def supported_versions() -> range:
    """Metadata request versions usable with the installed kafka-python."""
    return range(MIN_METADATA_VERSION, min(MAX_METADATA_VERSION, len(MetadataRequest) - 1) + 1)


def build_request(topics: Optional[List[str]], version: int):
    """
    Build a metadata request.

    Args:
        topics: Topic names, None for all topics, [] for none
        version: MetadataRequest version

    Returns:
        kafka-python request object

    Raises:
        ConfigError: If the version is not supported
    """
    if version not in supported_versions():
        versions = supported_versions()
        raise ConfigError(
            f"metadata version {version} not supported "
            f"(use {versions.start}-{versions.stop - 1})"
        )

    request_class = MetadataRequest[version]
    fields = {"topics": topics}
    for name in request_class.SCHEMA.names:
        if name == "allow_auto_topic_creation" or name.startswith("include_"):
            fields[name] = False
    return request_class(**fields)


def decode_response(raw: Any) -> MetadataResponse:
    """
    Decode a kafka-python metadata response.

    Topics the cluster does not know about are dropped, so asking for a
    missing topic yields no topic at all.

    Args:
        raw: kafka-python MetadataResponse, or its to_object() dict

    Returns:
        Decoded metadata response
    """
    data = raw.to_object() if hasattr(raw, "to_object") else raw

    topics = []
    for topic_data in data.get("topics") or []:
        if topic_data.get("error_code") == UnknownTopicOrPartitionError.errno:
            logger.warning("Topic does not exist", topic=topic_data.get("topic"))
            continue
        topics.append(Topic.from_dict(topic_data))

    response = MetadataResponse.from_dict({**data, "topics": []})
    response.topics = topics
    return response


class MetadataClient:
    """
    Requests cluster metadata from a Kafka-compatible cluster.

    A fresh kafka-python client is opened per fetch and closed afterwards.
    """

    def __init__(
        self,
        bootstrap_servers: List[str],
        client_id: str = "brokermeta",
        request_timeout_ms: int = 10000,
        metadata_version: int = 5,
        client_factory: Callable[..., Any] = KafkaClient,
    ):
        """
        Initialize metadata client.

        Args:
            bootstrap_servers: Broker addresses (host:port)
            client_id: Client ID sent with requests
            request_timeout_ms: Timeout for connecting and for the request
            metadata_version: MetadataRequest version to send
            client_factory: Builds the underlying kafka-python client
        """
        self.bootstrap_servers = list(bootstrap_servers)
        self.client_id = client_id
        self.request_timeout_ms = request_timeout_ms
        self.metadata_version = metadata_version
        self._client_factory = client_factory

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "MetadataClient":
        """Create a client from the kafka.* configuration keys."""
        try:
            request_timeout_ms = int(config.get("kafka.request_timeout_ms"))
            metadata_version = int(config.get("kafka.metadata_version"))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid kafka settings: {e}") from e

        return cls(
            bootstrap_servers=config.get("kafka.brokers"),
            client_id=config.get("kafka.client_id"),
            request_timeout_ms=request_timeout_ms,
            metadata_version=metadata_version,
            **kwargs,
        )

    def _open(self):
        try:
            return self._client_factory(
                bootstrap_servers=self.bootstrap_servers,
                client_id=self.client_id,
                request_timeout_ms=self.request_timeout_ms,
            )
        except KafkaError as e:
            raise MetadataRequestError(f"unable to initialize kafka client: {e}") from e

    def _await_ready(self, client) -> int:
        deadline = time.monotonic() + self.request_timeout_ms / 1000.0
        node_id = client.least_loaded_node()
        if node_id is None:
            raise MetadataRequestError("no broker available")

        while not client.ready(node_id):
            remaining_ms = int((deadline - time.monotonic()) * 1000)
            if remaining_ms <= 0:
                raise MetadataRequestError(
                    f"timed out connecting to broker {node_id} "
                    f"after {self.request_timeout_ms}ms"
                )
            client.poll(timeout_ms=min(remaining_ms, 100))
        return node_id

    def fetch(self, topics: Optional[List[str]] = None) -> MetadataResponse:
        """
        Request metadata.

        Args:
            topics: Topic names, None for all topics, [] for none

        Returns:
            Decoded metadata response

        Raises:
            ConfigError: If the configured request version is unsupported
            MetadataRequestError: If the request could not be completed
        """
        request = build_request(topics, self.metadata_version)
        client = self._open()
        try:
            node_id = self._await_ready(client)

            logger.info(
                "Requesting metadata",
                node_id=node_id,
                version=self.metadata_version,
                topics=topics,
            )

            future = client.send(node_id, request)
            client.poll(future=future, timeout_ms=self.request_timeout_ms)

            if not future.is_done:
                raise MetadataRequestError(
                    f"metadata request timed out after {self.request_timeout_ms}ms"
                )
            if future.failed():
                raise MetadataRequestError(str(future.exception)) from future.exception

            response = decode_response(future.value)

            logger.info(
                "Received metadata",
                brokers=len(response.brokers),
                topics=len(response.topics),
            )

            return response
        except KafkaError as e:
            raise MetadataRequestError(str(e)) from e
        finally:
            client.close()
