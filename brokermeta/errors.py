"""
Exceptions and Kafka error-code resolution.

Error codes are resolved through kafka-python's broker error registry so
load errors read the same way the Kafka protocol documents them.
"""

from typing import Optional

from kafka import errors as kafka_errors


class BrokerMetaError(Exception):
    """Base exception for brokermeta."""
    pass


class ConfigError(BrokerMetaError):
    """Configuration could not be loaded or is invalid."""
    pass


class MetadataRequestError(BrokerMetaError):
    """The metadata request could not be completed."""
    pass


def error_message(code: Optional[int]) -> Optional[str]:
    """
    Resolve a Kafka error code to a human readable message.

    Args:
        code: Kafka protocol error code (0 or None means success)

    Returns:
        None on success, otherwise "<NAME>: <description>". Codes unknown
        to the registry render as "UNKNOWN_ERROR_CODE (<code>)".
    """
    if not code:
        return None

    error_type = kafka_errors.kafka_errors.get(code)
    if error_type is None:
        return f"UNKNOWN_ERROR_CODE ({code})"

    if error_type.description:
        return f"{error_type.message}: {error_type.description}"
    return error_type.message
