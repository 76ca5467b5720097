"""
brokermeta - print Kafka cluster metadata as tables.

Requests metadata from a Kafka-compatible cluster and renders:
- the cluster ID
- the broker roster, marking the controller
- topics, summarized or with per-partition detail
"""

__version__ = "0.1.0"
