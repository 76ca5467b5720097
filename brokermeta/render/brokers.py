"""
Broker roster rendering.

The controller's ID is suffixed with CONTROLLER_MARKER. The RACK column is
only emitted when at least one broker reports a rack.
"""

from typing import List, Optional

from brokermeta.metadata import Broker
from brokermeta.render.sorting import sort_brokers
from brokermeta.render.table import Column, build_table

CONTROLLER_MARKER = "*"


def broker_columns(brokers: List[Broker], controller_id: Optional[int]) -> List[Column[Broker]]:
    """
    Decide the broker table columns from one scan of the roster.

    Args:
        brokers: Brokers to render
        controller_id: Controller broker ID, or None

    Returns:
        Ordered column descriptors
    """
    def broker_id(b: Broker) -> str:
        if controller_id is not None and b.node_id == controller_id:
            return f"{b.node_id}{CONTROLLER_MARKER}"
        return str(b.node_id)

    columns = [
        Column("ID", broker_id),
        Column("HOST", lambda b: b.host),
        Column("PORT", lambda b: b.port),
    ]
    if any(b.rack is not None for b in brokers):
        columns.append(Column("RACK", lambda b: b.rack or ""))
    return columns


def render_brokers(brokers: List[Broker], controller_id: Optional[int]) -> str:
    """
    Render the broker table, sorted by node ID.

    The broker list is sorted in place.
    """
    sort_brokers(brokers)
    return build_table(broker_columns(brokers, controller_id), brokers).render()
