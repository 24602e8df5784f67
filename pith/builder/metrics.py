"""
Graph-derived metrics: fan-in, fan-out, age and recency.

compute_metadata must run after every edge pass has finished.
"""
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from ..models import as_utc
from ..types import EdgeType, WikiNode

MS_PER_DAY = 86_400_000
_ONE_MS = timedelta(milliseconds=1)


def calculate_fan_in(node_id: str, all_nodes: Sequence[WikiNode]) -> int:
    """Count imports edges, across all nodes, that target node_id."""
    return sum(
        1
        for node in all_nodes
        for edge in node.edges
        if edge.type == EdgeType.IMPORTS and edge.target == node_id
    )


def calculate_fan_out(node: WikiNode) -> int:
    """Count the node's own imports edges."""
    return sum(1 for edge in node.edges if edge.type == EdgeType.IMPORTS)


def _elapsed_days(since: datetime, now: datetime) -> int:
    elapsed_ms = (as_utc(now) - as_utc(since)) // _ONE_MS
    return max(0, elapsed_ms // MS_PER_DAY)


def calculate_age(created_at: datetime, now: datetime) -> int:
    """Whole days elapsed since creation."""
    return _elapsed_days(created_at, now)


def calculate_recency(last_modified: datetime, now: datetime) -> int:
    """Whole days elapsed since the last change."""
    return _elapsed_days(last_modified, now)


def compute_metadata(nodes: Sequence[WikiNode], now: Optional[datetime] = None) -> None:
    """Set fan-in, fan-out, age and recency on every node, in place."""
    now = now or datetime.now(timezone.utc)

    # Same result as calculate_fan_in per node, in one pass
    fan_in = Counter(
        edge.target
        for node in nodes
        for edge in node.edges
        if edge.type == EdgeType.IMPORTS
    )

    for node in nodes:
        metadata = node.metadata
        metadata.fan_in = fan_in.get(node.id, 0)
        metadata.fan_out = calculate_fan_out(node)
        metadata.age_in_days = (
            calculate_age(metadata.created_at, now) if metadata.created_at is not None else None
        )
        metadata.recency_in_days = calculate_recency(metadata.last_modified, now)
