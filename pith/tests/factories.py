"""
Helpers for building facts and nodes in tests.
"""
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

from pith.models import FileFact
from pith.types import Edge, EdgeType, NodeMetadata, NodeType, RawEvidence, WikiNode


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


def make_node(
    node_id: str,
    node_type: NodeType = NodeType.FILE,
    edges: Optional[List[Edge]] = None,
    path: Optional[str] = None,
    lines: int = 10,
    last_modified: Optional[datetime] = None,
    created_at: Optional[datetime] = None,
    raw: Optional[RawEvidence] = None,
) -> WikiNode:
    """Build a node directly, bypassing the builders."""
    path = path or node_id.split(":")[0]
    return WikiNode(
        id=node_id,
        type=node_type,
        path=path,
        name=path.rsplit("/", 1)[-1],
        metadata=NodeMetadata(
            lines=lines,
            commits=1,
            last_modified=last_modified or utc(2024, 1, 1),
            created_at=created_at,
        ),
        edges=list(edges or []),
        raw=raw or RawEvidence(),
    )


def imports(target: str) -> Edge:
    return Edge(type=EdgeType.IMPORTS, target=target)


def file_fact(path: str, imports_from: Optional[List[str]] = None, **extra: Any) -> FileFact:
    """Minimal fact record for a file."""
    record: Dict[str, Any] = {
        "path": path,
        "lines": extra.pop("lines", 10),
        "imports": [{"from": spec, "names": [], "isTypeOnly": False} for spec in imports_from or []],
        "exports": [],
        "functions": [],
        "classes": [],
        "interfaces": [],
    }
    record.update(extra)
    return FileFact.model_validate(record)
