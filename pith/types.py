from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .models import CommitFact, ExportFact, ImportFact, JSDoc, as_utc


class NodeType(str, Enum):
    """Node type enumeration."""
    FILE = "file"
    FUNCTION = "function"
    MODULE = "module"


class EdgeType(str, Enum):
    """Edge type enumeration."""
    CONTAINS = "contains"
    PARENT = "parent"
    IMPORTS = "imports"
    IMPORTED_BY = "importedBy"
    TEST_FILE = "testFile"


def _format_time(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return as_utc(datetime.fromisoformat(value))


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Edge:
    """A directed, typed relationship stored on its owning node."""
    type: EdgeType
    target: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"type": self.type.value, "target": self.target}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        return cls(type=EdgeType(data["type"]), target=data["target"])


@dataclass
class OwnedEdge:
    """An edge computed for a node other than the one the builder was given."""
    source_id: str
    edge: Edge

    @property
    def type(self) -> EdgeType:
        return self.edge.type

    @property
    def target(self) -> str:
        return self.edge.target


@dataclass
class NodeMetadata:
    """Node metadata. Metric fields are filled in by the metrics pass."""
    lines: int
    commits: int
    last_modified: datetime
    authors: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    test_command: Optional[str] = None
    fan_in: Optional[int] = None
    fan_out: Optional[int] = None
    age_in_days: Optional[int] = None
    recency_in_days: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting absent fields."""
        return _drop_none({
            "lines": self.lines,
            "commits": self.commits,
            "lastModified": _format_time(self.last_modified),
            "createdAt": _format_time(self.created_at),
            "authors": list(self.authors),
            "testCommand": self.test_command,
            "fanIn": self.fan_in,
            "fanOut": self.fan_out,
            "ageInDays": self.age_in_days,
            "recencyInDays": self.recency_in_days,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeMetadata":
        return cls(
            lines=data.get("lines", 0),
            commits=data.get("commits", 0),
            last_modified=_parse_time(data["lastModified"]),
            authors=list(data.get("authors", [])),
            created_at=_parse_time(data.get("createdAt")),
            test_command=data.get("testCommand"),
            fan_in=data.get("fanIn"),
            fan_out=data.get("fanOut"),
            age_in_days=data.get("ageInDays"),
            recency_in_days=data.get("recencyInDays"),
        )


@dataclass
class RawEvidence:
    """Origin-specific evidence carried through for prose generation."""
    signature: Optional[List[str]] = None
    jsdoc: Optional[Dict[str, JSDoc]] = None
    imports: Optional[List[ImportFact]] = None
    exports: Optional[List[ExportFact]] = None
    recent_commits: Optional[List[CommitFact]] = None
    readme: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting absent fields."""
        data: Dict[str, Any] = {
            "signature": list(self.signature) if self.signature is not None else None,
            "readme": self.readme,
        }
        if self.jsdoc is not None:
            data["jsdoc"] = {name: doc.to_dict() for name, doc in self.jsdoc.items()}
        if self.imports is not None:
            data["imports"] = [imp.to_dict() for imp in self.imports]
        if self.exports is not None:
            data["exports"] = [exp.to_dict() for exp in self.exports]
        if self.recent_commits is not None:
            data["recentCommits"] = [commit.to_dict() for commit in self.recent_commits]
        return _drop_none(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawEvidence":
        jsdoc = data.get("jsdoc")
        imports = data.get("imports")
        exports = data.get("exports")
        recent_commits = data.get("recentCommits")
        return cls(
            signature=data.get("signature"),
            jsdoc={name: JSDoc.model_validate(doc) for name, doc in jsdoc.items()} if jsdoc is not None else None,
            imports=[ImportFact.model_validate(i) for i in imports] if imports is not None else None,
            exports=[ExportFact.model_validate(e) for e in exports] if exports is not None else None,
            recent_commits=[CommitFact.model_validate(c) for c in recent_commits] if recent_commits is not None else None,
            readme=data.get("readme"),
        )


@dataclass
class WikiNode:
    """A node in the knowledge graph: a file, an exported function or a module."""
    id: str
    type: NodeType
    path: str
    name: str
    metadata: NodeMetadata
    edges: List[Edge] = field(default_factory=list)
    raw: RawEvidence = field(default_factory=RawEvidence)

    def edges_of_type(self, edge_type: EdgeType) -> List[Edge]:
        """Get this node's edges of one type, in insertion order."""
        return [edge for edge in self.edges if edge.type == edge_type]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type.value,
            "path": self.path,
            "name": self.name,
            "metadata": self.metadata.to_dict(),
            "edges": [edge.to_dict() for edge in self.edges],
            "raw": self.raw.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WikiNode":
        return cls(
            id=data["id"],
            type=NodeType(data["type"]),
            path=data["path"],
            name=data["name"],
            metadata=NodeMetadata.from_dict(data["metadata"]),
            edges=[Edge.from_dict(edge) for edge in data.get("edges", [])],
            raw=RawEvidence.from_dict(data.get("raw", {})),
        )
