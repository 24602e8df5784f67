"""
Fact records produced by the extraction stage and consumed by the graph builder.
"""
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class FactModel(BaseModel):
    """Base for fact records; accepts both camelCase and snake_case keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class ImportFact(FactModel):
    """An import declaration."""
    from_: str = Field(alias="from")
    names: List[str] = Field(default_factory=list)
    default_name: Optional[str] = None
    namespace_import: Optional[str] = None
    is_type_only: bool = False


class ExportFact(FactModel):
    """An export declaration."""
    name: str
    kind: str
    is_re_export: bool = False


class ParamFact(FactModel):
    name: str
    type: str = ""
    is_optional: bool = False
    default_value: Optional[str] = None


class FunctionFact(FactModel):
    """A function declared in a file."""
    name: str
    signature: str
    params: List[ParamFact] = Field(default_factory=list)
    return_type: str = ""
    is_async: bool = False
    is_exported: bool = False
    start_line: int
    end_line: int


class CommitFact(FactModel):
    """A commit touching a file."""
    hash: str
    message: str
    author: str
    date: datetime

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, v: datetime) -> datetime:
        return as_utc(v)


class GitFact(FactModel):
    """Version-control evidence for a file."""
    commit_count: int
    last_modified: datetime
    created_at: Optional[datetime] = None
    authors: List[str] = Field(default_factory=list)
    primary_author: Optional[str] = None
    recent_commits: List[CommitFact] = Field(default_factory=list)

    @field_validator("last_modified", "created_at")
    @classmethod
    def _normalize_timestamps(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None


class JSDocParam(FactModel):
    name: str
    type: str = ""
    description: str = ""


class JSDoc(FactModel):
    """A documentation comment attached to an identifier."""
    description: str = ""
    params: List[JSDocParam] = Field(default_factory=list)
    returns: Optional[str] = None
    throws: List[str] = Field(default_factory=list)
    examples: List[str] = Field(default_factory=list)
    deprecated: Optional[str] = None
    see: List[str] = Field(default_factory=list)


class DocsFact(FactModel):
    """Documentation evidence for a file."""
    jsdoc: Dict[str, JSDoc] = Field(default_factory=dict)
    inline_comments: List[Dict[str, Any]] = Field(default_factory=list)
    todos: List[Dict[str, Any]] = Field(default_factory=list)
    deprecations: List[Dict[str, Any]] = Field(default_factory=list)
    readme: Optional[str] = None


class FileFact(FactModel):
    """Everything the extraction stage knows about one source file."""
    path: str
    lines: int
    imports: List[ImportFact] = Field(default_factory=list)
    exports: List[ExportFact] = Field(default_factory=list)
    functions: List[FunctionFact] = Field(default_factory=list)
    classes: List[Dict[str, Any]] = Field(default_factory=list)
    interfaces: List[Dict[str, Any]] = Field(default_factory=list)
    git: Optional[GitFact] = None
    docs: Optional[DocsFact] = None


def parse_facts(records: Iterable[Dict[str, Any]]) -> List[FileFact]:
    """Validate raw fact dictionaries into FileFact models."""
    return [FileFact.model_validate(record) for record in records]
