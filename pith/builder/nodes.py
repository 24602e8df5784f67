"""
Builders mapping fact records to graph nodes.
"""
import posixpath
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..config import Settings, settings as default_settings
from ..models import FileFact, FunctionFact
from ..types import NodeMetadata, NodeType, RawEvidence, WikiNode
from .selection import is_test_file


def _history_metadata(fact: FileFact, lines: int) -> NodeMetadata:
    """Metadata from the file's version-control evidence, or a neutral baseline."""
    git = fact.git
    if git is None:
        return NodeMetadata(lines=lines, commits=0, last_modified=datetime.now(timezone.utc))

    return NodeMetadata(
        lines=lines,
        commits=git.commit_count,
        last_modified=git.last_modified,
        authors=list(git.authors),
        created_at=git.created_at,
    )


def build_test_command(path: str, settings: Optional[Settings] = None) -> str:
    """Build the test-runner invocation for a test file."""
    settings = settings or default_settings
    return settings.test_command_template.format(path=path)


def build_file_node(fact: FileFact, settings: Optional[Settings] = None) -> WikiNode:
    """Build a file node; the id is the repository-relative path."""
    settings = settings or default_settings

    metadata = _history_metadata(fact, fact.lines)
    if is_test_file(fact.path, settings):
        metadata.test_command = build_test_command(fact.path, settings)

    signature = [func.signature for func in fact.functions]
    raw = RawEvidence(
        signature=signature or None,
        jsdoc=dict(fact.docs.jsdoc) if fact.docs is not None else None,
        imports=list(fact.imports) or None,
        exports=list(fact.exports) or None,
        recent_commits=list(fact.git.recent_commits) if fact.git is not None else None,
    )

    return WikiNode(
        id=fact.path,
        type=NodeType.FILE,
        path=fact.path,
        name=posixpath.basename(fact.path),
        metadata=metadata,
        raw=raw,
    )


def build_function_node(fact: FileFact, func: FunctionFact) -> WikiNode:
    """
    Build a node for an exported function.

    Functions have no history of their own: commits, last modification and
    authors come from the owning file. The file's whole documentation map is
    carried in raw.jsdoc; looking up the function's entry is left to readers.
    """
    metadata = _history_metadata(fact, func.end_line - func.start_line + 1)
    # no creation time for functions, so no age either
    metadata.created_at = None

    return WikiNode(
        id=f"{fact.path}:{func.name}",
        type=NodeType.FUNCTION,
        path=fact.path,
        name=func.name,
        metadata=metadata,
        raw=RawEvidence(
            signature=[func.signature],
            jsdoc=dict(fact.docs.jsdoc) if fact.docs is not None else None,
        ),
    )


def aggregate_module_metadata(metadata: NodeMetadata, members: Sequence[WikiNode]) -> None:
    """
    Fold member file metadata into a module's metadata in place.

    Lines are summed, commits and last modification take the maximum,
    creation takes the earliest known value and authors are unioned in
    first-seen order.
    """
    if not members:
        return

    metadata.lines = sum(member.metadata.lines for member in members)
    metadata.commits = max(member.metadata.commits for member in members)
    metadata.last_modified = max(member.metadata.last_modified for member in members)

    created = [member.metadata.created_at for member in members if member.metadata.created_at is not None]
    metadata.created_at = min(created) if created else None

    authors: List[str] = []
    for member in members:
        for author in member.metadata.authors:
            if author not in authors:
                authors.append(author)
    metadata.authors = authors


def build_module_node(
    dir_path: str,
    member_paths: Sequence[str],
    readme: Optional[str] = None,
    member_nodes: Optional[Sequence[WikiNode]] = None,
) -> WikiNode:
    """Build a module node for a directory; the id is the directory path."""
    metadata = NodeMetadata(lines=0, commits=0, last_modified=datetime.now(timezone.utc))
    if member_nodes:
        members = set(member_paths)
        aggregate_module_metadata(metadata, [node for node in member_nodes if node.path in members])

    return WikiNode(
        id=dir_path,
        type=NodeType.MODULE,
        path=dir_path,
        name=posixpath.basename(dir_path.rstrip("/")),
        metadata=metadata,
        raw=RawEvidence(readme=readme or None),
    )
