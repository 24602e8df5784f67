"""
Edge builders: containment, parent, import resolution, test pairing and
reciprocal dependents.
"""
import posixpath
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import Settings, settings as default_settings
from ..errors import PithError, ErrorCode
from ..types import Edge, EdgeType, OwnedEdge, WikiNode
from ..utils.logger import get_logger
from .selection import is_test_file, logical_unit_name

logger = get_logger("edges")

# ESM sources import TypeScript siblings by their emitted name
_EMITTED_TO_SOURCE = {
    ".js": (".ts", ".tsx"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}


def is_relative_specifier(specifier: str) -> bool:
    """Relative specifiers start with './' or '../' (or are '.'/'..')."""
    return specifier in (".", "..") or specifier.startswith(("./", "../"))


def build_contains_edges(parent: WikiNode, children: Sequence[WikiNode]) -> List[Edge]:
    """One contains edge per child, in order."""
    return [
        Edge(type=EdgeType.CONTAINS, target=child.id)
        for child in children
        if child.id != parent.id
    ]


def build_parent_edge(child: WikiNode, parent: WikiNode) -> Edge:
    """Parent edge from a file to its module."""
    if child.id == parent.id:
        raise PithError(ErrorCode.GRAPH_ERROR, f"Node {child.id} cannot be its own parent")
    return Edge(type=EdgeType.PARENT, target=parent.id)


def _candidate_paths(target: str, extensions: Sequence[str]) -> List[str]:
    candidates = [target]
    candidates.extend(f"{target}{ext}" for ext in extensions)

    stem, ext = posixpath.splitext(target)
    for source_ext in _EMITTED_TO_SOURCE.get(ext, ()):
        candidates.append(f"{stem}{source_ext}")

    candidates.extend(posixpath.join(target, f"index{ext}") for ext in extensions)
    return candidates


def resolve_import(
    importer_path: str,
    specifier: str,
    known_file_paths: Iterable[str],
    settings: Optional[Settings] = None,
) -> Optional[str]:
    """
    Resolve a relative import specifier to a known file path.

    Package names and platform built-ins ('react', 'node:fs') are never
    resolved. Returns None when no candidate is a known path.
    """
    if not is_relative_specifier(specifier):
        return None

    settings = settings or default_settings
    known = known_file_paths if isinstance(known_file_paths, (set, frozenset)) else set(known_file_paths)

    base_dir = posixpath.dirname(importer_path)
    target = posixpath.normpath(posixpath.join(base_dir, specifier))
    for candidate in _candidate_paths(target, settings.source_extensions_list):
        if candidate in known:
            return candidate
    return None


def build_import_edges(
    file_node: WikiNode,
    known_file_paths: Iterable[str],
    settings: Optional[Settings] = None,
) -> List[Edge]:
    """Imports edges for every resolvable import, in import order."""
    known = known_file_paths if isinstance(known_file_paths, (set, frozenset)) else set(known_file_paths)
    edges = []

    for imp in file_node.raw.imports or []:
        target = resolve_import(file_node.path, imp.from_, known, settings)
        if target is None:
            logger.debug(f"Skipping unresolved import '{imp.from_}' in {file_node.path}")
            continue
        edges.append(Edge(type=EdgeType.IMPORTS, target=target))

    return edges


def build_test_file_edges(file_nodes: Sequence[WikiNode], settings: Optional[Settings] = None) -> List[OwnedEdge]:
    """Pair each source file with the test files sharing its logical unit name."""
    settings = settings or default_settings

    tests_by_unit: Dict[str, List[WikiNode]] = defaultdict(list)
    sources = []
    for node in file_nodes:
        if is_test_file(node.path, settings):
            tests_by_unit[logical_unit_name(node.path, settings)].append(node)
        else:
            sources.append(node)

    edges = []
    for source in sources:
        for test_node in tests_by_unit.get(logical_unit_name(source.path, settings), []):
            edges.append(OwnedEdge(
                source_id=source.id,
                edge=Edge(type=EdgeType.TEST_FILE, target=test_node.id),
            ))
    return edges


def build_dependent_edges(file_nodes: Sequence[WikiNode]) -> List[OwnedEdge]:
    """
    Transpose attached imports edges into importedBy edges.

    Must run after import edges are on every file node.
    """
    edges = []
    for node in file_nodes:
        for edge in node.edges:
            if edge.type == EdgeType.IMPORTS:
                edges.append(OwnedEdge(
                    source_id=edge.target,
                    edge=Edge(type=EdgeType.IMPORTED_BY, target=node.id),
                ))
    return edges


def attach_owned_edges(nodes: Iterable[WikiNode], owned_edges: Iterable[OwnedEdge]) -> int:
    """Append owned edges to their owner nodes. Returns how many were attached."""
    by_id = {node.id: node for node in nodes}
    attached = 0

    for owned in owned_edges:
        owner = by_id.get(owned.source_id)
        if owner is None:
            logger.warning(f"Dropping {owned.type.value} edge: owner {owned.source_id} is not in the graph")
            continue
        owner.edges.append(owned.edge)
        attached += 1

    return attached
