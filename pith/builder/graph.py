"""
Assembles the full node graph from a fact set.

Order matters: nodes, then containment, imports, parent, test pairing and
dependents, and metrics last, once the edge set is final.
"""
import posixpath
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional, Sequence

from ..config import Settings, settings as default_settings
from ..errors import PithError, ErrorCode
from ..models import FileFact
from ..types import WikiNode
from ..utils.logger import get_logger
from .edges import (
    attach_owned_edges,
    build_contains_edges,
    build_dependent_edges,
    build_import_edges,
    build_parent_edge,
    build_test_file_edges,
)
from .metrics import compute_metadata
from .nodes import build_file_node, build_function_node, build_module_node
from .selection import should_create_function_node, should_create_module_node

logger = get_logger("graph_builder")


@dataclass
class BuildResult:
    """Nodes produced by one build, grouped by type."""
    file_nodes: List[WikiNode] = field(default_factory=list)
    function_nodes: List[WikiNode] = field(default_factory=list)
    module_nodes: List[WikiNode] = field(default_factory=list)
    _by_id: Optional[Dict[str, WikiNode]] = field(default=None, init=False, repr=False, compare=False)

    @property
    def all_nodes(self) -> List[WikiNode]:
        return [*self.file_nodes, *self.function_nodes, *self.module_nodes]

    def get_node(self, node_id: str) -> Optional[WikiNode]:
        """Look up a node by id. The index is built on first use."""
        if self._by_id is None:
            self._by_id = {node.id: node for node in self.all_nodes}
        return self._by_id.get(node_id)

    def stats(self) -> Dict[str, Any]:
        """Count nodes by type and edges by type."""
        node_counts: Dict[str, int] = {}
        edge_counts: Dict[str, int] = {}
        for node in self.all_nodes:
            node_counts[node.type.value] = node_counts.get(node.type.value, 0) + 1
            for edge in node.edges:
                edge_counts[edge.type.value] = edge_counts.get(edge.type.value, 0) + 1
        return {"nodes": node_counts, "edges": edge_counts}


def _check_unique_paths(facts: Sequence[FileFact]) -> None:
    seen = set()
    for fact in facts:
        if fact.path in seen:
            raise PithError(
                ErrorCode.GRAPH_ERROR,
                f"Duplicate fact record for {fact.path}",
            )
        seen.add(fact.path)


def _build_function_nodes(facts: Sequence[FileFact]) -> List[WikiNode]:
    nodes = []
    seen = set()
    for fact in facts:
        for func in fact.functions:
            if not should_create_function_node(func):
                continue
            node = build_function_node(fact, func)
            # Overload declarations share a name; keep the first
            if node.id in seen:
                logger.debug(f"Skipping duplicate function node {node.id}")
                continue
            seen.add(node.id)
            nodes.append(node)
    return nodes


def _group_by_directory(facts: Sequence[FileFact]) -> Dict[str, List[FileFact]]:
    """Group facts by directory. Files at the repository root belong to no module."""
    groups: Dict[str, List[FileFact]] = defaultdict(list)
    for fact in facts:
        directory = posixpath.dirname(fact.path)
        if directory:
            groups[directory].append(fact)
    return groups


def _build_module_nodes(
    facts: Sequence[FileFact],
    file_nodes: Sequence[WikiNode],
    settings: Settings,
) -> List[WikiNode]:
    nodes = []
    for dir_path, members in _group_by_directory(facts).items():
        member_paths = [fact.path for fact in members]
        if not should_create_module_node(member_paths, settings):
            continue

        readme = next(
            (fact.docs.readme for fact in members if fact.docs is not None and fact.docs.readme),
            None,
        )
        nodes.append(build_module_node(dir_path, member_paths, readme, member_nodes=file_nodes))
    return nodes


def build_graph(
    facts: Sequence[FileFact],
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> BuildResult:
    """Build every node and edge for a fact set and compute metrics."""
    settings = settings or default_settings
    _check_unique_paths(facts)

    result = BuildResult()
    result.file_nodes = [build_file_node(fact, settings) for fact in facts]
    logger.info(f"Created {len(result.file_nodes)} file nodes")

    result.function_nodes = _build_function_nodes(facts)
    logger.info(f"Created {len(result.function_nodes)} function nodes")

    result.module_nodes = _build_module_nodes(facts, result.file_nodes, settings)
    logger.info(f"Created {len(result.module_nodes)} module nodes")

    files_by_dir: Dict[str, List[WikiNode]] = defaultdict(list)
    for file_node in result.file_nodes:
        files_by_dir[posixpath.dirname(file_node.path)].append(file_node)

    functions_by_file: Dict[str, List[WikiNode]] = defaultdict(list)
    for function_node in result.function_nodes:
        functions_by_file[function_node.path].append(function_node)

    # module -> file
    for module_node in result.module_nodes:
        module_node.edges.extend(build_contains_edges(module_node, files_by_dir[module_node.path]))

    # file -> function
    for file_node in result.file_nodes:
        file_node.edges.extend(build_contains_edges(file_node, functions_by_file[file_node.path]))

    # file -> file
    known_paths = {file_node.id for file_node in result.file_nodes}
    for file_node in result.file_nodes:
        file_node.edges.extend(build_import_edges(file_node, known_paths, settings))

    # file -> module
    modules_by_path = {module_node.path: module_node for module_node in result.module_nodes}
    for file_node in result.file_nodes:
        parent = modules_by_path.get(posixpath.dirname(file_node.path))
        if parent is not None:
            file_node.edges.append(build_parent_edge(file_node, parent))

    # source -> test, then imported -> importer
    attach_owned_edges(result.file_nodes, build_test_file_edges(result.file_nodes, settings))
    attach_owned_edges(result.file_nodes, build_dependent_edges(result.file_nodes))
    logger.info("Built edges")

    compute_metadata(result.all_nodes, now)
    logger.info("Computed metadata")

    return result
