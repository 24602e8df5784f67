"""
Builds the knowledge graph of file, function and module nodes from fact records.
"""

from .nodes import build_file_node, build_function_node, build_module_node, build_test_command
from .selection import should_create_function_node, should_create_module_node, is_test_file, logical_unit_name
from .edges import (
    attach_owned_edges,
    build_contains_edges,
    build_dependent_edges,
    build_import_edges,
    build_parent_edge,
    build_test_file_edges,
    resolve_import,
)
from .metrics import calculate_age, calculate_fan_in, calculate_fan_out, calculate_recency, compute_metadata
from .graph import BuildResult, build_graph

__all__ = [
    'build_file_node',
    'build_function_node',
    'build_module_node',
    'build_test_command',
    'should_create_function_node',
    'should_create_module_node',
    'is_test_file',
    'logical_unit_name',
    'attach_owned_edges',
    'build_contains_edges',
    'build_dependent_edges',
    'build_import_edges',
    'build_parent_edge',
    'build_test_file_edges',
    'resolve_import',
    'calculate_age',
    'calculate_fan_in',
    'calculate_fan_out',
    'calculate_recency',
    'compute_metadata',
    'BuildResult',
    'build_graph',
]
