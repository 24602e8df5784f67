"""
Persistence for built graph nodes.
"""
from typing import Iterable, List

from ..types import WikiNode
from .json_node_store import JsonNodeStore, DEFAULT_COLLECTION


def store_nodes(store: JsonNodeStore, nodes: Iterable[WikiNode], collection: str = DEFAULT_COLLECTION) -> int:
    """Upsert whole node records by id. Returns the number written."""
    return store.upsert_many((node.to_dict() for node in nodes), collection)


def load_nodes(store: JsonNodeStore, collection: str = DEFAULT_COLLECTION) -> List[WikiNode]:
    """Read every stored node back."""
    return [WikiNode.from_dict(record) for record in store.find_all(collection)]


__all__ = [
    'JsonNodeStore',
    'DEFAULT_COLLECTION',
    'store_nodes',
    'load_nodes',
]
