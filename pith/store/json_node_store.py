from typing import List, Dict, Any, Optional, Iterable
import copy
import datetime
import json
from pathlib import Path

from ..errors import PithError, ErrorCode
from ..utils.logger import get_logger

DEFAULT_COLLECTION = "nodes"


class JsonNodeStore:
    """JSON-file document store with keyed collections and whole-record upserts."""

    def __init__(self, storage_path: str = ".pith/data/graph.json"):
        self.logger = get_logger("json_node_store")
        self.storage_path = Path(storage_path)
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self.data = self._load_data()

    def _initialize_data(self) -> Dict[str, Any]:
        """Initialize empty data structure."""
        return {
            "collections": {},
            "metadata": {
                "version": "1.0",
                "created_at": None,
                "updated_at": None
            }
        }

    def _load_data(self) -> Dict[str, Any]:
        """Load data from JSON file."""
        if not self.storage_path.exists():
            return self._initialize_data()

        try:
            with open(self.storage_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PithError(
                ErrorCode.STORE_ERROR,
                f"Could not read node store {self.storage_path}: {e}",
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("collections"), dict):
            raise PithError(ErrorCode.STORE_ERROR, f"Unrecognized node store format in {self.storage_path}")

        self.logger.info(f"Loaded node store from {self.storage_path}")
        return data

    def _save_data(self):
        """Save data to JSON file."""
        now = datetime.datetime.now(datetime.timezone.utc).isoformat()
        self.data["metadata"]["updated_at"] = now
        if not self.data["metadata"]["created_at"]:
            self.data["metadata"]["created_at"] = now

        try:
            with open(self.storage_path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise PithError(
                ErrorCode.STORE_ERROR,
                f"Could not write node store {self.storage_path}: {e}",
            ) from e
        self.logger.debug(f"Saved node store to {self.storage_path}")

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self.data["collections"].setdefault(name, {})

    def upsert(self, record: Dict[str, Any], collection: str = DEFAULT_COLLECTION) -> Dict[str, Any]:
        """Insert or replace a whole record by its id."""
        self._put(record, collection)
        self._save_data()
        return record

    def upsert_many(self, records: Iterable[Dict[str, Any]], collection: str = DEFAULT_COLLECTION) -> int:
        """Insert or replace a batch of records, saving once."""
        count = 0
        for record in records:
            self._put(record, collection)
            count += 1
        self._save_data()
        self.logger.info(f"Upserted {count} records into '{collection}'")
        return count

    def _put(self, record: Dict[str, Any], collection: str):
        record_id = record.get("id")
        if not record_id:
            raise PithError(ErrorCode.STORE_ERROR, "Cannot store a record without an id")
        self._collection(collection)[record_id] = copy.deepcopy(record)

    def find_by_id(self, record_id: str, collection: str = DEFAULT_COLLECTION) -> Optional[Dict[str, Any]]:
        """Find a record by id."""
        record = self.data["collections"].get(collection, {}).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def find_all(self, collection: str = DEFAULT_COLLECTION) -> List[Dict[str, Any]]:
        """Get all records in a collection."""
        return [copy.deepcopy(record) for record in self.data["collections"].get(collection, {}).values()]

    def count(self, collection: str = DEFAULT_COLLECTION) -> int:
        return len(self.data["collections"].get(collection, {}))

    def clear(self):
        """Clear all data from the store."""
        self.data = self._initialize_data()
        self._save_data()
        self.logger.info("Cleared all data from JSON node store")

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        stats = {}

        # Count records by collection and type
        for name, records in self.data["collections"].items():
            type_counts: Dict[str, int] = {}
            for record in records.values():
                record_type = record.get("type", "unknown")
                type_counts[record_type] = type_counts.get(record_type, 0) + 1
            stats[name] = type_counts

        return stats
