"""
kvmodel Persistence Layer - Memory Backend

In-process record store for development and testing. Records are kept as
JSON strings in a flat key/value storage, the way a browser keeps them in
``localStorage``, so every read hands back an independent copy.
"""

import json
import logging
from typing import Dict, Iterator, List, Optional

from ..errors import DuplicateRecordError
from .base import Record, RecordStore

logger = logging.getLogger(__name__)


class MemoryStorage:
    """
    Flat string key/value storage with a ``localStorage``-like API.

    Several stores can share one storage; each keeps its records under its
    own key prefix. Keys iterate in insertion order.
    """

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> List[str]:
        return list(self._items)

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._items)


_default_storage = MemoryStorage()


def get_memory_storage() -> MemoryStorage:
    """Get the process-wide storage shared by stores created without one."""
    return _default_storage


class MemoryStore(RecordStore):
    """
    Record store over a MemoryStorage.

    Each record lives under ``"<namespace>/<id>"``. Data is lost when the
    process exits.
    """

    def __init__(self, namespace: str, storage: Optional[MemoryStorage] = None):
        super().__init__(namespace)
        self.storage = storage if storage is not None else get_memory_storage()
        self._prefix = f"{namespace}/"

    def _key(self, record_id: str) -> str:
        return self._prefix + record_id

    def _load(self, key: str) -> Optional[Record]:
        raw = self.storage.get_item(key)
        if raw is None:
            return None
        return json.loads(raw)

    def _own_keys(self) -> List[str]:
        return [key for key in self.storage.keys() if key.startswith(self._prefix)]

    def get(self, record_id: str) -> Optional[Record]:
        return self._load(self._key(record_id))

    def list(self) -> List[Record]:
        return [json.loads(self.storage.get_item(key)) for key in self._own_keys()]

    def create(self, record: Record) -> Record:
        record_id = self._require_id(record)
        key = self._key(record_id)
        if key in self.storage:
            raise DuplicateRecordError(self.namespace, record_id)
        raw = self._dumps(record)
        self.storage.set_item(key, raw)
        logger.debug(f"Created {key}")
        return json.loads(raw)

    def update(self, record_id: str, changes: Record) -> Optional[Record]:
        key = self._key(record_id)
        current = self._load(key)
        if current is None:
            return None
        current.update(changes)
        current["id"] = record_id
        raw = self._dumps(current)
        self.storage.set_item(key, raw)
        logger.debug(f"Updated {key}")
        return json.loads(raw)

    def replace(self, record_id: str, record: Record) -> Optional[Record]:
        key = self._key(record_id)
        if key not in self.storage:
            return None
        raw = self._dumps({**record, "id": record_id})
        self.storage.set_item(key, raw)
        logger.debug(f"Replaced {key}")
        return json.loads(raw)

    def delete(self, record_id: str) -> bool:
        removed = self.storage.remove_item(self._key(record_id))
        if removed:
            logger.debug(f"Deleted {self._key(record_id)}")
        return removed

    def truncate(self) -> None:
        keys = self._own_keys()
        for key in keys:
            self.storage.remove_item(key)
        logger.debug(f"Truncated {self.namespace} ({len(keys)} records)")
