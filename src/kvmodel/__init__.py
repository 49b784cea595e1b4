"""
kvmodel - Active Records over Key-Value Stores

Turns plain JSON records kept in a key-value store into live objects that
know their own identity and can save or delete themselves.
"""

from .core import (
    Model,
    ModelContext,
    ModelSettings,
    Record,
    RecordCollection,
    Schema,
)
from .errors import BulkSaveError, DuplicateRecordError, KVModelError, StoreError
from .persistence import (
    MemoryStorage,
    MemoryStore,
    RecordStore,
    SQLModelStore,
    create_store,
    get_memory_storage,
)
from .registry import ModelRegistry

__version__ = "0.1.0"

__all__ = [
    # Core
    "Model",
    "ModelContext",
    "ModelSettings",
    "Record",
    "RecordCollection",
    "Schema",

    # Registry
    "ModelRegistry",

    # Persistence
    "RecordStore",
    "MemoryStorage",
    "MemoryStore",
    "SQLModelStore",
    "create_store",
    "get_memory_storage",

    # Errors
    "KVModelError",
    "StoreError",
    "DuplicateRecordError",
    "BulkSaveError",
]
