"""
kvmodel Persistence Module

Record stores for different storage backends, and a factory that picks
one from a store URL.
"""

import os
from typing import Optional

from ..errors import StoreError
from .base import RecordStore
from .memory import MemoryStorage, MemoryStore, get_memory_storage
from .sql import SQLModelStore, StoredRecord

STORE_URL_ENV = "KVMODEL_STORE_URL"
DEFAULT_STORE_URL = "memory://"


def default_store_url() -> str:
    """Store URL from the environment, falling back to the shared memory storage."""
    return os.environ.get(STORE_URL_ENV) or DEFAULT_STORE_URL


def create_store(namespace: str, url: Optional[str] = None) -> RecordStore:
    """
    Create a record store for a namespace from a store URL.

    Args:
        namespace: Name that scopes the records, usually the model name
        url: ``memory://`` for the shared in-process storage, or a SQLAlchemy
            URL such as ``sqlite:///records.db``. Defaults to the value of
            ``KVMODEL_STORE_URL``.

    Returns:
        A record store bound to the namespace

    Raises:
        StoreError: if the URL scheme is not supported
    """
    url = url or default_store_url()
    scheme = url.split("://", 1)[0].split("+", 1)[0].lower()
    if scheme == "memory":
        return MemoryStore(namespace)
    if scheme in ("sqlite", "postgresql", "mysql"):
        return SQLModelStore(namespace, database_url=url)
    raise StoreError(f"Unknown store URL: {url}")


__all__ = [
    "RecordStore",
    "MemoryStorage",
    "MemoryStore",
    "get_memory_storage",
    "SQLModelStore",
    "StoredRecord",
    "create_store",
    "default_store_url",
    "STORE_URL_ENV",
]
