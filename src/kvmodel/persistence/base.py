"""
kvmodel Persistence Layer - Base Classes

This module provides the abstract interface for record stores.
"""

import json
from datetime import datetime, timezone
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from pydantic_core import to_jsonable_python

from ..errors import StoreError

Record = Dict[str, Any]


class RecordStore(ABC):
    """
    Abstract base class for record stores.

    A store keeps JSON-serializable records keyed by their ``id`` inside one
    namespace (usually the model name). Every record handed out is a fresh
    copy, so callers never share mutable state through the store.
    """

    def __init__(self, namespace: str):
        """
        Initialize the store for one namespace.

        Args:
            namespace: Name that scopes the records of this store
        """
        if not namespace:
            raise ValueError("A record store needs a non-empty namespace")
        self.namespace = namespace

    @abstractmethod
    def get(self, record_id: str) -> Optional[Record]:
        """
        Load a record by id.

        Args:
            record_id: Unique identifier of the record

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    def list(self) -> List[Record]:
        """
        Load every record of the namespace in insertion order.

        Returns:
            List of records, soft-deleted ones included
        """
        pass

    @abstractmethod
    def create(self, record: Record) -> Record:
        """
        Store a new record.

        Args:
            record: Record with its ``id`` already assigned

        Returns:
            The stored record

        Raises:
            DuplicateRecordError: if a record with the same id exists
        """
        pass

    @abstractmethod
    def update(self, record_id: str, changes: Record) -> Optional[Record]:
        """
        Merge changes into an existing record.

        Args:
            record_id: Unique identifier of the record
            changes: Partial record; its keys overwrite the stored ones

        Returns:
            The merged record, or None if the id is unknown
        """
        pass

    @abstractmethod
    def replace(self, record_id: str, record: Record) -> Optional[Record]:
        """
        Overwrite a stored record with a complete new version.

        Keys missing from ``record`` are removed from the stored record.

        Args:
            record_id: Unique identifier of the record
            record: The full record to store

        Returns:
            The stored record, or None if the id is unknown
        """
        pass

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """
        Remove a record permanently.

        Returns:
            True if a record was removed, False if the id was unknown
        """
        pass

    @abstractmethod
    def truncate(self) -> None:
        """Remove every record of the namespace."""
        pass

    def find(self, filters: Mapping[str, Any], first_only: bool = False) -> List[Record]:
        """
        Load the records whose fields equal every value in ``filters``.

        Args:
            filters: Stored keys and the values they must equal
            first_only: Stop at the first match

        Returns:
            Matching records in iteration order (at most one if first_only)
        """
        matches = []
        for record in self.list():
            if self.matches(record, filters):
                matches.append(record)
                if first_only:
                    break
        return matches

    def bulk_create(self, records: List[Record]) -> List[Record]:
        """
        Store several new records.

        Returns:
            The stored records, in the order given
        """
        return [self.create(record) for record in records]

    def soft_delete(self, record_id: str, deleted_at: Optional[str] = None) -> bool:
        """
        Mark a record deleted by setting ``deletedAt``, keeping it stored.

        Args:
            record_id: Unique identifier of the record
            deleted_at: Marker to store; defaults to the current UTC time

        Returns:
            True if the record was marked, False if the id was unknown
        """
        if deleted_at is None:
            deleted_at = to_jsonable_python(datetime.now(timezone.utc))
        return self.update(record_id, {"deletedAt": deleted_at}) is not None

    def exists(self, record_id: str) -> bool:
        """Check if a record with this id is stored."""
        return self.get(record_id) is not None

    def count(self) -> int:
        """Number of records in the namespace."""
        return len(self.list())

    @staticmethod
    def matches(record: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
        """Check if a record matches every filter value exactly."""
        for key, value in filters.items():
            if key not in record or record[key] != value:
                return False
        return True

    def _dumps(self, record: Record) -> str:
        """Serialize a record, failing loudly on values JSON cannot hold."""
        try:
            return json.dumps(record)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Record in {self.namespace!r} is not JSON-serializable: {e}") from e

    @staticmethod
    def _require_id(record: Mapping[str, Any]) -> str:
        record_id = record.get("id")
        if not record_id:
            raise StoreError("Records must have an id before they are stored")
        return record_id

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(namespace={self.namespace!r})"
