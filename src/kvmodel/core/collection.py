"""
RecordCollection: an ordered list of records with a bulk save.
"""

import logging
from typing import Any, Dict, Generic, List, Tuple, TypeVar

from ..errors import BulkSaveError
from .schema import Schema

T = TypeVar("T", bound=Schema)

logger = logging.getLogger(__name__)


class RecordCollection(list, Generic[T]):
    """
    A list of records that can save all of its members.

    Order is insertion order and ``save()`` does not change it. The save is
    not atomic: every record is attempted in order, a failure does not undo
    the records written before it, and the records after it are still tried.
    """

    def save(self) -> "RecordCollection[T]":
        """
        Save every record in order.

        Returns:
            The collection itself

        Raises:
            BulkSaveError: after all records were attempted, if any failed
        """
        failures: List[Tuple[int, Exception]] = []
        for index, record in enumerate(self):
            try:
                record.save()
            except Exception as e:
                logger.warning(f"Saving record {index} of {len(self)} failed: {e}")
                failures.append((index, e))
        if failures:
            raise BulkSaveError(failures)
        return self

    @property
    def ids(self) -> List[str]:
        return [record.id for record in self]

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Every record in stored form."""
        return [record.to_dict() for record in self]

    def __getitem__(self, index):
        result = super().__getitem__(index)
        if isinstance(index, slice):
            return RecordCollection(result)
        return result

    def __repr__(self) -> str:
        return f"RecordCollection({list.__repr__(self)})"
