"""
kvmodel Errors

Exception hierarchy shared by the stores, records and the registry.
Lookups that find nothing return None instead of raising.
"""

from typing import List, Tuple


class KVModelError(Exception):
    """Base exception for kvmodel operations"""
    pass


class StoreError(KVModelError):
    """Raised when a record store cannot complete an operation"""
    pass


class DuplicateRecordError(StoreError):
    """Raised when creating a record whose id is already stored"""

    def __init__(self, namespace: str, record_id: str):
        self.namespace = namespace
        self.record_id = record_id
        super().__init__(f"Record {record_id!r} already exists in {namespace!r}")


class BulkSaveError(KVModelError):
    """
    Raised after a collection save in which one or more records failed.

    Every record of the collection was attempted; the ones that are not
    listed in ``failures`` were written.
    """

    def __init__(self, failures: List[Tuple[int, Exception]]):
        self.failures = failures
        indexes = ", ".join(str(index) for index, _ in failures)
        super().__init__(f"{len(failures)} record(s) failed to save (index {indexes})")
