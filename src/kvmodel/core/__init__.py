"""
kvmodel Core Module

Record lifecycle: schemas, live records, record collections, models and
the policies they apply.
"""

from .collection import RecordCollection
from .model import Model
from .policies import apply_create_timestamp, apply_update_timestamp, delete_record
from .record import ModelContext, Record
from .schema import Schema, new_id, utc_now
from .settings import ModelSettings

__all__ = [
    "Model",
    "ModelContext",
    "ModelSettings",
    "Record",
    "RecordCollection",
    "Schema",
    "apply_create_timestamp",
    "apply_update_timestamp",
    "delete_record",
    "new_id",
    "utc_now",
]
