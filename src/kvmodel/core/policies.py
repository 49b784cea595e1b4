"""
Model Policies

Timestamp and soft-delete policies as plain functions of ModelSettings.
They operate on records in stored form and compose independently.
"""

import logging
from typing import Any, Dict, TYPE_CHECKING

from pydantic_core import to_jsonable_python

from .schema import utc_now
from .settings import ModelSettings

if TYPE_CHECKING:
    from ..persistence.base import RecordStore

logger = logging.getLogger(__name__)

CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"
DELETED_AT = "deletedAt"


def apply_create_timestamp(settings: ModelSettings, data: Dict[str, Any]) -> Dict[str, Any]:
    """Stamp ``createdAt`` on a record about to be stored for the first time."""
    if settings.timestamps:
        data[CREATED_AT] = to_jsonable_python(utc_now())
    return data


def apply_update_timestamp(settings: ModelSettings, data: Dict[str, Any]) -> Dict[str, Any]:
    """Stamp ``updatedAt`` on a record whose fields are being rewritten."""
    if settings.timestamps:
        data[UPDATED_AT] = to_jsonable_python(utc_now())
    return data


def keep_created_at(current: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    """Carry the stored ``createdAt`` into a rewrite; it never changes after creation."""
    if CREATED_AT in current:
        data[CREATED_AT] = current[CREATED_AT]
    else:
        data.pop(CREATED_AT, None)
    return data


def delete_record(settings: ModelSettings, store: "RecordStore", record_id: str) -> bool:
    """Soft or hard delete, depending on the model's settings."""
    if settings.soft_delete:
        logger.debug(f"Soft deleting {record_id} in {store.namespace}")
        return store.soft_delete(record_id, to_jsonable_python(utc_now()))
    logger.debug(f"Deleting {record_id} in {store.namespace}")
    return store.delete(record_id)
