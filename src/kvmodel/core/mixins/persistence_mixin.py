"""
PersistenceMixin: save, delete and exists for a single record.

The store and settings come from the record's model context, captured when
the record was built. Field values are read when the operation runs.
"""

import logging
from typing import Optional, TYPE_CHECKING

from ..policies import (
    apply_create_timestamp, apply_update_timestamp, delete_record, keep_created_at
)
from ..schema import from_storage, new_id, to_storage

if TYPE_CHECKING:
    from ..record import ModelContext

logger = logging.getLogger(__name__)


class PersistenceMixin:
    """
    Persistence operations mixin.

    Provides save, delete and exists against the store of the record's
    model context.
    """

    _context: "ModelContext"

    @property
    def is_persisted(self) -> bool:
        """Whether the record has an id, i.e. was saved or created."""
        return bool(self._fields.get("id"))

    @property
    def is_deleted(self) -> bool:
        """Whether the record carries a soft-delete marker."""
        return self._fields.get("deleted_at") is not None

    def save(self):
        """
        Write the record's current field values to the store.

        A record without an id is created: it gets a fresh id and, with
        timestamps enabled, ``created_at``. A record with an id replaces the
        stored version in full, so fields cleared in memory are cleared in
        the store too; only ``created_at`` is kept from the stored version.
        With timestamps enabled it gets a new ``updated_at``.

        Returns:
            The record itself, refreshed from the stored result
        """
        context = self._context
        if not self.is_persisted:
            data = to_storage(context.schema, {**self._fields, "id": new_id()})
            apply_create_timestamp(context.settings, data)
            stored = context.store.create(data)
        else:
            data = to_storage(context.schema, self._fields)
            record_id = data["id"]
            current = context.store.get(record_id)
            apply_update_timestamp(context.settings, data)
            if current is None:
                # Removed from the store since it was read; last save wins
                logger.debug(f"{context.name}/{record_id} is gone, storing it again")
                stored = context.store.create(data)
            else:
                stored = context.store.replace(record_id, keep_created_at(current, data))
        self.refresh_from(stored)
        return self

    def delete(self) -> bool:
        """
        Remove the record from the store, softly if the model says so.

        After a soft delete the record's ``deleted_at`` holds the stored
        marker, so saving it again keeps the record marked.

        Returns:
            The store's confirmation; False for a record that was never saved
        """
        context = self._context
        record_id: Optional[str] = self._fields.get("id")
        if not record_id:
            logger.debug(f"Ignoring delete of an unsaved {context.name} record")
            return False
        confirmed = delete_record(context.settings, context.store, record_id)
        if confirmed and context.settings.soft_delete:
            stored = context.store.get(record_id)
            if stored is not None:
                self._fields["deleted_at"] = from_storage(context.schema, stored)["deleted_at"]
        return confirmed

    def exists(self) -> bool:
        """Check if the record is present in the store."""
        record_id = self._fields.get("id")
        return bool(record_id) and self._context.store.exists(record_id)
