"""
Record: a live, self-persisting record.

A Record pairs the field values of one stored (or not yet stored) record
with the context of the model that built it: its name, schema, store and
settings. ``save()`` and ``delete()`` act on the record's own id.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from ..persistence.base import RecordStore
from .mixins import FieldsMixin, PersistenceMixin
from .schema import Schema, default_values, field_values, FieldData
from .settings import ModelSettings

T = TypeVar("T", bound=Schema)


@dataclass(frozen=True)
class ModelContext(Generic[T]):
    """What a record needs from its model to persist itself."""
    name: str
    schema: Type[T]
    store: RecordStore
    settings: ModelSettings


class Record(FieldsMixin, PersistenceMixin, Generic[T]):
    """
    A record value with bound persist and remove operations.

    Records built from the same stored record are independent copies:
    saving one does not touch the other, and whichever saves last wins.

    Example:
        ```python
        person = people.build({"name": "Ada"})
        person.age = 36
        person.save()       # created, person.id is now set
        person.age = 37
        person.save()       # rewritten in full
        person.delete()
        ```
    """

    def __init__(self, context: ModelContext[T], fields: Optional[Dict[str, Any]] = None):
        self._context = context
        self._fields = dict(fields) if fields is not None else {}

    @classmethod
    def build(cls, context: ModelContext[T], data: Optional[FieldData] = None) -> "Record[T]":
        """
        Build an unsaved record from schema defaults overlaid with ``data``.

        Nothing is validated or written; a record built without an id gets
        one on its first save.
        """
        fields = default_values(context.schema)
        fields.update(field_values(context.schema, data))
        return cls(context, fields)

    @classmethod
    def from_stored(cls, context: ModelContext[T], stored: Dict[str, Any]) -> "Record[T]":
        """Wrap a record returned by the store."""
        record = cls(context)
        record.refresh_from(stored)
        return record

    @property
    def model_name(self) -> str:
        return self._context.name
