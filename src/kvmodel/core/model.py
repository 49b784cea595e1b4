"""
Model: the facade over one schema, one record store and one settings object.

The model shapes raw data into live records, applies the timestamp and
soft-delete policies, and forwards lookups to the store.
"""

import logging
from typing import (
    Any, Generic, Iterable, List, Mapping, Optional, Type, TypeVar, Union, TYPE_CHECKING
)

from ..persistence import RecordStore, create_store
from .collection import RecordCollection
from .policies import CREATED_AT, apply_create_timestamp, apply_update_timestamp, delete_record
from .record import ModelContext, Record
from .schema import (
    FieldData, Schema, field_values, new_id, to_storage, to_storage_partial
)
from .settings import ModelSettings

if TYPE_CHECKING:
    from ..registry import ModelRegistry

T = TypeVar("T", bound=Schema)

logger = logging.getLogger(__name__)

Settings = Union[ModelSettings, Mapping[str, Any], None]


class Model(Generic[T]):
    """
    Builds, creates and looks up records of one schema.

    Example:
        ```python
        class Person(Schema):
            name: str
            age: int = 0

        people = Model("person", Person, settings={"soft_delete": True})
        ada = people.create({"name": "Ada", "age": 36})
        ada.age = 37
        ada.save()
        people.delete(ada.id)
        ```

    Lookups that find nothing return None; check before use.
    """

    def __init__(self, name: str, schema: Type[T] = Schema,
                 store: Optional[RecordStore] = None,
                 settings: Settings = None,
                 registry: Optional["ModelRegistry"] = None):
        """
        Create a model.

        Args:
            name: Model name; also the store namespace when no store is given
            schema: Schema subclass describing the record fields
            store: Record store; defaults to ``create_store(name)``
            settings: ModelSettings or a mapping such as ``{"timestamps": True}``
            registry: Registry to notify of the new model

        Raises:
            ValueError: if a schema field shares its name with a Record
                attribute such as ``save`` or ``fields``
        """
        clashes = sorted(field for field in schema.model_fields if hasattr(Record, field))
        if clashes:
            raise ValueError(
                f"{schema.__name__} fields clash with Record attributes: {', '.join(clashes)}"
            )
        self.name = name
        self.schema = schema
        self.store = store if store is not None else create_store(name)
        self.settings = ModelSettings.coerce(settings)
        self._context: ModelContext[T] = ModelContext(
            name=name, schema=schema, store=self.store, settings=self.settings
        )
        self.registry = registry
        if registry is not None:
            registry.register(self)

    def build(self, data: Optional[FieldData] = None) -> Record[T]:
        """Build an unsaved record; nothing is written to the store."""
        return Record.build(self._context, data)

    def build_many(self, items: Iterable[FieldData]) -> RecordCollection[T]:
        """Build an unsaved record for each item, keeping their order."""
        return RecordCollection(self.build(item) for item in items)

    def create(self, data: FieldData) -> Record[T]:
        """
        Create and store one record.

        The record gets a fresh id and, with timestamps enabled, ``created_at``.

        Raises:
            pydantic.ValidationError: if the data does not fit the schema
        """
        stored = self.store.create(self._prepare_new(data))
        return self._wrap(stored)

    def create_many(self, items: Iterable[FieldData]) -> RecordCollection[T]:
        """Create and store several records with one bulk store call."""
        records = [self._prepare_new(item) for item in items]
        return self._wrap_many(self.store.bulk_create(records))

    def list(self) -> RecordCollection[T]:
        """Every stored record, soft-deleted ones included."""
        return self._wrap_many(self.store.list())

    def find(self, **filters: Any) -> RecordCollection[T]:
        """Records whose fields equal every given value."""
        return self._wrap_many(self.store.find(self._filters(filters)))

    def find_one(self, **filters: Any) -> Optional[Record[T]]:
        """
        First record whose fields equal every given value, or None.

        When several records match, the one returned is the first in the
        store's iteration order. Both bundled stores iterate in insertion
        order; other stores may not.
        """
        matches = self.store.find(self._filters(filters), first_only=True)
        return self._wrap(matches[0]) if matches else None

    def get(self, record_id: str) -> Optional[Record[T]]:
        """Record with this id, or None."""
        stored = self.store.get(record_id)
        return self._wrap(stored) if stored is not None else None

    def find_by_id(self, record_id: str) -> Optional[Record[T]]:
        """Alias of ``get``."""
        return self.get(record_id)

    def update(self, record_id: str, data: FieldData) -> Optional[Record[T]]:
        """
        Merge ``data`` into a stored record.

        With timestamps enabled, ``updated_at`` is set. The id and
        ``created_at`` are never changed.

        Returns:
            The merged record, or None if the id is unknown
        """
        changes = to_storage_partial(self.schema, field_values(self.schema, data))
        changes.pop("id", None)
        changes.pop(CREATED_AT, None)
        apply_update_timestamp(self.settings, changes)
        stored = self.store.update(record_id, changes)
        return self._wrap(stored) if stored is not None else None

    def delete(self, record_id: str) -> bool:
        """Delete a record, softly if the model uses soft delete."""
        return delete_record(self.settings, self.store, record_id)

    def truncate(self) -> None:
        """Remove every record, whatever the soft-delete setting."""
        logger.debug(f"Truncating model {self.name}")
        self.store.truncate()

    def exists(self, record_id: str) -> bool:
        return self.store.exists(record_id)

    def count(self) -> int:
        return self.store.count()

    def _prepare_new(self, data: FieldData) -> dict:
        values = field_values(self.schema, data)
        values["id"] = new_id()
        stored = to_storage(self.schema, values)
        return apply_create_timestamp(self.settings, stored)

    def _filters(self, filters: Mapping[str, Any]) -> dict:
        return to_storage_partial(self.schema, filters)

    def _wrap(self, stored: dict) -> Record[T]:
        return Record.from_stored(self._context, stored)

    def _wrap_many(self, stored: List[dict]) -> RecordCollection[T]:
        return RecordCollection(self._wrap(item) for item in stored)

    def __repr__(self) -> str:
        return (f"Model(name={self.name!r}, schema={self.schema.__name__}, "
                f"store={self.store!r}, settings={self.settings!r})")
