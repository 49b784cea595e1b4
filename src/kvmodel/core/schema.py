"""
Record Schema

Base shape every stored record extends, plus the conversions between
in-memory field values (snake_case names, Python types) and the stored
form (camelCase aliases, JSON types).
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import to_jsonable_python


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Schema(BaseModel):
    """
    Base class for record schemas.

    Subclass it and declare the record's own fields::

        class Person(Schema):
            name: str
            age: int = 0
            hobbies: List[str] = []

    The base fields are only present in storage once they hold a value,
    so a model without timestamps never writes ``createdAt``.

    Field names must not shadow Record attributes (``save``, ``delete``,
    ``exists``, ``fields``, ``to_dict``, ...); Model refuses such schemas.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
    deleted_at: Optional[datetime] = Field(default=None, alias="deletedAt")


BASE_FIELDS = tuple(Schema.model_fields)

FieldData = Union[Mapping[str, Any], BaseModel]


def field_name(schema: Type[Schema], key: str) -> str:
    """Resolve a field name or storage alias to the Python field name."""
    if key in schema.model_fields:
        return key
    for name, info in schema.model_fields.items():
        if info.alias == key:
            return name
    return key


def storage_key(schema: Type[Schema], key: str) -> str:
    """Resolve a field name or storage alias to the stored key."""
    name = field_name(schema, key)
    info = schema.model_fields.get(name)
    if info is not None and info.alias:
        return info.alias
    return name


def default_values(schema: Type[Schema]) -> Dict[str, Any]:
    """Field values of an empty record: every field that has a default."""
    return {
        name: info.get_default(call_default_factory=True)
        for name, info in schema.model_fields.items()
        if not info.is_required()
    }


def field_values(schema: Type[Schema], data: Optional[FieldData]) -> Dict[str, Any]:
    """Normalise caller data to a dict keyed by Python field names."""
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True)
    return {field_name(schema, key): value for key, value in data.items()}


def to_storage(schema: Type[Schema], values: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate field values against the schema and return the stored form.

    Raises:
        pydantic.ValidationError: if a required field is missing or invalid
    """
    stored = schema.model_validate(dict(values)).model_dump(mode="json", by_alias=True)
    for name in BASE_FIELDS:
        key = storage_key(schema, name)
        if stored.get(key) is None:
            stored.pop(key, None)
    return stored


def to_storage_partial(schema: Type[Schema], values: Mapping[str, Any]) -> Dict[str, Any]:
    """Stored form of a partial record; keys are mapped, values are not validated."""
    return {storage_key(schema, key): to_jsonable_python(value) for key, value in values.items()}


def from_storage(schema: Type[Schema], stored: Mapping[str, Any]) -> Dict[str, Any]:
    """Field values of a record read back from a store."""
    return schema.model_validate(dict(stored)).model_dump()
