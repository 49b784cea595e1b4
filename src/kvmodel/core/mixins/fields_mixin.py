"""
FieldsMixin: attribute-style access to a record's field values.

Field values live in a plain dict owned by the record. Reads and writes of
schema fields go through that dict, so ``record.name = "x"`` is seen by the
next ``save()``.
"""

from typing import Any, Dict, TYPE_CHECKING

from ..schema import from_storage, to_storage

if TYPE_CHECKING:
    from ..record import ModelContext


class FieldsMixin:
    """
    Field access mixin.

    Expects ``_context`` (a ModelContext) and ``_fields`` (a dict keyed by
    Python field names) on the instance.
    """

    _context: "ModelContext"
    _fields: Dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails, i.e. for field names
        if name.startswith("_"):
            raise AttributeError(name)
        fields = self.__dict__.get("_fields", {})
        if name in fields:
            return fields[name]
        schema = self._context.schema
        if name in schema.model_fields:
            raise AttributeError(f"{schema.__name__}.{name} has no value yet")
        raise AttributeError(f"{schema.__name__} has no field {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        if hasattr(type(self), name):
            raise AttributeError(f"{name!r} is not a field and cannot be assigned")
        schema = self._context.schema
        if name not in schema.model_fields and schema.model_config.get("extra") != "allow":
            raise AttributeError(f"{schema.__name__} has no field {name!r}")
        if name == "id" and self._fields.get("id") and value != self._fields["id"]:
            raise AttributeError("id cannot be changed once assigned")
        self._fields[name] = value

    def __delattr__(self, name: str) -> None:
        if name in self._fields:
            raise AttributeError(f"Fields cannot be removed; assign None to {name!r} instead")
        object.__delattr__(self, name)

    @property
    def fields(self) -> Dict[str, Any]:
        """Copy of the current field values, keyed by Python field names."""
        return dict(self._fields)

    def to_dict(self) -> Dict[str, Any]:
        """The record in stored form: aliased keys, JSON values, validated."""
        return to_storage(self._context.schema, self._fields)

    def as_schema(self):
        """Validated schema instance holding the current field values."""
        return self._context.schema.model_validate(self._fields)

    def refresh_from(self, stored: Dict[str, Any]) -> None:
        """Replace the field values with a record read back from the store."""
        self._fields = from_storage(self._context.schema, stored)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldsMixin):
            return NotImplemented
        return (self._context.schema is other._context.schema
                and self._fields == other._fields)

    __hash__ = None

    def __repr__(self) -> str:
        values = ", ".join(f"{key}={value!r}" for key, value in self._fields.items())
        return f"{self._context.schema.__name__}({values})"
