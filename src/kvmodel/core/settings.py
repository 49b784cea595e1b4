"""
Model Settings

Per-model policy switches. Both policies are off unless enabled.
"""

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ModelSettings(BaseModel):
    """Policies applied by a model to every record it writes."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timestamps: bool = False
    soft_delete: bool = Field(default=False, alias="softDelete")

    @classmethod
    def coerce(cls, settings: Optional[Union["ModelSettings", Mapping[str, Any]]]) -> "ModelSettings":
        """Accept settings as an instance, a mapping or None."""
        if settings is None:
            return cls()
        if isinstance(settings, cls):
            return settings
        return cls.model_validate(settings)
