"""
Core mixins for record functionality.

Field access and persistence are kept apart so each can be read and
tested on its own.
"""

from .fields_mixin import FieldsMixin
from .persistence_mixin import PersistenceMixin

__all__ = ["FieldsMixin", "PersistenceMixin"]
