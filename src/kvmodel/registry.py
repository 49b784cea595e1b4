"""
Model Registry

Tracks the models of an application so cross-cutting operations, such as
wiping every model's records, can reach all of them. A registry is an
explicit object: create one at startup and pass it to the models.
"""

import logging
from typing import Iterator, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .core.model import Model

logger = logging.getLogger(__name__)


class ModelRegistry:
    """
    Registry of live models.

    Several models may share a name (for instance two views over the same
    schema); the registry tracks model objects, not names.
    """

    def __init__(self):
        self._models: List["Model"] = []

    def register(self, model: "Model") -> None:
        """Register a model. Registering the same model twice has no effect."""
        if model in self:
            return
        self._models.append(model)
        logger.info(f"Registered model {model.name} on {model.store!r}")

    def unregister(self, model: "Model") -> bool:
        """
        Stop tracking a model.

        Returns:
            True if the model was registered
        """
        for index, registered in enumerate(self._models):
            if registered is model:
                del self._models[index]
                logger.info(f"Unregistered model {model.name}")
                return True
        return False

    def find(self, name: str) -> List["Model"]:
        """Registered models with this name, in registration order."""
        return [model for model in self._models if model.name == name]

    def models(self) -> List["Model"]:
        return list(self._models)

    def reset(self) -> None:
        """Truncate every registered model's records."""
        logger.info(f"Resetting {len(self._models)} model(s)")
        for model in self._models:
            model.truncate()

    def clear(self) -> None:
        """Forget every registered model without touching their records."""
        self._models.clear()

    def __contains__(self, model: object) -> bool:
        return any(registered is model for registered in self._models)

    def __iter__(self) -> Iterator["Model"]:
        return iter(self.models())

    def __len__(self) -> int:
        return len(self._models)
