"""Registries of reaction models and intervention strategies.

Additional reaction networks or intervention policies can be plugged in by
key; the generator resolves ``GeneratorConfig.reaction_model`` and
``GeneratorConfig.intervention`` through these tables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from kinetix_bench.exceptions import RegistryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry:
    """Keyed table of component classes.

    Example:
        >>> MODEL_REGISTRY = Registry("models")
        >>> @MODEL_REGISTRY.register("my_network")
        ... class MyNetwork(AbstractReactionModel):
        ...     ...
        >>> model = MODEL_REGISTRY.create("my_network")
    """

    def __init__(self, name: str):
        self.name = name
        self._entries: dict[str, type[Any]] = {}

    def register(self, key: str) -> Callable[[type[T]], type[T]]:
        """Class decorator adding the class under ``key``; re-registering replaces it."""

        def decorator(cls: type[T]) -> type[T]:
            if key in self._entries:
                logger.warning(f"Overwriting existing {self.name} registry entry: {key}")
            self._entries[key] = cls
            logger.debug(f"Registered {self.name}: {key} -> {cls.__name__}")
            return cls

        return decorator

    def get(self, key: str) -> type[Any]:
        """Class registered under ``key``.

        Raises:
            RegistryError: If nothing is registered under ``key``.
        """
        try:
            return self._entries[key]
        except KeyError:
            available = ", ".join(self.list_keys())
            raise RegistryError(
                f"'{key}' not found in {self.name} registry. Available: {available}"
            ) from None

    def create(self, key: str, *args: Any, **kwargs: Any) -> Any:
        """Instantiate the class registered under ``key``."""
        return self.get(key)(*args, **kwargs)

    def list_keys(self) -> list[str]:
        return sorted(self._entries)

    def describe(self) -> dict[str, str]:
        """First docstring line of every entry, keyed and sorted by key."""
        summary = {}
        for key in self.list_keys():
            doc = (self._entries[key].__doc__ or "").strip()
            summary[key] = doc.splitlines()[0] if doc else ""
        return summary

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        keys = ", ".join(self.list_keys())
        return f"Registry('{self.name}', keys=[{keys}])"


MODEL_REGISTRY = Registry("models")
INTERVENTION_REGISTRY = Registry("interventions")


__all__ = ["Registry", "MODEL_REGISTRY", "INTERVENTION_REGISTRY"]
