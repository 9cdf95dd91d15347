from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Any, Callable, Iterable, TypeVar

from .errors import HandlerRegistrationError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "pancakes.launchers"

HandlerFactory = Callable[[Any], Any]
F = TypeVar("F", bound=HandlerFactory)


@dataclass(frozen=True)
class HandlerEntry:
    label: str
    factory: HandlerFactory
    validates: bool


class HandlerRegistry:
    """Label -> factory table, in registration order.

    Launchers register themselves at import time; dispatch only reads it.
    """

    def __init__(self) -> None:
        self._entries: dict[str, HandlerEntry] = {}

    def register(self, factory: HandlerFactory, *, label: str | None = None, validates: bool | None = None) -> HandlerEntry:
        label = label or str(getattr(factory, "label", "") or "")
        if not label:
            raise HandlerRegistrationError(
                code="HANDLER_REGISTRATION",
                message=f"handler factory has no label: {factory!r}",
            )
        existing = self._entries.get(label)
        if existing is not None:
            if existing.factory is factory:
                return existing
            raise HandlerRegistrationError(
                code="HANDLER_REGISTRATION",
                message=f"handler label already registered: {label}",
            )
        if validates is None:
            validates = callable(getattr(factory, "validate", None))
        entry = HandlerEntry(label=label, factory=factory, validates=validates)
        self._entries[label] = entry
        logger.debug("Registered handler %s (validates=%s)", label, validates)
        return entry

    def discover(self) -> tuple[HandlerEntry, ...]:
        return tuple(self._entries.values())

    def labels(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, label: object) -> bool:
        return label in self._entries

    def __len__(self) -> int:
        return len(self._entries)


REGISTRY = HandlerRegistry()


def register_handler(factory: F) -> F:
    REGISTRY.register(factory)
    return factory


def load_handler_modules(module_names: Iterable[str]) -> list[str]:
    """Import modules whose import registers handlers. Returns the names imported."""
    imported: list[str] = []
    for name in module_names:
        if not name:
            continue
        importlib.import_module(name)
        imported.append(name)
    return imported


def load_entry_point_handlers(registry: HandlerRegistry = REGISTRY, group: str = ENTRY_POINT_GROUP) -> list[str]:
    """Load installed third-party launchers published under ``group``.

    An entry point may name a module (registering on import) or a handler
    class, which is registered here.
    """
    loaded: list[str] = []
    for ep in entry_points(group=group):
        obj = ep.load()
        if isinstance(obj, type) and getattr(obj, "label", None):
            registry.register(obj)
        loaded.append(ep.name)
    return loaded
