"""Lifecycle hooks for Gorgon.

A hook is a named list of callbacks that run, in registration order, when the
site reaches a given point. Callbacks receive the site Config so they can add
pages, data or settings.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .indifferent import canonical_key

if TYPE_CHECKING:
    from .config import Config

AFTER_LOAD_DATA = "after_load_data"

HookCallback = Callable[["Config"], Any]


class HookRegistry:
    """Append-only registry of named callback lists."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[HookCallback]] = {}

    def add(self, name: Any, callback: HookCallback) -> None:
        self._hooks.setdefault(canonical_key(name), []).append(callback)

    def callbacks(self, name: Any) -> list[HookCallback]:
        return list(self._hooks.get(canonical_key(name), []))

    def run(self, name: Any, config: Config) -> None:
        """Run every callback registered under ``name`` with ``config``."""
        for callback in self.callbacks(name):
            callback(config)

    def __contains__(self, name: object) -> bool:
        return canonical_key(name) in self._hooks
