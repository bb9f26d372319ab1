"""Mappings with representation-indifferent keys.

Settings, page attributes, data bags and template locals may be written with a
plain string key or with an Enum member and read back either way. Keys are
normalized once, when they are stored, so lookups never fall back to a second
representation.

Functions:
    canonical_key: Normalize a key to its stored form.
    indifferent: Recursively convert mappings inside a value.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any


def canonical_key(key: Any) -> Any:
    """Return the stored form of a key.

    Enum members are stored by value when the value is a string and by name
    otherwise. Every other key is returned unchanged.

    Examples:
        >>> canonical_key("mode")
        'mode'
    """
    if isinstance(key, Enum):
        return key.value if isinstance(key.value, str) else key.name
    return key


def indifferent(value: Any) -> Any:
    """Convert nested mappings inside ``value`` to IndifferentDict.

    Lists and tuples are walked so mappings inside sequences are converted
    too. Mappings are always copied, so the result never shares a nested
    mapping with ``value``. Other values are returned as-is.
    """
    if isinstance(value, Mapping):
        return IndifferentDict(value)
    if isinstance(value, list):
        return [indifferent(item) for item in value]
    if isinstance(value, tuple):
        return tuple(indifferent(item) for item in value)
    return value


class IndifferentDict(dict):
    """A dict whose keys are normalized with canonical_key on every access.

    Nested mappings are converted when they are stored. Being a real dict,
    instances serialize with json.dumps and work as Jinja2 globals.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__()
        self.update(*args, **kwargs)

    def __setitem__(self, key: Any, value: Any) -> None:
        super().__setitem__(canonical_key(key), indifferent(value))

    def __getitem__(self, key: Any) -> Any:
        return super().__getitem__(canonical_key(key))

    def __delitem__(self, key: Any) -> None:
        super().__delitem__(canonical_key(key))

    def __contains__(self, key: object) -> bool:
        return super().__contains__(canonical_key(key))

    def get(self, key: Any, default: Any = None) -> Any:
        return super().get(canonical_key(key), default)

    def pop(self, key: Any, *default: Any) -> Any:
        return super().pop(canonical_key(key), *default)

    def setdefault(self, key: Any, default: Any = None) -> Any:
        if key not in self:
            self[key] = default
        return self[key]

    def update(self, *args: Any, **kwargs: Any) -> None:
        if len(args) > 1:
            raise TypeError(f"update expected at most 1 argument, got {len(args)}")
        if args:
            other = args[0]
            items: Iterable = other.items() if isinstance(other, Mapping) else other
            for key, value in items:
                self[key] = value
        for key, value in kwargs.items():
            self[key] = value

    def copy(self) -> IndifferentDict:
        return IndifferentDict(self)

    def dig(self, *keys: Any) -> Any:
        """Follow ``keys`` through nested mappings, returning None on a miss."""
        current: Any = self
        for key in keys:
            if not isinstance(current, Mapping):
                return None
            current = current.get(canonical_key(key))
            if current is None:
                return None
        return current

    def __repr__(self) -> str:
        return f"IndifferentDict({dict.__repr__(self)})"
