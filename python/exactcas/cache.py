# ExactCAS - Derived Property Cache
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Identity-keyed side table for lazily computed node properties.

Expression nodes are immutable, so anything derived from a node (its
children, size, free variables, evaluated form, ...) can be computed once and
reused. The table is keyed by object identity rather than structural
equality: two equal but distinct trees keep separate entries.

Entries are dropped when their node is garbage collected. Dropping an entry
early is always safe because every value is a pure function of the node.
"""

from __future__ import annotations
import weakref
from typing import Any, Callable, Dict, TypeVar

from .exceptions import InvariantError


T = TypeVar('T')

# Marker for a field that has not been computed yet
_MISSING = object()

# Names of the cached properties, one slot each
FIELDS = (
    'direct_children',
    'is_finite',
    'complexity',
    'vars_and_consts',
    'simplified_rate',
    'evaled',
)


class _Entry:
    """Cached fields of one node. Every field is written at most once."""

    __slots__ = FIELDS

    def __init__(self):
        for name in FIELDS:
            setattr(self, name, _MISSING)


class NodeCache:
    """
    Side table of derived properties keyed by node identity.

    Concurrent readers are safe. Two threads may compute the same field at
    the same time; the first stored value wins and both get it back.
    """

    def __init__(self):
        self._entries: Dict[int, _Entry] = {}

    def _entry(self, node: object) -> _Entry:
        key = id(node)
        entry = self._entries.get(key)
        if entry is not None:
            return entry
        entry = self._entries.setdefault(key, _Entry())
        # Only the winning insert registers the eviction hook
        if self._entries[key] is entry:
            weakref.finalize(node, self._entries.pop, key, None)
        return self._entries[key]

    def get_value(self, node: object, name: str, compute: Callable[[], T]) -> T:
        """
        Return the cached `name` of `node`, computing it on first access.

        Raises:
            InvariantError: If `compute` produced None.
        """
        entry = self._entry(node)
        value = getattr(entry, name)
        if value is _MISSING:
            value = compute()
            if value is None:
                raise InvariantError(f"{name} of {type(node).__name__} cannot be None")
            # Keep the first value if another thread got there before us
            current = getattr(entry, name)
            if current is _MISSING:
                setattr(entry, name, value)
            else:
                value = current
        return value

    def peek(self, node: object, name: str, default: Any = None) -> Any:
        """Return the cached value without computing it."""
        entry = self._entries.get(id(node))
        if entry is None:
            return default
        value = getattr(entry, name)
        return default if value is _MISSING else value

    def evict(self, node: object) -> None:
        """Forget everything cached for `node`."""
        self._entries.pop(id(node), None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, node: object) -> bool:
        return id(node) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Process-wide table used by every Entity
caches = NodeCache()
