# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Weak, identity-keyed registry of objects and their absolute names.

By default the registry never keeps an object alive: both directions hold weak
references, and entries vanish once the object is garbage collected.
Registrations made with ``weak=False`` are held strongly until unregistered.
Objects are compared by identity, never by equality, so unhashable
objects and objects with a custom ``__eq__`` are handled consistently.

Only the first object registered under a given name is reachable from
that name; registering another object under the same name updates the
object side only.

Example:
    >>> class Frame: pass
    >>> registry = ObjectRegistry()
    >>> frame = Frame()
    >>> registry.register(frame, 'application.frame')
    >>> registry.name_of(frame)
    'application.frame'
    >>> registry.object_at('application.frame') is frame
    True
"""

from __future__ import annotations

import logging
import weakref
from typing import Any

logger = logging.getLogger(__name__)


class _StrongRef:
    """Callable holding obj strongly, interchangeable with a weakref.ref."""

    __slots__ = ('_obj',)

    def __init__(self, obj: Any) -> None:
        self._obj = obj

    def __call__(self) -> Any:
        return self._obj


class ObjectRegistry:
    """Bidirectional association between live objects and absolute names."""

    __slots__ = ('_names', '_objects', '__weakref__')

    def __init__(self) -> None:
        # id(obj) -> (weakref to obj, absolute name)
        self._names: dict[int, tuple[weakref.ref, str]] = {}
        # absolute name -> weakref to the first object registered there
        self._objects: dict[str, weakref.ref] = {}

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"ObjectRegistry({sorted(name for _, name in self._names.values())})"

    def _make_ref(self, obj: Any) -> weakref.ref:
        registry_ref = weakref.ref(self)
        key = id(obj)

        def _collected(ref: weakref.ref) -> None:
            registry = registry_ref()
            if registry is not None:
                registry._forget(key, ref)

        try:
            return weakref.ref(obj, _collected)
        except TypeError:
            raise TypeError(
                f"Cannot register {type(obj).__name__!r} object: "
                "it does not support weak references"
            ) from None

    def _forget(self, key: int, ref: weakref.ref) -> None:
        entry = self._names.get(key)
        if entry is None or entry[0] is not ref:
            return
        del self._names[key]
        # the name side only ever holds a ref under the object's current name
        if self._objects.get(entry[1]) is ref:
            del self._objects[entry[1]]

    def register(self, obj: Any, name: str, weak: bool = True) -> None:
        """Associate obj with an absolute name.

        Any previous name of obj is replaced. The name side keeps the
        first object registered under name until that object is
        unregistered or collected.

        Args:
            obj: Object to register.
            name: Absolute name.
            weak: When False, obj is held strongly until unregistered.
                Used for short lived registrations, and accepts objects
                that do not support weak references.

        Raises:
            TypeError: If weak is True and obj does not support weak
                references.
        """
        entry = self._names.get(id(obj))
        if entry is not None and entry[0]() is obj:
            ref, previous = entry
            if previous != name and self._objects.get(previous) is ref:
                del self._objects[previous]
        elif weak:
            ref = self._make_ref(obj)
        else:
            ref = _StrongRef(obj)
        self._names[id(obj)] = (ref, name)

        current = self._objects.get(name)
        if current is None or current() is None:
            self._objects[name] = ref
        logger.debug("registered %s object as %r", type(obj).__name__, name)

    def unregister(self, obj: Any) -> None:
        """Remove obj; does nothing if it is not registered."""
        entry = self._names.get(id(obj))
        if entry is None or entry[0]() is not obj:
            return
        ref, name = entry
        del self._names[id(obj)]
        current = self._objects.get(name)
        if current is not None and current() is obj:
            del self._objects[name]

    def name_of(self, obj: Any) -> str | None:
        """Return the absolute name of obj, or None if not registered."""
        entry = self._names.get(id(obj))
        if entry is None or entry[0]() is not obj:
            return None
        return entry[1]

    def object_at(self, name: str) -> Any:
        """Return the live object registered under name, or None."""
        ref = self._objects.get(name)
        if ref is None:
            return None
        return ref()

    def clear(self) -> None:
        """Drop every registration."""
        self._names.clear()
        self._objects.clear()
