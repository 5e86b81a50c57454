# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Typed access to resources.

A store holds strings only. These helpers convert a resolved resource to
an int, float or bool, returning the default when the resource is absent,
multi-valued or badly formatted.

Example:
    >>> store = ResourceStore({'*width': '640', '*debug': 'true'})
    >>> fetch_int(store, 'window.width', 320)
    640
    >>> fetch_bool(store, 'app.debug', False)
    True
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .store import ResourceStore

_TRUE = frozenset({'true', 'yes', 'on', '1'})
_FALSE = frozenset({'false', 'no', 'off', '0'})


def _fetch(store: ResourceStore, key: str, obj: Any) -> Any:
    if obj is None:
        return store.get_resource(key)
    return store.get_resource_for(obj, key)


def fetch_int(store: ResourceStore, key: str, default: int, obj: Any = None) -> int:
    """Return the resource at key as an int, or default."""
    value = _fetch(store, key, obj)
    if not isinstance(value, str):
        return default
    try:
        return int(value)
    except ValueError:
        return default


def fetch_float(
    store: ResourceStore, key: str, default: float, obj: Any = None
) -> float:
    """Return the resource at key as a float, or default."""
    value = _fetch(store, key, obj)
    if not isinstance(value, str):
        return default
    try:
        return float(value)
    except ValueError:
        return default


def fetch_bool(store: ResourceStore, key: str, default: bool, obj: Any = None) -> bool:
    """Return the resource at key as a bool, or default.

    Accepts true/yes/on/1 and false/no/off/0, case insensitive.
    """
    value = _fetch(store, key, obj)
    if not isinstance(value, str):
        return default
    word = value.strip().lower()
    if word in _TRUE:
        return True
    if word in _FALSE:
        return False
    return default
