# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ResourceStore - Hierarchical, wildcard-capable resource lookup.

This module provides the ResourceStore class, the public entry point of
the genro-resources library. A ResourceStore maps resource keys to string
or multi-valued data, resolves overlapping patterns with deterministic
priorities, and binds live objects to positions of the namespace so that
they can resolve resources relative to themselves.

Key Syntax:
    - Tight binding: 'application.startup.home'
    - Loose binding: '*button.label' (skips any number of levels)
    - Single match: 'frame.?.label' (exactly one arbitrary level)
    - By type: '*Toolbar.foreground', '*myapp/gui/Toolbar.foreground'

Priorities:
    - Tight bindings always win over loose bindings
    - At equal binding: name > type > single match

Example:
    Basic usage::

        store = ResourceStore()
        store.set_resource('*button.label', 'OK')
        store.set_resource('dialog.cancel.label', 'Cancel')

        store.get_resource('dialog.ok.button.label')  # 'OK'
        store['dialog.cancel.label']                  # 'Cancel'

    Relative to objects::

        store.register('application.display', display)
        store.register_child('toolbar', toolbar, display)
        store.get_resource_for(toolbar, 'foreground')
"""

from __future__ import annotations

import functools
import logging
import threading
from typing import IO, Any, Callable, Iterator, Sequence, TypeVar

from ..exceptions import (
    InvalidNameError,
    MalformedKeyError,
    MissingObjectError,
    MissingValueError,
    UnregisteredObjectError,
    UnregisteredParentError,
)
from ..grammar import (
    PLACEHOLDER_NAME,
    TIGHT_BINDING,
    VALUE_DELIMITER,
    is_valid_key,
    is_valid_name,
    is_valid_prefix,
    join_path,
    join_values,
    normalize_key,
    split_values,
)
from ..hierarchy import PythonTypeHierarchy, TypeHierarchy
from ..node import ResourceNode
from ..registry import ObjectRegistry
from .matching import Matcher, insert_resource

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])

ResourceValue = str | list[str]


def synchronized(method: F) -> F:
    """Run a ResourceStore method while holding the store lock."""

    @functools.wraps(method)
    def wrapper(self: ResourceStore, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class ResourceStore:
    """A hierarchical resource container with wildcard patterns.

    ResourceStore provides:
    - set_resource(key, value) / store[key] = value: store a value
    - get_resource(key) / store[key]: resolve the best matching value
    - register(name, obj) / register_child(name, child, parent): bind
      objects to positions of the namespace
    - get_resource_for(obj, key) / set_resource_for(obj, key, value):
      resources relative to a registered object
    - dump(prefix): text serialization of stored resources

    Every public method runs under a single reentrant lock, so a store
    can be shared between threads.

    Attributes:
        hierarchy: The TypeHierarchy used for by-type matching.

    Example:
        >>> store = ResourceStore({'*a': 'loose', 'frame.a': 'tight'})
        >>> store['frame.a']
        'tight'
        >>> store['window.a']
        'loose'
    """

    __slots__ = ('_root', '_paths', '_registry', '_matcher', '_lock', 'hierarchy')

    def __init__(
        self,
        source: dict | list | None = None,
        hierarchy: TypeHierarchy | None = None,
    ) -> None:
        """Initialize a ResourceStore.

        Args:
            source: Optional initial resources. Can be:
                - dict: {key: value} pairs
                - list: (key, value) tuples
            hierarchy: Type ancestry used for by-type matching.
                Defaults to PythonTypeHierarchy.

        Example:
            >>> ResourceStore({'*foreground': 'black'})
            >>> ResourceStore([('frame.title', 'Main'), ('*font', 'Sans')])
            >>> ResourceStore(hierarchy=DeclaredTypeHierarchy())
        """
        self.hierarchy = hierarchy if hierarchy is not None else PythonTypeHierarchy()
        self._lock = threading.RLock()
        self._registry = ObjectRegistry()
        self._matcher = Matcher(self._registry, self.hierarchy)
        self._root = ResourceNode('root')
        self._paths: dict[str, ResourceNode] = {}

        if source is not None:
            self._load_source(source)

    def _load_source(self, source: dict | list) -> None:
        if isinstance(source, dict):
            items = list(source.items())
        elif isinstance(source, list):
            items = list(source)
        else:
            raise TypeError(
                f"source must be dict or list, not {type(source).__name__}"
            )
        for item in items:
            if not isinstance(item, tuple) or len(item) != 2:
                raise ValueError(f"Invalid source item: {item!r}")
            self.set_resource(*item)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"ResourceStore({len(self)} resources)"

    @synchronized
    def __len__(self) -> int:
        """Return the number of populated resources."""
        return sum(1 for _ in self._root.dump_lines())

    def __getitem__(self, key: str) -> ResourceValue:
        """Resolve key, raising KeyError when nothing matches.

        Raises:
            MalformedKeyError: If key is not well formed.
            KeyError: If no populated resource matches.
        """
        value = self.get_resource(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: str | Sequence[str]) -> None:
        self.set_resource(key, value)

    def __contains__(self, key: str) -> bool:
        """True if key is well formed and resolves to a value."""
        if not is_valid_key(key):
            return False
        return self.get_resource(key) is not None

    # ==================== Validation ====================

    @staticmethod
    def is_valid_key(key: object) -> bool:
        """Check that key is a well formed resource key."""
        return is_valid_key(key)

    @staticmethod
    def is_valid_name(name: object) -> bool:
        """Check that name can be used to register an object."""
        return is_valid_name(name)

    @staticmethod
    def _checked_key(key: object) -> str:
        if not is_valid_key(key):
            raise MalformedKeyError(key)
        return normalize_key(key)  # type: ignore[arg-type]

    @staticmethod
    def _encode(value: object) -> str:
        if value is None:
            raise MissingValueError("Resource value is None")
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            if not all(isinstance(item, str) for item in value):
                raise TypeError("Resource values must be strings")
            return join_values(value)
        raise TypeError(
            f"Resource value must be str or list of str, not {type(value).__name__}"
        )

    @staticmethod
    def _decode(data: str | None) -> ResourceValue | None:
        if not data:
            return None
        if VALUE_DELIMITER in data:
            return split_values(data)
        return data

    # ==================== Storage ====================

    @synchronized
    def set_resource(self, key: str, value: str | Sequence[str]) -> None:
        """Set the resource at key, overriding any existing value.

        Args:
            key: Resource key, possibly with '*' and '?' wildcards.
            value: A string, or a list of strings stored as 'a | b | c'.

        Raises:
            MalformedKeyError: If key is not well formed.
            MissingValueError: If value is None.

        Example:
            >>> store.set_resource('*Toolbar.foreground', 'red')
            >>> store.set_resource('app.plugins', ['core', 'extra'])
        """
        normalized = self._checked_key(key)
        data = self._encode(value)
        insert_resource(self._root, normalized, data, self._paths)

    @synchronized
    def set_resource_for(
        self, obj: Any, key: str, value: str | Sequence[str]
    ) -> None:
        """Set a resource relative to a registered object.

        Args:
            obj: A registered object.
            key: Resource key relative to the object's absolute name.
            value: A string or a list of strings.

        Raises:
            MissingObjectError: If obj is None.
            UnregisteredObjectError: If obj is not registered.
            MalformedKeyError: If key is not well formed.
            MissingValueError: If value is None.
        """
        if obj is None:
            raise MissingObjectError("Object is None")
        normalized = self._checked_key(key)
        data = self._encode(value)
        name = self._registry.name_of(obj)
        if name is None:
            raise UnregisteredObjectError(
                f"{type(obj).__name__} object is not registered with the store"
            )

        node = self._paths.get(name)
        if node is None:
            insert_resource(
                self._root,
                normalize_key(name + TIGHT_BINDING + normalized),
                data,
                self._paths,
            )
        else:
            insert_resource(node, normalized, data, self._paths)

    @synchronized
    def read_resources(self, source: str | IO) -> int:
        """Load resources from a property stream or text.

        Malformed keys are skipped with a warning.

        Returns:
            The number of resources stored.
        """
        from ..loading import load_properties

        return load_properties(self, source)

    # ==================== Retrieval ====================

    @synchronized
    def get_resource(self, key: str) -> ResourceValue | None:
        """Resolve key to the best matching value.

        Args:
            key: Absolute resource key to look up.

        Returns:
            A string, a list of strings for multi-valued resources,
            or None if nothing matches.

        Raises:
            MalformedKeyError: If key is not well formed.
        """
        normalized = self._checked_key(key)
        node = self._matcher.find(self._root, normalized)
        if node is None or not node.has_value:
            logger.debug("resource %r not found", key)
            return None
        return self._decode(node.value)

    @synchronized
    def get_resource_for(self, obj: Any, key: str) -> ResourceValue | None:
        """Resolve key relative to an object.

        A registered object resolves '<its name>.<key>'. An unregistered
        object is registered under a reserved placeholder name for the
        duration of the lookup, so that type-based entries still apply.

        Raises:
            MissingObjectError: If obj is None.
            MalformedKeyError: If key is not well formed.
        """
        if obj is None:
            raise MissingObjectError("Object is None")
        if not is_valid_key(key):
            raise MalformedKeyError(key)

        name = self._registry.name_of(obj)
        if name is not None:
            return self.get_resource(name + TIGHT_BINDING + key)

        self._registry.register(obj, PLACEHOLDER_NAME, weak=False)
        try:
            return self.get_resource(PLACEHOLDER_NAME + TIGHT_BINDING + key)
        finally:
            self._registry.unregister(obj)

    @synchronized
    def walk(self) -> Iterator[tuple[str, str]]:
        """Return (absolute name, stored value) for every populated node."""
        return iter([
            (node.abs_name, node.value)
            for node in self._root.walk()
            if node.value is not None and node.abs_name is not None
        ])

    # ==================== Object Registry ====================

    @synchronized
    def register(self, name: str, obj: Any) -> None:
        """Register obj under a name.

        A dotted name ('application.display') is an absolute prefix;
        a plain name ('toolbar') is a single top-level segment.

        Raises:
            InvalidNameError: If the name or any of its segments is invalid.
            MissingObjectError: If obj is None.
        """
        if isinstance(name, str) and TIGHT_BINDING in name:
            if not is_valid_prefix(name):
                raise InvalidNameError(name)
        elif not is_valid_name(name):
            raise InvalidNameError(name)
        if obj is None:
            raise MissingObjectError("Object is None")
        self._registry.register(obj, name)

    @synchronized
    def register_child(self, name: str, child: Any, parent: Any) -> None:
        """Register child under '<parent name>.<name>'.

        Raises:
            InvalidNameError: If name is not a valid name.
            MissingObjectError: If child or parent is None.
            UnregisteredParentError: If parent is not registered.
        """
        if not is_valid_name(name):
            raise InvalidNameError(name)
        if child is None:
            raise MissingObjectError("Child object is None")
        if parent is None:
            raise MissingObjectError("Parent object is None")
        parent_name = self._registry.name_of(parent)
        if parent_name is None:
            raise UnregisteredParentError(
                f"Parent {type(parent).__name__} object is not registered"
            )
        self._registry.register(child, join_path(parent_name, name))

    @synchronized
    def unregister(self, obj: Any) -> None:
        """Forget obj; does nothing if it is not registered."""
        self._registry.unregister(obj)

    @synchronized
    def unregister_all(self) -> None:
        """Forget every registered object, keeping the resources."""
        self._registry.clear()

    @synchronized
    def name_of(self, obj: Any) -> str | None:
        """Return the absolute name obj is registered under, or None."""
        return self._registry.name_of(obj)

    @synchronized
    def object_at(self, name: str) -> Any:
        """Return the live object registered under name, or None."""
        return self._registry.object_at(name)

    # ==================== Lifecycle ====================

    @synchronized
    def reset(self) -> None:
        """Discard every resource and every registration."""
        self._root = ResourceNode('root')
        self._paths.clear()
        self._registry.clear()
        logger.debug("resource store reset")

    # ==================== Serialization ====================

    @synchronized
    def dump(self, prefix: str | None = None, header: str | None = None) -> str:
        """Serialize populated resources as 'name: value' lines.

        Args:
            prefix: Absolute name of the node to start from. Unknown or
                empty prefixes dump the whole tree.
            header: Optional text emitted first as '#' comment lines.

        Returns:
            One line per populated node, tightly bound children first.
        """
        node = self._paths.get(prefix) if prefix else None
        if node is None:
            node = self._root

        lines: list[str] = []
        if header is not None:
            for line in header.splitlines():
                if not line:
                    continue
                lines.append(line if line.startswith('#') else f"# {line}")
        lines.extend(node.dump_lines())
        return ''.join(f"{line}\n" for line in lines)

    def write_resources(self, stream: IO[str], header: str | None = None) -> None:
        """Write every resource to a text stream in dump format."""
        stream.write(self.dump(header=header))
