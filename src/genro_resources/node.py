# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Resource tree nodes and their child indices."""

from __future__ import annotations

from typing import Any, Iterator, TYPE_CHECKING

from .grammar import (
    BY_NAME,
    BY_SINGLE_MATCH,
    BY_TYPE,
    CATEGORIES,
    LOOSE_BINDING,
    TIGHT_BINDING,
    segment_category,
)

if TYPE_CHECKING:
    from .hierarchy import TypeHierarchy


class TypeIndex(dict):
    """Children bound by type name, with nearest-ancestor lookup."""

    def find(self, type_name: str, hierarchy: TypeHierarchy) -> Any:
        """Return the entry for type_name or its closest ancestor.

        The exact name is tried first, then every name returned by
        ``hierarchy.ancestors(type_name)`` in order.

        Args:
            type_name: Type name as written in a key (``myapp/gui/Toolbar``).
            hierarchy: Provides the ordered ancestry of the type.

        Returns:
            The matching entry, or None when the hierarchy is exhausted.
        """
        found = self.get(type_name)
        if found is not None:
            return found
        for ancestor in hierarchy.ancestors(type_name):
            found = self.get(ancestor)
            if found is not None:
                return found
        return None


class SingleMatchIndex:
    """One-slot index for ``?`` children.

    Any key routes to the same slot: storing replaces the entry and
    lookups ignore the key.
    """

    __slots__ = ('_entry',)

    def __init__(self) -> None:
        self._entry: Any = None

    def __setitem__(self, key: str, value: Any) -> None:
        self._entry = value

    def get(self, key: str | None = None, default: Any = None) -> Any:
        return default if self._entry is None else self._entry

    def values(self) -> list[Any]:
        return [] if self._entry is None else [self._entry]

    def __len__(self) -> int:
        return 0 if self._entry is None else 1

    def __repr__(self) -> str:
        return f"SingleMatchIndex({self._entry!r})"


_INDEX_FACTORIES = {
    BY_NAME: dict,
    BY_TYPE: TypeIndex,
    BY_SINGLE_MATCH: SingleMatchIndex,
}


class ResourceNode:
    """A vertex of the resource tree.

    Each node has:
    - name: the segment it was created for (``button1``, ``Toolbar``, ``?``)
    - abs_name: the full key from the root (None for the root itself)
    - value: the stored string, or None
    - tight / loose: per-binding child indices, one slot per category
      (by name, by type, by single match), created on demand

    Example:
        >>> root = ResourceNode('root')
        >>> frame = root.create_child('frame', loose=False)
        >>> frame.abs_name
        'frame'
        >>> frame.create_child('Button', loose=True).abs_name
        'frame*Button'
    """

    __slots__ = ('name', 'abs_name', 'value', 'tight', 'loose')

    def __init__(self, name: str, abs_name: str | None = None) -> None:
        self.name = name
        self.abs_name = abs_name
        self.value: str | None = None
        self.tight: list[Any] = [None] * len(CATEGORIES)
        self.loose: list[Any] = [None] * len(CATEGORIES)

    def __repr__(self) -> str:
        return f"ResourceNode({self.abs_name!r}, value={self.value!r})"

    @property
    def has_value(self) -> bool:
        """True if the node carries a non-empty value."""
        return bool(self.value)

    def _indices(self, loose: bool) -> list[Any]:
        return self.loose if loose else self.tight

    def _child_abs_name(self, name: str, loose: bool) -> str:
        binding = LOOSE_BINDING if loose else TIGHT_BINDING
        if self.abs_name is None:
            return f"{LOOSE_BINDING}{name}" if loose else name
        return f"{self.abs_name}{binding}{name}"

    def create_child(
        self,
        name: str,
        loose: bool,
        paths: dict[str, ResourceNode] | None = None,
    ) -> ResourceNode:
        """Return the child for name, creating it if it does not exist.

        Args:
            name: Segment name; its category selects the index.
            loose: True for a loosely bound child.
            paths: Optional absolute-name index updated with new nodes.
        """
        indices = self._indices(loose)
        category = segment_category(name)
        index = indices[category]
        if index is None:
            index = _INDEX_FACTORIES[category]()
            indices[category] = index

        child = index.get(name)
        if child is None:
            child = ResourceNode(name, self._child_abs_name(name, loose))
            index[name] = child
            if paths is not None:
                paths[child.abs_name] = child
        return child

    def exact_child(self, name: str, loose: bool) -> ResourceNode | None:
        """Return the child stored under exactly this name, if any."""
        index = self._indices(loose)[segment_category(name)]
        if index is None:
            return None
        return index.get(name)

    def type_child(
        self, type_name: str, loose: bool, hierarchy: TypeHierarchy
    ) -> ResourceNode | None:
        """Return the child bound to type_name or its nearest ancestor."""
        index = self._indices(loose)[BY_TYPE]
        if index is None:
            return None
        return index.find(type_name, hierarchy)

    def single_match_child(self, loose: bool) -> ResourceNode | None:
        """Return the ``?`` child, if any."""
        index = self._indices(loose)[BY_SINGLE_MATCH]
        if index is None:
            return None
        return index.get()

    def iter_children(self) -> Iterator[ResourceNode]:
        """Yield children tight first, then loose, in category order."""
        for indices in (self.tight, self.loose):
            for index in indices:
                if index is not None:
                    yield from index.values()

    def walk(self) -> Iterator[ResourceNode]:
        """Yield this node and all its descendants, depth first, pre-order."""
        yield self
        for child in self.iter_children():
            yield from child.walk()

    def dump_lines(self) -> Iterator[str]:
        """Yield ``abs_name: value`` for every populated node below here."""
        for node in self.walk():
            if node.value is not None and node.abs_name is not None:
                yield f"{node.abs_name}: {node.value}"
