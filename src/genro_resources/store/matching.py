# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Insertion and resolution over the resource tree.

Resolution is a depth-first search with backtracking. At every node the
first remaining segment is matched against the children in this order:

    1. tight child with exactly that name
    2. tight child bound to the type of the object registered under the
       segment (or to the nearest ancestor of that type)
    3. tight ``?`` child
    4. for every way a loose binding could skip leading segments, the
       same three categories among the loose children

The first path that consumes the whole key wins, whether or not its node
carries a value, so tight bindings always dominate loose ones, and within one
binding strength names dominate types which dominate ``?``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..grammar import (
    BY_NAME,
    iter_anchors,
    join_path,
    segment_category,
    split_insertion_key,
    split_key,
)
from ..node import ResourceNode

if TYPE_CHECKING:
    from ..hierarchy import TypeHierarchy
    from ..registry import ObjectRegistry


def insert_resource(
    node: ResourceNode,
    key: str,
    value: str,
    paths: dict[str, ResourceNode] | None = None,
) -> ResourceNode:
    """Store value under a normalized key, creating nodes along the way.

    Args:
        node: Node the key is relative to (the root for absolute keys).
        key: A valid, normalized key.
        value: Canonical string value; overwrites any previous value.
        paths: Absolute-name index updated with every created node.

    Returns:
        The terminal node holding the value.
    """
    while True:
        name, loose, tail = split_insertion_key(key)
        node = node.create_child(name, loose, paths)
        if tail is None:
            node.value = value
            return node
        key = tail


class Matcher:
    """Resolves keys against a tree using a registry and a type hierarchy.

    Args:
        registry: Maps absolute names to live objects for type fallback.
        hierarchy: Names object types and walks their ancestry.
    """

    __slots__ = ('registry', 'hierarchy')

    def __init__(self, registry: ObjectRegistry, hierarchy: TypeHierarchy) -> None:
        self.registry = registry
        self.hierarchy = hierarchy

    def find(
        self, node: ResourceNode, key: str | None, prefix: str = ''
    ) -> ResourceNode | None:
        """Return the node fully matching key below node, or None.

        Args:
            node: Node to search from.
            key: Remaining tightly bound key, or None once fully consumed.
            prefix: Absolute name of the segments consumed so far, used to
                find the objects the segments refer to.
        """
        if key is None:
            return node

        head, tail = split_key(key)
        found = self._match(node, head, tail, prefix, loose=False)
        if found is not None:
            return found

        consumed = prefix
        for _, anchor, anchor_tail in iter_anchors(key):
            object_prefix = consumed
            consumed = join_path(consumed, anchor)
            found = self._match(
                node, anchor, anchor_tail, object_prefix, loose=True
            )
            if found is not None:
                return found
        return None

    def _match(
        self,
        node: ResourceNode,
        segment: str,
        tail: str | None,
        prefix: str,
        loose: bool,
    ) -> ResourceNode | None:
        """Try name, type and single-match children for one segment."""
        path = join_path(prefix, segment)

        child = node.exact_child(segment, loose)
        if child is not None:
            found = self.find(child, tail, path)
            if found is not None:
                return found

        type_name = self._type_name(segment, path)
        if type_name is not None:
            child = node.type_child(type_name, loose, self.hierarchy)
            if child is not None:
                found = self.find(child, tail, path)
                if found is not None:
                    return found

        child = node.single_match_child(loose)
        if child is not None:
            return self.find(child, tail, path)
        return None

    def _type_name(self, segment: str, path: str) -> str | None:
        """Return the type name to search for segment, if any.

        A by-name segment stands for the object registered at path; other
        segments are searched literally.
        """
        if segment_category(segment) != BY_NAME:
            return segment
        obj = self.registry.object_at(path)
        if obj is None:
            return None
        return self.hierarchy.type_name(obj)
