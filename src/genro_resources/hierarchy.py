# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Type ancestry providers for by-type resource matching.

When a resource segment names a registered object and no entry exists for
that name, the store looks for an entry bound to the object's type, then
to its ancestors. A TypeHierarchy supplies both the type name of an object
and the ordered ancestry of a type name.

Two providers are available:

    - PythonTypeHierarchy: names classes ``module/path/QualName`` and walks
      the method resolution order. It is the store default.
    - DeclaredTypeHierarchy: an explicit, application-declared hierarchy of
      interfaces and superclasses, independent of Python classes.

Example:
    >>> hierarchy = DeclaredTypeHierarchy()
    >>> hierarchy.declare('Component')
    >>> hierarchy.declare('Container', superclass='Component')
    >>> hierarchy.declare('Frame', superclass='Container', interfaces=['Window'])
    >>> hierarchy.ancestors('Frame')
    ['Window', 'Container', 'Component']
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from .grammar import TIGHT_BINDING, TYPE_SEPARATOR


class TypeHierarchy(ABC):
    """Abstract provider of type names and type ancestry."""

    @abstractmethod
    def type_name(self, obj: Any) -> str:
        """Return the by-type segment naming the runtime type of obj."""

    @abstractmethod
    def ancestors(self, type_name: str) -> list[str]:
        """Return the ordered fallback names for type_name, excluding itself."""


class PythonTypeHierarchy(TypeHierarchy):
    """Type hierarchy backed by Python classes.

    A class is named by its module path and qualified name, with dots
    replaced by ``/`` so the name stays a single key segment::

        myapp.gui.Toolbar  ->  myapp/gui/Toolbar

    Ancestry follows the MRO. For every class the full name is offered
    first and then the bare class name, so keys may use either form.
    Classes are remembered when named, so only names produced by
    type_name() (or classes passed to remember()) have an ancestry.
    """

    def __init__(self) -> None:
        self._classes: dict[str, type] = {}

    @staticmethod
    def class_name(cls: type) -> str:
        """Return the ``module/path/QualName`` form of a class."""
        qualname = cls.__qualname__.replace(TIGHT_BINDING, TYPE_SEPARATOR)
        module = cls.__module__.replace(TIGHT_BINDING, TYPE_SEPARATOR)
        return f"{module}{TYPE_SEPARATOR}{qualname}"

    def remember(self, cls: type) -> str:
        """Record a class so its name can be walked; return the name."""
        name = self.class_name(cls)
        self._classes[name] = cls
        self._classes.setdefault(cls.__name__, cls)
        return name

    def type_name(self, obj: Any) -> str:
        return self.remember(type(obj))

    def ancestors(self, type_name: str) -> list[str]:
        cls = self._classes.get(type_name)
        if cls is None:
            return []
        result: list[str] = []
        for klass in cls.__mro__:
            for name in (self.class_name(klass), klass.__name__):
                if name != type_name and name not in result:
                    result.append(name)
        return result


class DeclaredTypeHierarchy(TypeHierarchy):
    """Explicit hierarchy of type names.

    Each declared type has an optional superclass and any number of
    directly declared interfaces. Ancestry is walked level by level: the
    interfaces of the current type, then its superclass, then the
    interfaces of the superclass, and so on until no type remains.

    Objects are named by their ``resource_type`` attribute when present,
    otherwise by the name of their class.
    """

    def __init__(self) -> None:
        self._superclass: dict[str, str | None] = {}
        self._interfaces: dict[str, tuple[str, ...]] = {}

    def declare(
        self,
        name: str,
        superclass: str | None = None,
        interfaces: Iterable[str] = (),
    ) -> None:
        """Declare a type with its superclass and interfaces."""
        self._superclass[name] = superclass
        self._interfaces[name] = tuple(interfaces)

    def __contains__(self, name: str) -> bool:
        return name in self._superclass

    def type_name(self, obj: Any) -> str:
        declared = getattr(obj, 'resource_type', None)
        if declared:
            return declared
        return type(obj).__name__

    def ancestors(self, type_name: str) -> list[str]:
        result: list[str] = []
        current = type_name
        seen = {type_name}
        while current is not None:
            for interface in self._interfaces.get(current, ()):
                if interface not in seen:
                    seen.add(interface)
                    result.append(interface)
            current = self._superclass.get(current)
            if current is None or current in seen:
                break
            seen.add(current)
            result.append(current)
        return result
