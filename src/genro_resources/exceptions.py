# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ResourceStore exceptions."""

from __future__ import annotations


class ResourceStoreError(Exception):
    """Base exception for ResourceStore errors."""

    pass


class MalformedKeyError(ResourceStoreError, ValueError):
    """Raised when a resource key is not well formed."""

    def __init__(self, key: object) -> None:
        super().__init__(f"Resource key {key!r} is not well formed")
        self.key = key


class InvalidNameError(ResourceStoreError, ValueError):
    """Raised when a name cannot be used to register an object."""

    def __init__(self, name: object) -> None:
        super().__init__(
            f"Name {name!r} must be lowercase-first and can not contain "
            "whitespace or the characters '.', '*', '?', '/'"
        )
        self.name = name


class UnregisteredObjectError(ResourceStoreError, LookupError):
    """Raised when an object must be registered but is not."""

    pass


class UnregisteredParentError(UnregisteredObjectError):
    """Raised when registering a child under an unregistered parent."""

    pass


class MissingObjectError(ResourceStoreError, TypeError):
    """Raised when a required object argument is None."""

    pass


class MissingValueError(ResourceStoreError, TypeError):
    """Raised when a required value argument is None."""

    pass
