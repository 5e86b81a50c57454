# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-Resources - Hierarchical resource lookup with wildcard patterns.

A lightweight, zero-dependency library mapping dotted resource keys, with
loose ('*') and single-match ('?') wildcards, to string values, and
binding live objects to positions of the namespace (Genro Kyō).
"""

__version__ = "0.1.0"

from .conversions import fetch_bool, fetch_float, fetch_int
from .exceptions import (
    InvalidNameError,
    MalformedKeyError,
    MissingObjectError,
    MissingValueError,
    ResourceStoreError,
    UnregisteredObjectError,
    UnregisteredParentError,
)
from .grammar import is_valid_key, is_valid_name, normalize_key
from .hierarchy import DeclaredTypeHierarchy, PythonTypeHierarchy, TypeHierarchy
from .loading import load_config_file, load_config_files, parse_properties
from .node import ResourceNode
from .registry import ObjectRegistry
from .store import ResourceStore

__all__ = [
    # Core classes
    "ResourceStore",
    "ResourceNode",
    "ObjectRegistry",
    # Type hierarchies
    "TypeHierarchy",
    "PythonTypeHierarchy",
    "DeclaredTypeHierarchy",
    # Key grammar
    "is_valid_key",
    "is_valid_name",
    "normalize_key",
    # Loading and conversions
    "parse_properties",
    "load_config_file",
    "load_config_files",
    "fetch_int",
    "fetch_float",
    "fetch_bool",
    # Exceptions
    "ResourceStoreError",
    "MalformedKeyError",
    "InvalidNameError",
    "UnregisteredObjectError",
    "UnregisteredParentError",
    "MissingObjectError",
    "MissingValueError",
]
