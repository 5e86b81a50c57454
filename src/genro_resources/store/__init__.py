# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ResourceStore package - Hierarchical resource lookup.

The package is organized into:
- core: ResourceStore, the locked public facade (storage, retrieval,
  object registration, reset and dump)
- matching: insertion of keys into the tree and the backtracking
  resolution of keys against it

Example:
    >>> from genro_resources import ResourceStore
    >>> store = ResourceStore()
    >>> store.set_resource('*button.label', 'OK')
    >>> store['dialog.button.label']
    'OK'
"""

from .core import ResourceStore, ResourceValue
from .matching import Matcher, insert_resource

__all__ = ["ResourceStore", "ResourceValue", "Matcher", "insert_resource"]
