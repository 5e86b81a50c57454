# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Resource key grammar.

A resource key is a sequence of segments joined by binding delimiters:

    - ``.`` binds a segment tightly to its parent (``frame.label``)
    - ``*`` binds a segment loosely, skipping any number of levels
      (``*button.label``)
    - ``?`` as a whole segment matches exactly one arbitrary segment
      (``frame.?.label``)

Segments are classified in three categories:

    - by name: an ordinary lowercase-first literal (``button1``)
    - by type: starts uppercase or contains ``/`` (``Toolbar``,
      ``myapp/gui/Toolbar``)
    - by single match: the ``?`` token

Example:
    >>> is_valid_key('*Toolbar.button1.label')
    True
    >>> normalize_key('frame.*button')
    'frame*button'
    >>> segment_category('myapp/gui/Toolbar')
    1
"""

from __future__ import annotations

from typing import Iterator, Sequence

TIGHT_BINDING = '.'
LOOSE_BINDING = '*'
SINGLE_MATCH = '?'
TYPE_SEPARATOR = '/'
VALUE_DELIMITER = '|'

BY_NAME = 0
BY_TYPE = 1
BY_SINGLE_MATCH = 2
CATEGORIES = (BY_NAME, BY_TYPE, BY_SINGLE_MATCH)

# Reserved name used to probe unregistered objects; never a valid name.
PLACEHOLDER_NAME = '_32lD$SF832GDk%ll123(01SDFl'

_WHITESPACE = (' ', '\t', '\n', '\r')


def _has_whitespace(text: str) -> bool:
    return any(ch in text for ch in _WHITESPACE)


def is_valid_key(key: object) -> bool:
    """Check that a resource key is well formed.

    A well formed key is a non-empty string that does not start with a
    tight delimiter, does not end with any delimiter, contains no doubled
    tight delimiters, no doubled single-match tokens and no whitespace.
    """
    if not isinstance(key, str) or not key:
        return False
    if key.startswith(TIGHT_BINDING):
        return False
    if key.endswith((TIGHT_BINDING, LOOSE_BINDING)):
        return False
    if TIGHT_BINDING * 2 in key or SINGLE_MATCH * 2 in key:
        return False
    return not _has_whitespace(key)


def normalize_key(key: str) -> str:
    """Collapse ``.*``, ``*.`` and ``**`` delimiter pairs into a single ``*``.

    ``name1*.name2`` is accepted as input but stored as ``name1*name2``.
    Every rewrite shortens the key, so the loop terminates.

    Example:
        >>> normalize_key('a.*.*b')
        'a*b'
    """
    pairs = (
        TIGHT_BINDING + LOOSE_BINDING,
        LOOSE_BINDING + TIGHT_BINDING,
        LOOSE_BINDING * 2,
    )
    while True:
        for pair in pairs:
            if pair in key:
                key = key.replace(pair, LOOSE_BINDING)
                break
        else:
            return key


def is_valid_name(name: object) -> bool:
    """Check that a name is usable to register an object.

    The name must be lowercase-first and contain no delimiters, no type
    separator and no whitespace. The internal placeholder name is refused.
    """
    if not isinstance(name, str) or not name:
        return False
    if name[0].isupper():
        return False
    for token in (TIGHT_BINDING, LOOSE_BINDING, SINGLE_MATCH, TYPE_SEPARATOR):
        if token in name:
            return False
    if _has_whitespace(name):
        return False
    return name != PLACEHOLDER_NAME


def is_valid_prefix(prefix: object) -> bool:
    """Check an absolute registration name like ``application.startup``."""
    if not isinstance(prefix, str) or not prefix:
        return False
    return all(is_valid_name(part) for part in prefix.split(TIGHT_BINDING))


def segment_category(segment: str) -> int:
    """Return BY_SINGLE_MATCH, BY_TYPE or BY_NAME for a single segment."""
    if segment == SINGLE_MATCH:
        return BY_SINGLE_MATCH
    if segment[:1].isupper() or TYPE_SEPARATOR in segment:
        return BY_TYPE
    return BY_NAME


def split_key(key: str) -> tuple[str, str | None]:
    """Split a key at the first tight delimiter.

    Returns:
        Tuple (head, tail); tail is None when there is no delimiter.
    """
    head, sep, tail = key.partition(TIGHT_BINDING)
    if not sep:
        return key, None
    return head, tail


def split_insertion_key(key: str) -> tuple[str, bool, str | None]:
    """Split a normalized key for insertion.

    The first character may be a loose delimiter belonging to the head, so
    delimiters are searched from position 1. A loose delimiter that ends
    the head stays at the start of the tail.

    Returns:
        Tuple (name, loose, tail) where ``loose`` tells whether the head is
        loosely bound and tail is None for the terminal segment.

    Example:
        >>> split_insertion_key('*frame.a')
        ('frame', True, 'a')
        >>> split_insertion_key('frame*a')
        ('frame', False, '*a')
    """
    loose = key.startswith(LOOSE_BINDING)
    start = len(LOOSE_BINDING) if loose else 0
    positions = [
        pos for pos in (key.find(TIGHT_BINDING, 1), key.find(LOOSE_BINDING, 1))
        if pos != -1
    ]
    if not positions:
        return key[start:], loose, None
    pos = min(positions)
    name = key[start:pos]
    if key.startswith(LOOSE_BINDING, pos):
        return name, loose, key[pos:]
    return name, loose, key[pos + len(TIGHT_BINDING):]


def iter_anchors(key: str) -> Iterator[tuple[int, str, str | None]]:
    """Yield every segment boundary of a tightly bound key.

    A loosely bound child may swallow any number of leading segments before
    anchoring. Each yielded item is (index, anchor_segment, tail) where
    ``index`` is the position of the anchor among the key segments.

    Example:
        >>> list(iter_anchors('a.b.c'))
        [(0, 'a', 'b.c'), (1, 'b', 'c'), (2, 'c', None)]
    """
    segments = key.split(TIGHT_BINDING)
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        tail = TIGHT_BINDING.join(segments[index + 1:]) if index < last else None
        yield index, segment, tail


def join_path(prefix: str, name: str) -> str:
    """Join a name to an absolute path with the tight delimiter."""
    return f"{prefix}{TIGHT_BINDING}{name}" if prefix else name


def join_values(values: Sequence[str]) -> str:
    """Encode a list of values as the canonical delimited string."""
    return f" {VALUE_DELIMITER} ".join(values)


def split_values(data: str) -> list[str]:
    """Decode a delimited string into its trimmed, non-empty values."""
    return [part.strip() for part in data.split(VALUE_DELIMITER) if part]
