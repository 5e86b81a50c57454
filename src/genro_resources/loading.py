# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading resources from property streams.

Property files follow the usual conventions::

    # comment
    ! also a comment
    *Toolbar.foreground = red
    *button1.label : This is the left button
    app.plugins = core | \\
                  extra

A key ends at the first unescaped '=', ':' or whitespace. Values are
trimmed, a trailing backslash continues the logical line, and the escapes
``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` are decoded. Lines whose
key is not a valid resource key are skipped with a warning.
"""

from __future__ import annotations

import logging
from pathlib import Path
from string import hexdigits
from typing import IO, TYPE_CHECKING, Iterable, Iterator

from .grammar import is_valid_key

if TYPE_CHECKING:
    from .store import ResourceStore

logger = logging.getLogger(__name__)

_COMMENT_MARKERS = ('#', '!')
_SEPARATORS = ('=', ':')
_ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}


def _ends_with_continuation(line: str) -> bool:
    """True if line ends with an odd number of backslashes."""
    count = len(line) - len(line.rstrip('\\'))
    return count % 2 == 1


def _logical_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Join continued lines, dropping blanks and comments.

    Yields:
        Tuples of (first physical line number, logical line).
    """
    pending: list[str] = []
    start = 0
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip('\r\n').lstrip()
        if not pending:
            if not line or line.startswith(_COMMENT_MARKERS):
                continue
            start = lineno
        if _ends_with_continuation(line):
            pending.append(line[:-1])
            continue
        pending.append(line)
        yield start, ''.join(pending)
        pending = []
    if pending:
        yield start, ''.join(pending)


def _unescape(text: str) -> str:
    result: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != '\\' or i + 1 == len(text):
            result.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        digits = text[i + 2:i + 6]
        if nxt == 'u' and len(digits) == 4 and all(c in hexdigits for c in digits):
            result.append(chr(int(digits, 16)))
            i += 6
            continue
        result.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return ''.join(result)


def _split_pair(line: str) -> tuple[str, str]:
    """Split a logical line into raw key and raw value."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '\\':
            i += 2
            continue
        if ch in _SEPARATORS or ch.isspace():
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip()
    if rest[:1] in _SEPARATORS:
        rest = rest[1:].lstrip()
    return key, rest


def parse_properties(source: str | IO | Iterable[str]) -> Iterator[tuple[str, str]]:
    """Parse a property stream into (key, value) pairs in file order.

    Args:
        source: Property text, a text or binary stream, or an iterable of
            lines. Binary streams are decoded as UTF-8.

    Yields:
        Unescaped (key, trimmed value) pairs. Keys are not validated.
    """
    if isinstance(source, str):
        lines: Iterable[str] = source.splitlines()
    else:
        lines = (
            line.decode('utf-8') if isinstance(line, bytes) else line
            for line in source
        )
    for _, logical in _logical_lines(lines):
        key, value = _split_pair(logical)
        yield _unescape(key), _unescape(value).strip()


def load_properties(store: ResourceStore, source: str | IO | Iterable[str]) -> int:
    """Store every well formed pair of a property stream.

    Returns:
        The number of resources stored.
    """
    count = 0
    for key, value in parse_properties(source):
        if not is_valid_key(key):
            logger.warning("the key %r is ill formed - skipping", key)
            continue
        store.set_resource(key, value)
        count += 1
    logger.debug("loaded %d resources", count)
    return count


def load_config_file(store: ResourceStore, path: str | Path) -> int:
    """Load one property file into store.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    with path.open(encoding='utf-8') as stream:
        return store.read_resources(stream)


def load_config_files(
    store: ResourceStore,
    initial: str | Path,
    files_key: str | None = None,
) -> list[Path]:
    """Load an initial property file and the files it lists.

    After loading ``initial``, the resource ``files_key`` is resolved: its
    value (one name or a list) names further property files, loaded in
    order. Relative names are resolved against the directory of
    ``initial``. Missing secondary files are logged and skipped.

    Args:
        store: Store to populate.
        initial: Path of the first file.
        files_key: Resource key listing further files, or None.

    Returns:
        Paths of the files actually loaded.

    Raises:
        FileNotFoundError: If the initial file does not exist.

    Example:
        >>> # main.properties contains: app.config.files = gui.properties | net.properties
        >>> load_config_files(store, 'conf/main.properties', 'app.config.files')
    """
    initial = Path(initial)
    load_config_file(store, initial)
    loaded = [initial]
    if files_key is None:
        return loaded

    others = store.get_resource(files_key)
    if others is None:
        return loaded
    if isinstance(others, str):
        others = [others]

    for name in others:
        path = Path(name)
        if not path.is_absolute():
            path = initial.parent / path
        try:
            load_config_file(store, path)
        except FileNotFoundError as exc:
            logger.warning("resource file %s could not be located: %s", path, exc)
            continue
        loaded.append(path)
    return loaded
