# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Command line access to property files.

Usage:
    genro-resources FILE [FILE ...] [--get KEY ...] [--prefix PREFIX]

Examples:
    # Dump every resource of two files, the second overriding the first
    genro-resources defaults.properties site.properties

    # Resolve keys
    genro-resources app.properties --get dialog.ok.button.label --get app.plugins
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .exceptions import MalformedKeyError
from .grammar import join_values
from .loading import load_config_file
from .store import ResourceStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='genro-resources',
        description='Load property files into a resource store and query it.',
    )
    parser.add_argument('files', nargs='+', help='Property files, loaded in order')
    parser.add_argument(
        '--get', '-g', action='append', default=[], metavar='KEY',
        help='Resolve KEY and print its value (repeatable)',
    )
    parser.add_argument('--prefix', '-p', help='Dump only below this absolute name')
    parser.add_argument('--header', help='Header comment for the dump')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    store = ResourceStore()
    for name in args.files:
        try:
            load_config_file(store, name)
        except FileNotFoundError:
            print(f"error: resource file {name} not found", file=sys.stderr)
            return 1

    if not args.get:
        sys.stdout.write(store.dump(args.prefix, header=args.header))
        return 0

    for key in args.get:
        try:
            value = store.get_resource(key)
        except MalformedKeyError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        if value is None:
            shown = '<unset>'
        elif isinstance(value, list):
            shown = join_values(value)
        else:
            shown = value
        print(f"{key} = {shown}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
