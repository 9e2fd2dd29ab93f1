"""Entry point: python -m tseo_gen <document> [-b NAME] [-da DIR] [-dr DIR]

Reads an OpenAPI document and generates the Express delegates, controller
and routers for it.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .codegen import (
    DEFAULT_API_DIR,
    DEFAULT_BASE_NAME,
    DEFAULT_ROUTES_DIR,
    GeneratorOptions,
    generate,
    prepare_directories,
    write_units,
)
from .errors import GeneratorError
from .loader import load_spec


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tseo-gen",
        description="TypeScript Express OpenAPI generator",
    )
    parser.add_argument("document", type=Path, help="Path to the OpenAPI document (YAML or JSON)")
    parser.add_argument(
        "-b", dest="base_name", nargs="?", const=None, default=DEFAULT_BASE_NAME, metavar="NAME",
        help=f"The base name used for the controller and router registry classes (default '{DEFAULT_BASE_NAME}')",
    )
    parser.add_argument(
        "-da", dest="api_dir", nargs="?", const=None, default=DEFAULT_API_DIR, metavar="DIR",
        help=f"The directory where API files will be generated (default '{DEFAULT_API_DIR}')",
    )
    parser.add_argument(
        "-dr", dest="routes_dir", nargs="?", const=None, default=DEFAULT_ROUTES_DIR, metavar="DIR",
        help=f"The directory where Route files will be generated (default '{DEFAULT_ROUTES_DIR}')",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _option(value: str | None, flag: str, default: str) -> str:
    # A flag given without a value falls back to its default.
    if value is None:
        print(f"{flag} requires an argument.")
        return default
    return value


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    options = GeneratorOptions(
        base_name=_option(args.base_name, "-b", DEFAULT_BASE_NAME),
        api_dir=_option(args.api_dir, "-da", DEFAULT_API_DIR),
        routes_dir=_option(args.routes_dir, "-dr", DEFAULT_ROUTES_DIR),
    )

    try:
        spec = load_spec(args.document)
        prepare_directories(options)
        units = generate(spec, options)
        count = write_units(units)
    except GeneratorError as e:
        raise SystemExit(f"error: {e}") from e

    print(f"Generated {count} files")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
