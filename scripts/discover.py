#!/usr/bin/env python3
"""Local CLI entrypoint to inspect the release workspace of a directory.

Usage:
  python scripts/discover.py --root . [--clamp DIR] [--config settings.json]
                             [--format json|markdown] [--verbose]

Exit codes: 0 when a workspace is found, 1 when a manifest is broken,
2 when no release configuration exists.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dist_workspace.config import load_config
from dist_workspace.core import get_workspace
from dist_workspace.errors import ConfigError, ManifestError
from dist_workspace.models import Broken, Found
from dist_workspace.report import search_to_dict
from dist_workspace.summary import render_summary

EXIT_BROKEN = 1
EXIT_MISSING = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--root", type=Path, default=Path("."))
    parser.add_argument("--clamp", type=Path, default=None, help="Last directory to search")
    parser.add_argument("--config", type=Path, default=None, help="JSON discovery settings")
    parser.add_argument("--format", choices=("json", "markdown"), default="json")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_BROKEN

    search = get_workspace(args.root, args.clamp, config=config)

    if args.format == "markdown":
        print(render_summary(search), end="")
    else:
        print(json.dumps(search_to_dict(search), indent=2))

    if isinstance(search, Found):
        return 0
    if isinstance(search, Broken):
        if isinstance(search.cause, ManifestError):
            print(search.cause.render(), file=sys.stderr)
        return EXIT_BROKEN
    return EXIT_MISSING


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
