from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable

from .config import GuessDefaults, IndentConfigError, load_defaults
from .files import FileGuess, analyze_paths


def format_result(result: FileGuess) -> str:
    report = result.report
    extras: list[str] = [
        f"tabbed {report.tabbed_lines}",
        f"spaced {report.spaced_lines}",
    ]
    if report.scanned_lines:
        extras.append(f"scanned {report.scanned_lines} lines")
    extra_str = ", ".join(extras)
    return f"{result.path}: {report.style} (tab size {result.tab_size}; {extra_str})"


def run(paths: Iterable[str], defaults: GuessDefaults | None = None) -> list[FileGuess]:
    return analyze_paths(paths, defaults)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="indent-guesser",
        description="Guess whether files indent with tabs or spaces, and their tab size.",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="Files or directories to inspect. Directories are walked recursively.",
    )
    parser.add_argument(
        "--tab-size",
        type=int,
        default=None,
        help="Tab size to fall back to when a file gives no clear answer.",
    )
    style = parser.add_mutually_exclusive_group()
    style.add_argument(
        "--insert-spaces",
        dest="insert_spaces",
        action="store_true",
        default=None,
        help="Fall back to spaces when tabs and spaces are tied.",
    )
    style.add_argument(
        "--tabs",
        dest="insert_spaces",
        action="store_false",
        help="Fall back to tabs when tabs and spaces are tied.",
    )
    parser.add_argument("--json", action="store_true", help="Print results as a JSON array.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-file histograms.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        defaults = load_defaults(tab_size=args.tab_size, insert_spaces=args.insert_spaces)
    except IndentConfigError as exc:
        parser.error(str(exc))

    results = run(args.paths, defaults)
    if not results:
        print("No readable text files found.")
        return 1

    if args.json:
        print(json.dumps([result.to_dict() for result in results], indent=2))
        return 0

    for result in results:
        print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
