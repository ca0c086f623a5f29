"""Command-line interface for goscope."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from goscope.pipeline import run


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="goscope",
        description="Go code structure analyzer — package tree, call graph, and statistics as Markdown.",
    )
    parser.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Path to the Go repository to analyze (default: current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output Markdown file path (default: code_structure.md in the project)",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Project display name (default: directory name)",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Rows in the most-called functions table (default: 20, or config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)
    if args.top is not None and args.top < 0:
        parser.error("--top must be non-negative")

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("goscope").setLevel(logging.DEBUG)

    run(
        args.project_dir,
        output=args.output,
        name=args.name,
        top=args.top,
    )
