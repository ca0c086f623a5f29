"""Go extractors — shared helpers."""

from __future__ import annotations

from pathlib import Path

from goscope.extractors.go.calls import iter_call_sites, resolve_unit_calls
from goscope.extractors.go.declarations import extract_unit, register_unit
from goscope.extractors.go.imports import build_alias_map
from goscope.extractors.go.module_info import find_entry_points, read_module_path
from goscope.extractors.go.parsing import (
    ParsedUnit,
    ParseFailure,
    make_parser,
    parse_file,
    parse_source,
)

__all__ = [
    "ParseFailure",
    "ParsedUnit",
    "build_alias_map",
    "extract_unit",
    "find_entry_points",
    "is_go_project",
    "iter_call_sites",
    "make_parser",
    "parse_file",
    "parse_source",
    "read_module_path",
    "register_unit",
    "resolve_unit_calls",
]


def is_go_project(project_dir: Path) -> bool:
    """Return True if *project_dir* contains a go.mod file."""
    return (project_dir / "go.mod").exists()
