"""Orchestrator: scan → parse → extract → resolve → render."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from goscope.config import load_config
from goscope.extractors.go import (
    ParseFailure,
    ParsedUnit,
    extract_unit,
    find_entry_points,
    is_go_project,
    make_parser,
    parse_file,
    read_module_path,
    register_unit,
    resolve_unit_calls,
)
from goscope.model import PackageId
from goscope.project import CodeModel
from goscope.renderer.markdown import render_markdown
from goscope.sources import scan_sources

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "code_structure.md"


def analyze(
    project_dir: Path,
    *,
    name: str | None = None,
    exclude: list[str] | None = None,
) -> CodeModel:
    """Build the code model for the Go project at *project_dir*.

    Declarations from every file are registered before any call is
    resolved, so edges do not depend on the order files are visited.
    """
    project_dir = project_dir.resolve()
    if not is_go_project(project_dir):
        logger.debug("No go.mod in %s; package paths are directory-relative", project_dir)

    model = CodeModel(
        project_name=name or project_dir.name,
        module_path=read_module_path(project_dir),
    )

    scan = scan_sources(project_dir, exclude=exclude)
    model.file_stats = scan.stats
    model.directory_tree = scan.tree
    if not scan.go_files:
        logger.warning("No Go files found in %s", project_dir)

    parser = make_parser()
    resolvable: list[tuple[ParsedUnit, PackageId]] = []

    logger.info("Extracting declarations from %d Go files...", len(scan.go_files))
    for relative in scan.go_files:
        result = parse_file(parser, project_dir, relative)
        if isinstance(result, ParseFailure):
            model.parse_failures.append(result.path)
            continue
        unit = extract_unit(result, model.module_path)
        if unit is None:
            continue
        model.units.append(unit)
        register_unit(unit, model.registry)
        resolvable.append((result, unit.package))

    logger.info("Resolving calls...")
    for parsed, package in resolvable:
        resolve_unit_calls(parsed, package, model.registry, model.graph)

    model.entry_points = find_entry_points(model.units)

    logger.debug(
        "%d symbols, %d call edges, %d parse failures",
        len(model.registry),
        len(model.graph),
        len(model.parse_failures),
    )
    return model


def run(
    project_dir: Path,
    *,
    output: Path | None = None,
    name: str | None = None,
    top: int | None = None,
) -> Path:
    """Run the full goscope pipeline and return the output path."""
    project_dir = project_dir.resolve()
    if not project_dir.is_dir():
        logger.error("Not a directory: %s", project_dir)
        sys.exit(1)

    config = load_config(project_dir)
    logger.info("Starting code structure analysis for: %s", project_dir)
    model = analyze(project_dir, name=name, exclude=config.exclude)

    logger.info("Creating report...")
    report = render_markdown(model, top=config.top if top is None else top)

    out_path = output or (project_dir / DEFAULT_OUTPUT)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(report, encoding="utf-8")

    logger.info("Code structure saved to %s", out_path)
    return out_path
