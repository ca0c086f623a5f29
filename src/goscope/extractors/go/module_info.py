"""Module path from go.mod and entry-point (``package main``) discovery."""

from __future__ import annotations

import logging
from pathlib import Path

from goscope.model import KIND_FUNCTION, ExtractedUnit

logger = logging.getLogger(__name__)


def read_module_path(project_dir: Path) -> str | None:
    """Return the ``module`` path declared in *project_dir*/go.mod, or None."""
    go_mod = project_dir / "go.mod"
    try:
        content = go_mod.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug("Could not read %s: %s", go_mod, e)
        return None

    for line in content.splitlines():
        line = line.strip()
        if line.startswith("module ") or line.startswith("module\t"):
            module = line[len("module"):].split("//", 1)[0].strip().strip('"`')
            if module:
                return module

    logger.warning("module declaration not found in %s", go_mod)
    return None


def find_entry_points(units: list[ExtractedUnit]) -> list[str]:
    """Directories holding a ``package main`` with a receiver-less ``func main``."""
    entry_points: list[str] = []
    for unit in units:
        if unit.package.name != "main" or unit.directory in entry_points:
            continue
        if any(
            decl.kind == KIND_FUNCTION and decl.name == "main"
            for decl in unit.declarations
        ):
            entry_points.append(unit.directory)
    return entry_points
