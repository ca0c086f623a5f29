"""Walk a project directory: Go sources, file tallies, and directory tree."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from goscope.analysis import sort_tree
from goscope.model import KIND_DIRECTORY, KIND_FILE, FileStats, TreeNode

logger = logging.getLogger(__name__)

# Directories never descended into.
SKIP_DIRS = {".git", "vendor"}


@dataclass
class SourceScan:
    """Result of walking a project directory."""

    go_files: list[str] = field(default_factory=list)  # Relative POSIX paths
    stats: FileStats = field(default_factory=FileStats)
    tree: TreeNode | None = None


def is_test_file(relative: str) -> bool:
    return relative.endswith("_test.go")


def scan_sources(project_dir: Path, exclude: list[str] | None = None) -> SourceScan:
    """Walk *project_dir* in sorted order, skipping VCS/vendor directories."""
    skip = SKIP_DIRS | set(exclude or ())
    scan = SourceScan(tree=TreeNode(name=project_dir.name, kind=KIND_DIRECTORY))
    dir_nodes: dict[str, TreeNode] = {".": scan.tree}

    for dirpath, dirnames, filenames in os.walk(project_dir):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        rel_dir = Path(dirpath).relative_to(project_dir).as_posix()
        parent = dir_nodes[rel_dir]

        for name in dirnames:
            child = TreeNode(name=name, kind=KIND_DIRECTORY)
            parent.children.append(child)
            dir_nodes[_join(rel_dir, name)] = child
            scan.stats.directories += 1

        for name in sorted(filenames):
            relative = _join(rel_dir, name)
            parent.children.append(TreeNode(name=name, kind=KIND_FILE))
            scan.stats.total_files += 1
            if name.endswith(".go"):
                scan.stats.go_files += 1
                if is_test_file(name):
                    scan.stats.test_files += 1
                scan.go_files.append(relative)
            else:
                scan.stats.non_go_files += 1

    sort_tree(scan.tree)
    logger.debug(
        "Scanned %d files (%d Go) in %d directories",
        scan.stats.total_files,
        scan.stats.go_files,
        scan.stats.directories,
    )
    return scan


def _join(rel_dir: str, name: str) -> str:
    return name if rel_dir == "." else f"{rel_dir}/{name}"
