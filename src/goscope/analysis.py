"""Post-extraction aggregation: statistics, call ranking, package tree."""

from __future__ import annotations

from goscope.callgraph import CallGraph
from goscope.model import (
    CALLABLE_KINDS,
    KIND_FUNCTION,
    KIND_INTERFACE,
    KIND_METHOD,
    KIND_PACKAGE,
    KIND_REPOSITORY,
    KIND_STRUCT,
    KIND_TYPE,
    Declaration,
    ExtractedUnit,
    FileStats,
    PackageId,
    Statistics,
    TreeNode,
)
from goscope.registry import SymbolRegistry

_KIND_FIELDS = {
    KIND_FUNCTION: "functions",
    KIND_METHOD: "methods",
    KIND_STRUCT: "structs",
    KIND_INTERFACE: "interfaces",
    KIND_TYPE: "types",
}


def compute_statistics(
    units: list[ExtractedUnit],
    file_stats: FileStats,
    graph: CallGraph,
    parse_failures: int = 0,
) -> Statistics:
    """Tally declarations and lines over every extracted unit.

    Declarations are counted as parsed, so two ``init`` functions in one
    package count twice even though only the first is registered.
    """
    stats = Statistics(
        files=file_stats.total_files,
        go_files=file_stats.go_files,
        test_files=file_stats.test_files,
        non_go_files=file_stats.non_go_files,
        directories=file_stats.directories,
        parse_failures=parse_failures,
        call_edges=len(graph),
    )
    packages: set[PackageId] = set()
    for unit in units:
        packages.add(unit.package)
        stats.loc += unit.loc
        for decl in unit.declarations:
            field_name = _KIND_FIELDS.get(decl.kind)
            if field_name is not None:
                setattr(stats, field_name, getattr(stats, field_name) + 1)
    stats.packages = len(packages)
    return stats


def rank_by_incoming_calls(
    registry: SymbolRegistry, graph: CallGraph, limit: int | None = None
) -> list[tuple[Declaration, int]]:
    """Functions and methods with at least one caller, most-called first.

    Ties keep registry (discovery) order.
    """
    candidates = [
        (decl, graph.incoming_count(key))
        for key, decl in registry.items()
        if decl.kind in CALLABLE_KINDS
    ]
    ranked = sorted(
        (item for item in candidates if item[1] > 0),
        key=lambda item: -item[1],
    )
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


def build_package_tree(project_name: str, units: list[ExtractedUnit]) -> TreeNode:
    """Build root -> packages -> declarations, in deterministic order."""
    root = TreeNode(name=project_name, kind=KIND_REPOSITORY)
    packages: dict[PackageId, TreeNode] = {}

    for unit in units:
        node = packages.get(unit.package)
        if node is None:
            node = TreeNode(name=unit.package.name, kind=KIND_PACKAGE, detail=unit.directory)
            packages[unit.package] = node
            root.children.append(node)
        for decl in unit.declarations:
            node.children.append(
                TreeNode(name=decl.name, kind=decl.kind, detail=decl.receiver)
            )

    sort_tree(root)
    return root


def sort_tree(node: TreeNode) -> None:
    """Sort children recursively: branches before leaves, then by name."""
    node.children.sort(key=lambda c: (not c.is_branch, c.name, c.detail or ""))
    for child in node.children:
        sort_tree(child)
