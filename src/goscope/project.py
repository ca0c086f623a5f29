"""The queryable result of one analysis run."""

from __future__ import annotations

from dataclasses import dataclass, field

from goscope.analysis import build_package_tree, compute_statistics, rank_by_incoming_calls
from goscope.callgraph import CallGraph, EdgeView
from goscope.model import Declaration, ExtractedUnit, FileStats, Statistics, TreeNode
from goscope.registry import SymbolRegistry


@dataclass
class CodeModel:
    """Registry, call graph, and file data produced by :func:`goscope.pipeline.analyze`."""

    project_name: str
    module_path: str | None = None
    registry: SymbolRegistry = field(default_factory=SymbolRegistry)
    units: list[ExtractedUnit] = field(default_factory=list)
    parse_failures: list[str] = field(default_factory=list)
    entry_points: list[str] = field(default_factory=list)
    file_stats: FileStats = field(default_factory=FileStats)
    directory_tree: TreeNode | None = None
    graph: CallGraph = field(init=False)

    def __post_init__(self) -> None:
        self.graph = CallGraph(self.registry)

    def package_tree(self) -> TreeNode:
        return build_package_tree(self.project_name, self.units)

    def call_graph_edges(self) -> EdgeView:
        return self.graph.edges()

    def statistics(self) -> Statistics:
        return compute_statistics(
            self.units, self.file_stats, self.graph, len(self.parse_failures)
        )

    def ranked_by_incoming_calls(
        self, limit: int | None = None
    ) -> list[tuple[Declaration, int]]:
        return rank_by_incoming_calls(self.registry, self.graph, limit)
