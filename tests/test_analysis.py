from goscope.analysis import build_package_tree, compute_statistics, rank_by_incoming_calls
from goscope.callgraph import CallGraph
from goscope.model import Declaration, ExtractedUnit, FileStats, PackageId
from goscope.registry import SymbolRegistry


def _registry_with(*names_and_kinds):
    registry = SymbolRegistry()
    for name, kind in names_and_kinds:
        registry.register(f"p:p:{name}", Declaration(name=name, kind=kind, file_path="a.go"))
    return registry


class TestRanking:
    def test_descending_with_discovery_order_ties(self):
        registry = _registry_with(
            ("A", "function"),
            ("B", "function"),
            ("C", "function"),
            ("D", "function"),
            ("E", "function"),
        )
        graph = CallGraph(registry)
        # C: 2 callers, B and D: 1 caller each, A and E: none.
        graph.add_edge("p:p:A", "p:p:C")
        graph.add_edge("p:p:E", "p:p:C")
        graph.add_edge("p:p:A", "p:p:D")
        graph.add_edge("p:p:A", "p:p:B")

        ranked = [(d.name, n) for d, n in rank_by_incoming_calls(registry, graph)]
        assert ranked == [("C", 2), ("B", 1), ("D", 1)]

    def test_repeated_runs_are_identical(self):
        def build():
            registry = _registry_with(("A", "function"), ("B", "method"), ("C", "function"))
            graph = CallGraph(registry)
            graph.add_edge("p:p:A", "p:p:B")
            graph.add_edge("p:p:A", "p:p:C")
            return [(d.name, n) for d, n in rank_by_incoming_calls(registry, graph)]

        assert build() == build() == [("B", 1), ("C", 1)]

    def test_only_callables_and_limit(self):
        registry = _registry_with(("A", "function"), ("T", "struct"), ("B", "function"), ("C", "function"))
        graph = CallGraph(registry)
        graph.add_edge("p:p:A", "p:p:T")
        graph.add_edge("p:p:A", "p:p:B")
        graph.add_edge("p:p:A", "p:p:C")

        ranked = rank_by_incoming_calls(registry, graph, limit=1)
        assert [d.name for d, _ in ranked] == ["B"]


class TestStatistics:
    def test_counts_every_parsed_declaration(self):
        pkg = PackageId("p", "p")
        units = [
            ExtractedUnit(
                path="p/a.go",
                package=pkg,
                directory="p",
                declarations=[
                    Declaration(name="init", kind="function", file_path="p/a.go"),
                    Declaration(name="T", kind="struct", file_path="p/a.go"),
                    Declaration(name="M", kind="method", file_path="p/a.go", receiver="T"),
                ],
                loc=10,
            ),
            ExtractedUnit(
                path="p/b.go",
                package=pkg,
                directory="p",
                declarations=[
                    Declaration(name="init", kind="function", file_path="p/b.go"),
                    Declaration(name="I", kind="interface", file_path="p/b.go"),
                    Declaration(name="ID", kind="type", file_path="p/b.go"),
                ],
                loc=5,
            ),
        ]
        file_stats = FileStats(total_files=3, go_files=2, non_go_files=1, directories=1)

        stats = compute_statistics(units, file_stats, CallGraph(SymbolRegistry()), parse_failures=1)

        assert stats.packages == 1
        assert stats.functions == 2
        assert stats.methods == 1
        assert stats.structs == 1
        assert stats.interfaces == 1
        assert stats.types == 1
        assert stats.loc == 15
        assert stats.files == 3
        assert stats.parse_failures == 1
        assert stats.call_edges == 0


class TestPackageTree:
    def test_sorted_packages_then_declarations(self):
        units = [
            ExtractedUnit(
                path="z/z.go",
                package=PackageId("z", "zeta"),
                directory="z",
                declarations=[
                    Declaration(name="b", kind="function", file_path="z/z.go"),
                    Declaration(name="String", kind="method", file_path="z/z.go", receiver="Y"),
                    Declaration(name="String", kind="method", file_path="z/z.go", receiver="X"),
                ],
            ),
            ExtractedUnit(
                path="a/a.go",
                package=PackageId("a", "alpha"),
                directory="a",
                declarations=[Declaration(name="A", kind="function", file_path="a/a.go")],
            ),
        ]

        tree = build_package_tree("proj", units)

        assert tree.kind == "repository"
        assert [c.name for c in tree.children] == ["alpha", "zeta"]
        zeta = tree.children[1]
        assert zeta.detail == "z"
        assert [(c.name, c.detail) for c in zeta.children] == [
            ("String", "X"),
            ("String", "Y"),
            ("b", None),
        ]

    def test_units_of_one_package_share_a_node(self):
        pkg = PackageId("p", "p")
        units = [
            ExtractedUnit(path="p/a.go", package=pkg, directory="p",
                          declarations=[Declaration(name="A", kind="function", file_path="p/a.go")]),
            ExtractedUnit(path="p/b.go", package=pkg, directory="p",
                          declarations=[Declaration(name="B", kind="function", file_path="p/b.go")]),
        ]
        tree = build_package_tree("proj", units)
        assert len(tree.children) == 1
        assert [c.name for c in tree.children[0].children] == ["A", "B"]
