"""Render a CodeModel to a Markdown report."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from string import Template

from goscope.model import (
    CALLABLE_KINDS,
    KIND_DIRECTORY,
    KIND_FILE,
    KIND_FUNCTION,
    KIND_INTERFACE,
    KIND_METHOD,
    KIND_PACKAGE,
    KIND_REPOSITORY,
    KIND_STRUCT,
    Declaration,
    Statistics,
    TreeNode,
)
from goscope.project import CodeModel

_TEMPLATE_PATH = Path(__file__).with_name("template.md")

_TIMESTAMP_FORMAT = "%b %d, %Y %H:%M:%S"


_STAT_ROWS = [
    ("Go Files", "go_files"),
    ("Packages", "packages"),
    ("Functions", "functions"),
    ("Methods", "methods"),
    ("Structs", "structs"),
    ("Interfaces", "interfaces"),
    ("Other Types", "types"),
    ("Test Files", "test_files"),
    ("Directories", "directories"),
    ("Total Lines of Code", "loc"),
    ("Non-Go Files", "non_go_files"),
    ("Total Files", "files"),
    ("Unparsable Go Files", "parse_failures"),
    ("Call Edges", "call_edges"),
]


def node_label(node: TreeNode) -> str:
    """One-line label for a tree node."""
    if node.kind == KIND_REPOSITORY or node.kind == KIND_DIRECTORY:
        return f"{node.name}/"
    if node.kind == KIND_PACKAGE:
        return f"{node.name} ({node.detail})"
    if node.kind == KIND_FUNCTION:
        return f"func {node.name}()"
    if node.kind == KIND_METHOD:
        return f"func ({node.detail}) {node.name}()"
    if node.kind == KIND_STRUCT:
        return f"struct {node.name}"
    if node.kind == KIND_INTERFACE:
        return f"interface {node.name}"
    if node.kind == KIND_FILE:
        return node.name
    return f"{node.name} ({node.kind})"


def render_tree(node: TreeNode, prefix: str = "", is_last: bool = True) -> str:
    """Draw *node* and its descendants with box-drawing connectors."""
    lines: list[str] = []
    _render_node(node, prefix, is_last, lines)
    return "".join(lines)


def _render_node(node: TreeNode, prefix: str, is_last: bool, lines: list[str]) -> None:
    if not node.name:
        return
    connector, extension = ("└── ", "    ") if is_last else ("├── ", "│   ")
    lines.append(f"{prefix}{connector}{node_label(node)}\n")
    for i, child in enumerate(node.children):
        _render_node(child, prefix + extension, i == len(node.children) - 1, lines)


def mermaid_ids(model: CodeModel) -> dict[str, str]:
    """Number every registered key in registry order: ``n0``, ``n1``, ..."""
    return {key: f"n{i}" for i, key in enumerate(model.registry)}


def render_call_graph(model: CodeModel) -> str:
    """Mermaid node definitions for every function/method, then its edges.

    Types reached through conversions such as ``ID(x)`` get a node too.
    """
    ids = mermaid_ids(model)
    edges = list(model.call_graph_edges())
    endpoints = {key for edge in edges for key in (edge.caller_key, edge.callee_key)}
    lines: list[str] = []
    for key, decl in model.registry.items():
        if decl.kind in CALLABLE_KINDS or key in endpoints:
            lines.append(f'    {ids[key]}["{decl.label}"]\n')
    for edge in edges:
        lines.append(f"    {ids[edge.caller_key]} --> {ids[edge.callee_key]}\n")
    return "".join(lines)


def render_statistics(stats: Statistics) -> str:
    rows = ["| Metric | Count |", "|--------|------:|"]
    rows.extend(f"| {label} | {getattr(stats, attr)} |" for label, attr in _STAT_ROWS)
    return "\n".join(rows)


def _display_name(decl: Declaration) -> str:
    if decl.kind == KIND_METHOD:
        return f"({decl.receiver}) {decl.name}"
    return decl.name


def _location(decl: Declaration) -> str:
    if decl.line is None:
        return decl.file_path
    return f"{decl.file_path}:{decl.line}"


def render_most_called(model: CodeModel, top: int | None) -> str:
    ranked = model.ranked_by_incoming_calls(top)
    if not ranked:
        return "*No resolved calls.*"
    rows = [
        "| Function | Type | File | Callers | Call Sites |",
        "|----------|------|------|--------:|-----------:|",
    ]
    for decl, count in ranked:
        rows.append(
            f"| {_display_name(decl)} | {decl.kind} | {_location(decl)} "
            f"| {count} | {decl.call_sites} |"
        )
    return "\n".join(rows)


def render_markdown(
    model: CodeModel,
    *,
    top: int | None = None,
    generated_at: datetime | None = None,
) -> str:
    """Return the full Markdown report for *model*."""
    template = Template(_TEMPLATE_PATH.read_text(encoding="utf-8"))

    module_section = ""
    if model.module_path:
        module_section = (
            f"### Module Information\n\n```text\nmodule {model.module_path}\n```\n\n"
        )

    entry_points_section = ""
    if model.entry_points:
        items = "".join(
            f"{i}. `{entry}`\n" for i, entry in enumerate(model.entry_points, 1)
        )
        entry_points_section = f"### Entry Points\n\n{items}\n"

    directory_tree = ""
    if model.directory_tree is not None:
        directory_tree = render_tree(model.directory_tree)

    return template.safe_substitute(
        generated_at=(generated_at or datetime.now()).strftime(_TIMESTAMP_FORMAT),
        statistics=render_statistics(model.statistics()),
        module_section=module_section,
        entry_points_section=entry_points_section,
        directory_tree=directory_tree,
        code_tree=render_tree(model.package_tree()),
        call_graph=render_call_graph(model),
        most_called=render_most_called(model, top),
    )
