"""Map the import aliases of a Go unit to the paths they import."""

from __future__ import annotations

from collections.abc import Iterator

from tree_sitter import Node

from goscope.extractors.go.parsing import node_text


def default_alias(import_path: str) -> str:
    """The name an unaliased import binds: the last path segment."""
    return import_path.rstrip("/").rsplit("/", 1)[-1]


def build_alias_map(root: Node) -> dict[str, str]:
    """Return ``{alias: import path}`` for every import in the unit.

    An explicit name (including ``.`` and ``_``) is used verbatim.  When two
    imports bind the same alias the later one wins.
    """
    aliases: dict[str, str] = {}
    for spec in _iter_import_specs(root):
        path_node = spec.child_by_field_name("path")
        if path_node is None:
            continue
        import_path = node_text(path_node).strip('"`')
        if not import_path:
            continue
        name_node = spec.child_by_field_name("name")
        if name_node is not None:
            alias = node_text(name_node)
        else:
            alias = default_alias(import_path)
        aliases[alias] = import_path
    return aliases


def _iter_import_specs(root: Node) -> Iterator[Node]:
    for decl in root.children:
        if decl.type != "import_declaration":
            continue
        for child in decl.named_children:
            if child.type == "import_spec":
                yield child
            elif child.type == "import_spec_list":
                for spec in child.named_children:
                    if spec.type == "import_spec":
                        yield spec
