"""Extract package identity, functions, methods, and types from a Go unit."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import PurePosixPath

from tree_sitter import Node

from goscope.extractors.go.parsing import ParsedUnit, node_text
from goscope.model import (
    KIND_FUNCTION,
    KIND_INTERFACE,
    KIND_METHOD,
    KIND_STRUCT,
    KIND_TYPE,
    Declaration,
    ExtractedUnit,
    PackageId,
)
from goscope.registry import SymbolRegistry, symbol_key

logger = logging.getLogger(__name__)

FUNCTION_DECL = "function_declaration"
METHOD_DECL = "method_declaration"
CALLABLE_DECL_TYPES = {FUNCTION_DECL, METHOD_DECL}

# tree-sitter node types inside a type_declaration that name a type.
_TYPE_SPEC_TYPES = {"type_spec", "type_alias"}

_TYPE_KINDS = {
    "struct_type": KIND_STRUCT,
    "interface_type": KIND_INTERFACE,
}

# Wrappers around a receiver's base type: *T, (T), T[K, V].
_RECEIVER_WRAPPERS = {"pointer_type", "parenthesized_type"}


def package_name(root: Node) -> str | None:
    """Return the name in the unit's ``package`` clause, or None."""
    for child in root.children:
        if child.type != "package_clause":
            continue
        for ident in child.named_children:
            if ident.type == "package_identifier":
                return node_text(ident)
    return None


def package_path(relative_file: str, module_path: str | None) -> str:
    """Canonical path of the package a file belongs to.

    With a known module path this is the Go import path of the file's
    directory; otherwise it is the directory relative to the project root.
    """
    directory = PurePosixPath(relative_file).parent.as_posix()
    if not module_path:
        return directory
    if directory == ".":
        return module_path
    return f"{module_path}/{directory}"


def receiver_type_name(receiver: Node | None) -> str | None:
    """Base type name of a method receiver, without ``*`` or type parameters."""
    if receiver is None:
        return None
    for param in receiver.named_children:
        if param.type == "parameter_declaration":
            return _base_type_name(param.child_by_field_name("type"))
    return None


def _base_type_name(node: Node | None) -> str | None:
    while node is not None:
        if node.type == "type_identifier":
            return node_text(node)
        if node.type in _RECEIVER_WRAPPERS:
            node = node.named_children[0] if node.named_children else None
        elif node.type == "generic_type":
            node = node.child_by_field_name("type")
        else:
            return None
    return None


def callable_key(node: Node, package: PackageId) -> str | None:
    """Symbol key of a function or method declaration node."""
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    receiver = None
    if node.type == METHOD_DECL:
        receiver = receiver_type_name(node.child_by_field_name("receiver"))
    return symbol_key(package, node_text(name_node), receiver)


def extract_unit(unit: ParsedUnit, module_path: str | None = None) -> ExtractedUnit | None:
    """Return the declarations of *unit*, or None if it has no package clause."""
    name = package_name(unit.root)
    if name is None:
        logger.debug("No package clause in %s, skipping", unit.path)
        return None

    package = PackageId(path=package_path(unit.path, module_path), name=name)
    return ExtractedUnit(
        path=unit.path,
        package=package,
        directory=PurePosixPath(unit.path).parent.as_posix(),
        declarations=list(iter_declarations(unit.root, unit.path)),
        loc=unit.line_count,
    )


def iter_declarations(root: Node, file_path: str) -> Iterator[Declaration]:
    """Yield top-level declarations of a Go source file in source order."""
    for node in root.children:
        if node.type in CALLABLE_DECL_TYPES:
            decl = _extract_callable(node, file_path)
            if decl is not None:
                yield decl
        elif node.type == "type_declaration":
            for spec in node.named_children:
                if spec.type in _TYPE_SPEC_TYPES:
                    decl = _extract_type(spec, file_path)
                    if decl is not None:
                        yield decl


def _extract_callable(node: Node, file_path: str) -> Declaration | None:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None

    kind = KIND_FUNCTION
    receiver = None
    if node.type == METHOD_DECL:
        kind = KIND_METHOD
        receiver = receiver_type_name(node.child_by_field_name("receiver"))

    return Declaration(
        name=node_text(name_node),
        kind=kind,
        file_path=file_path,
        receiver=receiver,
        line=node.start_point[0] + 1,
    )


def _extract_type(spec: Node, file_path: str) -> Declaration | None:
    name_node = spec.child_by_field_name("name")
    if name_node is None:
        return None
    type_node = spec.child_by_field_name("type")
    kind = _TYPE_KINDS.get(type_node.type, KIND_TYPE) if type_node is not None else KIND_TYPE
    return Declaration(
        name=node_text(name_node),
        kind=kind,
        file_path=file_path,
        line=spec.start_point[0] + 1,
    )


def register_unit(unit: ExtractedUnit, registry: SymbolRegistry) -> int:
    """Insert the unit's package and declarations into *registry*.

    Returns the number of declarations actually inserted.
    """
    registry.register_package(unit.package)
    inserted = 0
    for decl in unit.declarations:
        key = symbol_key(unit.package, decl.name, decl.receiver)
        if registry.register(key, decl):
            inserted += 1
    return inserted
