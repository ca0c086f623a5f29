"""Best-effort static resolution of Go call expressions to symbol keys.

Every call expression inside a function or method body is classified by the
shape of its callee:

* ``f(...)`` -- a bare identifier, always taken to be a function of the
  current package.
* ``alias.F(...)`` where ``alias`` is an import alias -- a function ``F`` of
  the imported package.  The target package need not have been parsed.
* ``x.M(...)`` where ``x`` is anything else -- a method ``M`` on a type
  literally named ``x`` in the current package.  No type information is
  available, so this is usually wrong for variables; it is kept as a
  bounded heuristic rather than a real type inference.
* anything else (indexing, parenthesized or chained calls, literals) --
  not resolved.

Call expressions outside any function or method body (package-level var
initializers) are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from tree_sitter import Node

from goscope.callgraph import CallGraph
from goscope.extractors.go.declarations import CALLABLE_DECL_TYPES, callable_key
from goscope.extractors.go.imports import build_alias_map, default_alias
from goscope.extractors.go.parsing import ParsedUnit, node_text
from goscope.model import PackageId
from goscope.registry import SymbolRegistry, symbol_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BareIdentifier:
    name: str


@dataclass(frozen=True)
class AliasedSelector:
    alias: str
    import_path: str
    name: str


@dataclass(frozen=True)
class UnknownSelector:
    operand: str
    name: str


@dataclass(frozen=True)
class OtherCall:
    node_type: str


CallShape = Union[BareIdentifier, AliasedSelector, UnknownSelector, OtherCall]


@dataclass(frozen=True)
class CallSite:
    """A call expression resolved to a candidate callee key."""

    caller_key: str
    callee_key: str


def classify_call(call: Node, aliases: dict[str, str]) -> CallShape:
    """Classify the callee of a ``call_expression`` node."""
    function = call.child_by_field_name("function")
    if function is None:
        return OtherCall("")

    if function.type == "identifier":
        return BareIdentifier(node_text(function))

    if function.type == "selector_expression":
        operand = function.child_by_field_name("operand")
        field = function.child_by_field_name("field")
        if operand is not None and field is not None and operand.type == "identifier":
            base = node_text(operand)
            if base in aliases:
                return AliasedSelector(base, aliases[base], node_text(field))
            return UnknownSelector(base, node_text(field))

    return OtherCall(function.type)


def resolve_shape(
    shape: CallShape, package: PackageId, registry: SymbolRegistry
) -> str | None:
    """Map a call shape to the symbol key it is assumed to target."""
    if isinstance(shape, BareIdentifier):
        return symbol_key(package, shape.name)
    if isinstance(shape, AliasedSelector):
        name = registry.package_name_for(shape.import_path) or default_alias(
            shape.import_path
        )
        return symbol_key(PackageId(shape.import_path, name), shape.name)
    if isinstance(shape, UnknownSelector):
        return symbol_key(package, shape.name, receiver=shape.operand)
    return None


def iter_call_sites(
    unit: ParsedUnit,
    package: PackageId,
    registry: SymbolRegistry,
    aliases: dict[str, str] | None = None,
) -> Iterator[CallSite]:
    """Yield a candidate call site for every resolvable call in *unit*.

    Candidates are produced whether or not the callee is registered.
    """
    if aliases is None:
        aliases = build_alias_map(unit.root)

    for node in unit.root.children:
        if node.type not in CALLABLE_DECL_TYPES:
            continue
        caller_key = callable_key(node, package)
        body = node.child_by_field_name("body")
        if caller_key is None or body is None:
            continue
        for call in _iter_call_expressions(body):
            callee_key = resolve_shape(classify_call(call, aliases), package, registry)
            if callee_key is not None:
                yield CallSite(caller_key, callee_key)


def _iter_call_expressions(node: Node) -> Iterator[Node]:
    """Depth-first, source-order walk yielding ``call_expression`` nodes."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "call_expression":
            yield current
        stack.extend(reversed(current.children))


def resolve_unit_calls(
    unit: ParsedUnit,
    package: PackageId,
    registry: SymbolRegistry,
    graph: CallGraph,
) -> int:
    """Add edges for every call in *unit* whose endpoints are registered.

    Returns the number of new edges.
    """
    added = 0
    misses = 0
    for site in iter_call_sites(unit, package, registry):
        if graph.record_call(site.caller_key, site.callee_key):
            added += 1
        elif site.callee_key not in registry:
            misses += 1
    logger.debug("%s: %d new call edges, %d unresolved calls", unit.path, added, misses)
    return added
