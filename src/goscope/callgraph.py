"""Caller -> callee edges stored as key lists on registered declarations."""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

from goscope.registry import SymbolRegistry


class CallEdge(NamedTuple):
    caller_key: str
    callee_key: str
    caller_label: str
    callee_label: str


class EdgeView:
    """Re-iterable view over every edge currently in a call graph."""

    def __init__(self, registry: SymbolRegistry) -> None:
        self._registry = registry

    def __iter__(self) -> Iterator[CallEdge]:
        for caller_key, caller in self._registry.items():
            for callee_key in caller.calls:
                callee = self._registry.get(callee_key)
                if callee is None:
                    continue
                yield CallEdge(caller_key, callee_key, caller.label, callee.label)

    def __len__(self) -> int:
        return sum(len(decl.calls) for decl in self._registry.values())


class CallGraph:
    """Directed call graph over the declarations of a :class:`SymbolRegistry`.

    Both endpoints of every edge are registered declarations.  The caller
    keeps the callee key in ``calls`` and the callee keeps the caller key in
    ``called_by``; :meth:`add_edge` is the only place either list grows.
    """

    def __init__(self, registry: SymbolRegistry) -> None:
        self._registry = registry

    def add_edge(self, caller_key: str, callee_key: str) -> bool:
        """Link *caller_key* to *callee_key*; return True if a new edge was made."""
        caller = self._registry.get(caller_key)
        callee = self._registry.get(callee_key)
        if caller is None or callee is None:
            return False
        if callee_key in caller.calls:
            return False
        caller.calls.append(callee_key)
        callee.called_by.append(caller_key)
        return True

    def record_call(self, caller_key: str, callee_key: str) -> bool:
        """Count one resolved call site and add the corresponding edge."""
        callee = self._registry.get(callee_key)
        if callee is None or caller_key not in self._registry:
            return False
        callee.call_sites += 1
        return self.add_edge(caller_key, callee_key)

    def incoming_count(self, key: str) -> int:
        """Number of distinct callers of *key*."""
        decl = self._registry.get(key)
        return len(decl.called_by) if decl is not None else 0

    def call_sites(self, key: str) -> int:
        """Number of resolved call expressions that target *key*."""
        decl = self._registry.get(key)
        return decl.call_sites if decl is not None else 0

    def edges(self) -> EdgeView:
        return EdgeView(self._registry)

    def __len__(self) -> int:
        return len(self.edges())
