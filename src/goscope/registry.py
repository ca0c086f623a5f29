"""Symbol registry: qualified symbol key -> declaration, first seen wins."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from goscope.model import Declaration, PackageId

logger = logging.getLogger(__name__)


def symbol_key(package: PackageId, name: str, receiver: str | None = None) -> str:
    """Return the qualified key for *name* declared in *package*.

    Functions and types use ``path:pkg:Name``; methods use
    ``path:pkg:Recv.Name`` so they never collide with a function ``Name``.
    """
    member = f"{receiver}.{name}" if receiver else name
    return f"{package.path}:{package.name}:{member}"


class SymbolRegistry:
    """Table of every declaration registered during one analysis run."""

    def __init__(self) -> None:
        self._symbols: dict[str, Declaration] = {}
        # package path -> package names seen at that path, in discovery order
        self._packages: dict[str, list[str]] = {}

    def register(self, key: str, declaration: Declaration) -> bool:
        """Insert *declaration* under *key* unless the key is already taken.

        Returns True when inserted.  A second declaration under an existing
        key is dropped and the first one stays in place.
        """
        if key in self._symbols:
            logger.debug(
                "Duplicate symbol %s in %s (first declared in %s)",
                key,
                declaration.file_path,
                self._symbols[key].file_path,
            )
            return False
        self._symbols[key] = declaration
        return True

    def register_package(self, package: PackageId) -> None:
        names = self._packages.setdefault(package.path, [])
        if package.name not in names:
            names.append(package.name)

    def package_name_for(self, path: str) -> str | None:
        """Return the importable package name registered at *path*, if any.

        External test packages (``foo_test``) cannot be imported and are
        only returned when nothing else lives at *path*.
        """
        names = self._packages.get(path)
        if not names:
            return None
        for name in names:
            if not name.endswith("_test"):
                return name
        return names[0]

    def get(self, key: str) -> Declaration | None:
        return self._symbols.get(key)

    def items(self) -> Iterator[tuple[str, Declaration]]:
        return iter(self._symbols.items())

    def values(self) -> Iterator[Declaration]:
        return iter(self._symbols.values())

    def __contains__(self, key: object) -> bool:
        return key in self._symbols

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)
