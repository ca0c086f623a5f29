"""Data model for Go code structure analysis."""

from __future__ import annotations

from dataclasses import dataclass, field

KIND_REPOSITORY = "repository"
KIND_DIRECTORY = "directory"
KIND_FILE = "file"
KIND_PACKAGE = "package"
KIND_FUNCTION = "function"
KIND_METHOD = "method"
KIND_STRUCT = "struct"
KIND_INTERFACE = "interface"
KIND_TYPE = "type"

CALLABLE_KINDS = frozenset({KIND_FUNCTION, KIND_METHOD})
BRANCH_KINDS = frozenset({KIND_REPOSITORY, KIND_DIRECTORY, KIND_PACKAGE})


@dataclass
class Declaration:
    """A function, method, or named type declared in a Go package."""

    name: str
    kind: str  # "function", "method", "struct", "interface", "type"
    file_path: str
    receiver: str | None = None  # Only set for methods
    line: int | None = None
    calls: list[str] = field(default_factory=list)  # Symbol keys
    called_by: list[str] = field(default_factory=list)  # Symbol keys
    call_sites: int = 0  # Resolved call expressions targeting this declaration

    @property
    def label(self) -> str:
        """Display name: ``Recv.Name`` for methods, ``Name`` otherwise."""
        if self.kind == KIND_METHOD and self.receiver:
            return f"{self.receiver}.{self.name}"
        return self.name


@dataclass(frozen=True)
class PackageId:
    """Identity of a Go package: canonical path plus short name."""

    path: str
    name: str

    def __str__(self) -> str:
        return f"{self.path}:{self.name}"


@dataclass
class ExtractedUnit:
    """Declarations contributed by one successfully parsed Go file."""

    path: str  # Relative to the project root, POSIX separators
    package: PackageId
    directory: str  # Relative directory of the file ("." for the root)
    declarations: list[Declaration] = field(default_factory=list)
    loc: int = 0


@dataclass
class TreeNode:
    """A node in a rendered hierarchy (directory tree or package tree)."""

    name: str
    kind: str
    detail: str | None = None  # Package path or method receiver
    children: list[TreeNode] = field(default_factory=list)

    @property
    def is_branch(self) -> bool:
        return self.kind in BRANCH_KINDS


@dataclass
class FileStats:
    """File-system tallies gathered while walking the project."""

    total_files: int = 0
    go_files: int = 0
    test_files: int = 0
    non_go_files: int = 0
    directories: int = 0


@dataclass
class Statistics:
    """Aggregate counters for one analysis run."""

    files: int = 0
    go_files: int = 0
    test_files: int = 0
    non_go_files: int = 0
    directories: int = 0
    packages: int = 0
    functions: int = 0
    methods: int = 0
    structs: int = 0
    interfaces: int = 0
    types: int = 0
    loc: int = 0
    parse_failures: int = 0
    call_edges: int = 0
