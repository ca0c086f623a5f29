"""
Pytest configuration and fixtures for goscope tests.
"""

from pathlib import Path
from typing import Callable

import pytest

from goscope.extractors.go.parsing import ParsedUnit, make_parser, parse_source


@pytest.fixture
def go_parser():
    """Create a tree-sitter parser for Go."""
    return make_parser()


@pytest.fixture
def parse_go(go_parser) -> Callable[..., ParsedUnit]:
    """Parse a Go snippet that is expected to be valid."""

    def _parse(source: str, path: str = "p/a.go") -> ParsedUnit:
        result = parse_source(go_parser, path, source.encode("utf-8"))
        assert isinstance(result, ParsedUnit), f"unexpected parse failure for {path}"
        return result

    return _parse


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Write ``{relative path: content}`` under *root*."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def sample_go_project(tmp_path: Path) -> Path:
    """Create a small Go module with two packages, an entry point, and noise."""
    project = tmp_path / "shop"
    return write_files(
        project,
        {
            "go.mod": "module example.com/shop\n\ngo 1.22\n",
            "README.md": "# shop\n",
            "cmd/shop/main.go": '''package main

import (
	"fmt"

	"example.com/shop/store"
)

func main() {
	s := store.NewStore()
	fmt.Println(s)
	run()
	run()
}

func run() {
	store.NewStore()
}
''',
            "store/store.go": '''package store

type Store struct {
	items map[string]int
}

type Repository interface {
	Get(id string) int
}

type ID string

func NewStore() *Store {
	return newStore()
}

func (s *Store) Get(id string) int {
	return s.items[id]
}
''',
            "store/helpers.go": '''package store

func newStore() *Store {
	return &Store{items: map[string]int{}}
}
''',
            "store/broken.go": "package store\n\nfunc Broken( {\n",
            "vendor/dep/dep.go": "package dep\n\nfunc Vendored() {}\n",
            ".git/HEAD": "ref: refs/heads/main\n",
        },
    )


@pytest.fixture
def make_go_project(tmp_path: Path) -> Callable[..., Path]:
    """Write a throwaway project from a ``{relative path: content}`` mapping."""

    def _make(files: dict[str, str], name: str = "proj") -> Path:
        return write_files(tmp_path / name, files)

    return _make
