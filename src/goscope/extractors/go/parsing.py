"""Parse Go compilation units via tree-sitter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tsgo.language())


@dataclass
class ParsedUnit:
    """A Go file that parsed without syntax errors."""

    path: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def line_count(self) -> int:
        return len(self.source.split(b"\n"))


@dataclass
class ParseFailure:
    """A Go file that could not be read or contains syntax errors."""

    path: str
    reason: str


def make_parser() -> Parser:
    return Parser(GO_LANGUAGE)


def parse_source(parser: Parser, path: str, source: bytes) -> ParsedUnit | ParseFailure:
    """Parse *source*; any syntax error turns the whole unit into a failure."""
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.debug("Syntax errors in %s, skipping", path)
        return ParseFailure(path=path, reason="syntax error")
    return ParsedUnit(path=path, source=source, tree=tree)


def parse_file(parser: Parser, project_dir: Path, relative: str) -> ParsedUnit | ParseFailure:
    try:
        source = (project_dir / relative).read_bytes()
    except OSError as e:
        logger.debug("Could not read %s: %s", relative, e)
        return ParseFailure(path=relative, reason=str(e))
    return parse_source(parser, relative, source)


def node_text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")
