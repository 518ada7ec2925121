"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_parser

from tsmigrate.core.ast import descendants

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag every collected test as "unit"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def typescript_parser() -> Parser:
    """Return a tree-sitter parser for the TypeScript grammar."""
    return get_parser("typescript")


@pytest.fixture
def tsx_parser() -> Parser:
    """Return a tree-sitter parser for the TSX grammar."""
    return get_parser("tsx")


@pytest.fixture
def parse(typescript_parser: Parser) -> Callable[[str], Node]:
    """Return a helper that parses a snippet and yields its root node."""

    def _parse(code: str) -> Node:
        return typescript_parser.parse(code.encode("utf-8")).root_node

    return _parse


@pytest.fixture
def first_of_kind() -> Callable[[Node, str], Node]:
    """Return a helper that finds the first node of a kind in document order."""

    def _first(root: Node, kind: str) -> Node:
        for node in descendants(root):
            if node.type == kind:
                return node
        raise AssertionError(f"No {kind} node in tree")

    return _first
