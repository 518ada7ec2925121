import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import cast

from tree_sitter import Node, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from tsmigrate.core.languages import normalize_dialect

logger = logging.getLogger(__name__)

FUNCTION_KINDS = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "generator_function_declaration",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)


class ParseFailure(ValueError):
    """Raised when the source cannot be turned into an error-free syntax tree."""


@dataclass(frozen=True)
class Range:
    """Half-open byte range into one source snapshot."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Invalid range: start {self.start} > end {self.end}")

    @classmethod
    def of(cls, node: Node) -> "Range":
        return cls(node.start_byte, node.end_byte)


def parse_source(source: bytes, dialect: str = "typescript", allow_errors: bool = True) -> Tree:
    """Parse ``source`` with the tree-sitter grammar for ``dialect``.

    Raises ``ParseFailure`` if the tree contains syntax errors and
    ``allow_errors`` is false.
    """
    parser = get_parser(cast(SupportedLanguage, normalize_dialect(dialect)))
    tree = parser.parse(source)
    if tree.root_node.has_error:
        if not allow_errors:
            raise ParseFailure(f"Source contains syntax errors ({dialect})")
        logger.warning("Source contains syntax errors (%s); annotating the recovered tree", dialect)
    if logger.isEnabledFor(logging.DEBUG):
        dump_tree(tree.root_node)
    return tree


def node_text(node: Node) -> str:
    text = node.text
    return text.decode("utf-8") if text is not None else ""


def named_children(node: Node) -> list[Node]:
    """Named children without interleaved comments."""
    return [child for child in node.named_children if child.type != "comment"]


def downcast(node: Node | None, *kinds: str) -> Node | None:
    """Return ``node`` if it is one of ``kinds``, otherwise ``None``."""
    if node is not None and node.type in kinds:
        return node
    return None


def field(node: Node, name: str) -> Node | None:
    return node.child_by_field_name(name)


def child_of_kind(node: Node, *kinds: str) -> Node | None:
    for child in node.children:
        if child.type in kinds:
            return child
    return None


def same_node(left: Node | None, right: Node | None) -> bool:
    if left is None or right is None:
        return False
    return (left.type, left.start_byte, left.end_byte) == (right.type, right.start_byte, right.end_byte)


def is_field_of(parent: Node, name: str, child: Node) -> bool:
    """Whether ``child`` sits in the ``name`` field of ``parent``."""
    return same_node(parent.child_by_field_name(name), child)


def ancestors(node: Node) -> Iterator[Node]:
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent


def find_ancestor(node: Node, kinds: frozenset[str] | set[str]) -> Node | None:
    for ancestor in ancestors(node):
        if ancestor.type in kinds:
            return ancestor
    return None


def descendants(root: Node) -> Iterator[Node]:
    """Pre-order (document order) walk of ``root`` and everything below it."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def dump_tree(root: Node) -> None:
    """Log an indented outline of the tree at DEBUG level."""
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if node.is_named:
            logger.debug("%s%s [%d-%d]", " " * depth, node.type, node.start_byte, node.end_byte)
        stack.extend((child, depth + 1) for child in reversed(node.children))
