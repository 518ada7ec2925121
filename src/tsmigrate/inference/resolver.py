"""Map an expression node to a TypeScript type name.

``resolve_type`` returns ``None`` when the expression says nothing useful about
its type; callers decide whether that means ``any`` or "leave it alone".
"""

import logging

from tree_sitter import Node

from tsmigrate.core.ast import field, named_children, node_text

logger = logging.getLogger(__name__)

BIGINT = "BigInt"

_LITERAL_TYPES = {
    "string": "string",
    "true": "boolean",
    "false": "boolean",
    "regex": "RegExp",
    "null": "any",
    "undefined": "any",
    "object": "any",
}

_ASSIGNMENT_KINDS = frozenset({"assignment_expression", "augmented_assignment_expression"})


def resolve_type(expression: Node | None) -> str | None:
    if expression is None:
        return "any"

    kind = expression.type
    if kind == "number":
        return BIGINT if node_text(expression).endswith("n") else "number"
    if kind in _LITERAL_TYPES:
        return _LITERAL_TYPES[kind]
    if kind == "identifier" and node_text(expression) == "undefined":
        return "any"
    if kind == "array":
        return _resolve_array(expression)
    if kind in _ASSIGNMENT_KINDS:
        right = field(expression, "right")
        return resolve_type(right) if right is not None else None
    if kind == "call_expression":
        return BIGINT if _is_bigint_call(expression) else "Function"

    logger.debug("Unresolved expression kind %s", kind)
    return None


def _resolve_array(array: Node) -> str:
    found: str | None = None
    for element in named_children(array):
        element_type = None if element.type == "spread_element" else resolve_type(element)
        if element_type is None or (found is not None and found != element_type):
            return "any[]"
        found = element_type
    return f"{found}[]" if found is not None else "any[]"


def _is_bigint_call(call: Node) -> bool:
    callee = field(call, "function")
    return callee is not None and callee.type == "identifier" and node_text(callee) == BIGINT
