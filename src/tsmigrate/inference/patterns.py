import logging

from tree_sitter import Node

from tsmigrate.core.ast import Range, node_text
from tsmigrate.inference.resolver import resolve_type
from tsmigrate.inference.text_edit import TextEditor
from tsmigrate.models import Diagnostic, Position

logger = logging.getLogger(__name__)

UNSUPPORTED_PATTERN = "unsupported-pattern"

_UNSUPPORTED_KINDS = frozenset({"rest_pattern", "array_pattern", "this"})


def annotate_pattern(
    editor: TextEditor,
    pattern: Node,
    *,
    annotated: bool = False,
    default: Node | None = None,
    expression: Node | None = None,
    created_type: str | None = None,
) -> Diagnostic | None:
    """Record a ``: <type>`` insertion for one binding pattern.

    The type is ``created_type`` when given, otherwise it is resolved from
    ``expression`` or, failing that, from the pattern's ``default`` value.
    Patterns that already carry an annotation are left alone, as are defaults
    whose type cannot be resolved. Unsupported pattern shapes produce a
    diagnostic instead of an edit.
    """
    if annotated:
        return None

    if pattern.type in ("identifier", "object_pattern"):
        ts_type = created_type or resolve_type(expression if expression is not None else default)
        if ts_type is not None:
            editor.insert_after(Range.of(pattern), f": {ts_type}")
        return None

    if pattern.type in _UNSUPPORTED_KINDS:
        row, column = pattern.start_point
        logger.warning("Skipping unsupported %s at %d:%d: %s", pattern.type, row + 1, column + 1, node_text(pattern))
        return Diagnostic(
            kind=UNSUPPORTED_PATTERN,
            message=f"Cannot annotate {pattern.type.replace('_', ' ')} `{node_text(pattern)}`",
            start_byte=pattern.start_byte,
            end_byte=pattern.end_byte,
            position=Position(row=row, column=column),
        )

    logger.debug("Ignoring %s binding", pattern.type)
    return None
