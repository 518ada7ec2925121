"""Offset-based text patches applied to the original source bytes.

Edits are insertions keyed by a byte offset. ``apply`` sorts them stably, so
edits sharing an offset are spliced in the order they were recorded; this is
what lets several interfaces inserted at the file start keep declaration order.
"""

import logging
from dataclasses import dataclass

from tsmigrate.core.ast import Range

logger = logging.getLogger(__name__)


class OffsetOutOfRangeError(AssertionError):
    """An edit was keyed outside the source it is meant to patch."""


@dataclass(frozen=True)
class Edit:
    offset: int
    text: str


class TextEditor:
    def __init__(self, source: str | bytes) -> None:
        self._source = source.encode("utf-8") if isinstance(source, str) else source
        self._edits: list[Edit] = []

    @property
    def edits(self) -> tuple[Edit, ...]:
        return tuple(self._edits)

    def insert_after(self, span: Range, text: str) -> None:
        logger.debug("insert_after %s: %r", span, text)
        self._record(span.end, text)

    def insert_before(self, span: Range, text: str) -> None:
        logger.debug("insert_before %s: %r", span, text)
        self._record(span.start, text)

    def _record(self, offset: int, text: str) -> None:
        if not 0 <= offset <= len(self._source):
            raise OffsetOutOfRangeError(f"Offset {offset} outside source of length {len(self._source)}")
        self._edits.append(Edit(offset, text))

    def apply(self) -> str:
        buf = bytearray()
        pointer = 0
        for edit in sorted(self._edits, key=lambda e: e.offset):
            buf += self._source[pointer : edit.offset]
            buf += edit.text.encode("utf-8")
            pointer = edit.offset
        buf += self._source[pointer:]
        return buf.decode("utf-8")
