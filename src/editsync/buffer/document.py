"""Core document data structure for editsync buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .edits import apply_text_edits
from .models import TextEdit


@dataclass(slots=True)
class BufferDocument:
    """Immutable-ish text storage built on a simple list-of-lines model.

    Every edit produces a new document with a bumped ``version``; the caller
    swaps its reference once the call returns.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=text.replace("\r\n", "\n").split("\n"), version=0)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "BufferDocument":
        return cls(_lines=list(lines) or [""], version=0)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def apply_edits(
        self, edits: Iterable[TextEdit], *, warn_on_overlap: bool = True
    ) -> "BufferDocument":
        """Return a document with ``edits`` applied and the version bumped."""

        lines = apply_text_edits(self._lines, edits, warn_on_overlap=warn_on_overlap)
        return BufferDocument(_lines=lines, version=self.version + 1)

    @property
    def line_count(self) -> int:
        return len(self._lines)
