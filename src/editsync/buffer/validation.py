"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Optional

from editsync.errors import OffsetError

from .models import Lines, Position, TextEdit


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def ensure_position(
    lines: Lines, position: Position, *, edit: Optional[TextEdit] = None
) -> Position:
    if not (_is_index(position.line) and _is_index(position.character)):
        raise OffsetError(
            "Position components must be non-negative integers",
            position=position,
            edit=edit,
        )
    if position.line >= len(lines):
        raise OffsetError("Line out of range", position=position, edit=edit)
    if position.character > len(lines[position.line]):
        raise OffsetError("Character out of range", position=position, edit=edit)
    return position


def ensure_edit(lines: Lines, edit: TextEdit) -> TextEdit:
    start = ensure_position(lines, edit.range.start, edit=edit)
    end = ensure_position(lines, edit.range.end, edit=edit)
    if end < start:
        raise OffsetError("Range ends before it starts", position=end, edit=edit)
    return edit
