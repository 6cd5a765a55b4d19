"""Apply position-addressed text edits to a list-of-lines buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from editsync.runtime.telemetry import edit_overlap, span

from .models import Lines, Position, TextEdit
from .validation import ensure_edit


@dataclass(frozen=True, slots=True)
class _ResolvedEdit:
    start: int
    end: int
    index: int
    edit: TextEdit


def _flatten_lines(lines: Lines) -> str:
    return "\n".join(lines)


def _line_starts(lines: Lines) -> List[int]:
    starts = []
    running = 0
    for line in lines:
        starts.append(running)
        running += len(line) + 1  # newline
    return starts


def offset_for_position(lines: Lines, position: Position) -> int:
    """Absolute offset of ``position`` in the ``"\\n"``-joined text."""

    offset = 0
    for i in range(position.line):
        offset += len(lines[i]) + 1  # newline
    return offset + position.character


def position_for_offset(lines: Lines, offset: int) -> Position:
    running = 0
    for row, line in enumerate(lines):
        line_len = len(line)
        if offset <= running + line_len:
            return Position(row, max(offset - running, 0))
        running += line_len + 1
    if not lines:
        return Position(0, 0)
    return Position(len(lines) - 1, len(lines[-1]))


def _resolve(lines: Lines, edits: Sequence[TextEdit]) -> List[_ResolvedEdit]:
    starts = _line_starts(lines)
    resolved = []
    for index, edit in enumerate(edits):
        ensure_edit(lines, edit)
        start, end = edit.range.start, edit.range.end
        resolved.append(
            _ResolvedEdit(
                start=starts[start.line] + start.character,
                end=starts[end.line] + end.character,
                index=index,
                edit=edit,
            )
        )
    # Bottom to top, right to left. At a shared start the longer span is
    # spliced first; insertions at one offset end up in listed order.
    resolved.sort(key=lambda item: (item.start, item.end, item.index), reverse=True)
    return resolved


def _find_overlaps(resolved: Sequence[_ResolvedEdit]) -> List[tuple[int, int]]:
    """Index pairs of edits whose spans intersect, in splice order."""

    overlaps = []
    seen: List[_ResolvedEdit] = []
    for item in resolved:
        # seen is ordered by descending start; walk it from the lowest start up.
        for other in reversed(seen):
            if other.start >= item.end:
                break
            overlaps.append((item.index, other.index))
        seen.append(item)
    return overlaps


def apply_text_edits(
    lines: Lines, edits: Iterable[TextEdit], *, warn_on_overlap: bool = True
) -> List[str]:
    """Return the lines obtained by applying ``edits`` to ``lines``.

    Every offset is computed from the unmodified input before any text is
    rewritten, and splices run from the highest offset down, so edits may be
    given in any order. Overlapping edits are not rejected; the output is
    undefined for them and an ``edits.overlap`` warning is recorded.

    Raises :class:`~editsync.errors.OffsetError` if any edit addresses a
    position outside ``lines``; nothing is applied in that case.
    """

    edit_list = list(edits)
    with span(
        "buffer::apply_text_edits",
        component="buffer",
        metadata={"edits": len(edit_list), "lines": len(lines)},
    ) as handle:
        resolved = _resolve(lines, edit_list)
        if not resolved:
            return list(lines)

        if warn_on_overlap:
            overlaps = _find_overlaps(resolved)
            if overlaps:
                handle.add_metadata("overlaps", len(overlaps))
                edit_overlap(overlaps, edits=len(resolved))

        text = _flatten_lines(lines)
        for item in resolved:
            text = text[: item.start] + item.edit.new_text + text[item.end :]

        return text.split("\n")


__all__ = ["apply_text_edits", "offset_for_position", "position_for_offset"]
