"""Dataclasses describing protocol positions, ranges, and text edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

Lines = Sequence[str]


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based ``(line, character)`` address within a buffer."""

    line: int
    character: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Position":
        return cls(line=data["line"], character=data["character"])

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open span between two positions."""

    start: Position
    end: Position

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Range":
        return cls(
            start=Position.from_dict(data["start"]),
            end=Position.from_dict(data["end"]),
        )

    @classmethod
    def empty(cls, line: int, character: int) -> "Range":
        position = Position(line, character)
        return cls(position, position)

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace the content addressed by ``range`` with ``new_text``."""

    range: Range
    new_text: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TextEdit":
        return cls(range=Range.from_dict(data["range"]), new_text=data["newText"])

    @classmethod
    def insert(cls, line: int, character: int, text: str) -> "TextEdit":
        return cls(range=Range.empty(line, character), new_text=text)

    @classmethod
    def replace(
        cls, start: tuple[int, int], end: tuple[int, int], text: str
    ) -> "TextEdit":
        return cls(range=Range(Position(*start), Position(*end)), new_text=text)

    def to_dict(self) -> dict[str, Any]:
        return {"range": self.range.to_dict(), "newText": self.new_text}


__all__ = ["Lines", "Position", "Range", "TextEdit"]
