"""Buffer model and text edit application."""

from .document import BufferDocument
from .edits import apply_text_edits, offset_for_position, position_for_offset
from .models import Lines, Position, Range, TextEdit
from .validation import ensure_edit, ensure_position

__all__ = [
    "BufferDocument",
    "Lines",
    "Position",
    "Range",
    "TextEdit",
    "apply_text_edits",
    "offset_for_position",
    "position_for_offset",
    "ensure_edit",
    "ensure_position",
]
