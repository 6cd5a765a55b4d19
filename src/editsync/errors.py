"""Exception types raised across editsync."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from editsync.buffer.models import Position, TextEdit


class EditsyncError(RuntimeError):
    """Base class for every error raised by this package."""


class OffsetError(EditsyncError):
    """Raised when an edit addresses a position outside the buffer."""

    def __init__(
        self,
        message: str,
        *,
        position: Optional["Position"] = None,
        edit: Optional["TextEdit"] = None,
    ) -> None:
        super().__init__(message)
        self.position = position
        self.edit = edit


class ProjectRootError(EditsyncError):
    """Raised when no directory can serve as the project root."""


class ConfigError(EditsyncError):
    """Raised when settings overrides carry values of the wrong type."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


__all__ = ["EditsyncError", "OffsetError", "ProjectRootError", "ConfigError"]
