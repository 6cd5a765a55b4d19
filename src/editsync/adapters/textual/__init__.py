"""Textual host integration."""

from .controller import DocumentSession, TextualSyncHooks

__all__ = ["DocumentSession", "TextualSyncHooks"]
