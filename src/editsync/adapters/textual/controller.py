"""Session controller that owns a document and its signs for a Textual host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from editsync.buffer import BufferDocument, TextEdit
from editsync.config import Settings
from editsync.errors import OffsetError
from editsync.runtime import telemetry
from editsync.signs import (
    Sign,
    SignCommand,
    format_command_batch,
    reconcile_signs,
    signs_from_diagnostics,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualSyncHooks:
    """Callbacks invoked by the session to update Textual widgets."""

    update_buffer: Callable[[Sequence[str]], None]
    update_signs: Callable[[Sequence[Sign]], None] = _noop
    run_command: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


def _coerce_edit(edit: TextEdit | Mapping[str, Any]) -> TextEdit:
    if isinstance(edit, TextEdit):
        return edit
    return TextEdit.from_dict(edit)


class DocumentSession:
    """Holds the buffer and sign state of one open document."""

    def __init__(
        self,
        filename: str,
        hooks: TextualSyncHooks,
        *,
        document: Optional[BufferDocument] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.filename = filename
        self.hooks = hooks
        self.settings = settings or Settings()
        self.document = document or BufferDocument()
        self.signs: List[Sign] = []
        self.logger = telemetry.get_logger("editsync.session")
        self._refresh_buffer()

    def apply_edits(
        self, edits: Iterable[TextEdit | Mapping[str, Any]]
    ) -> BufferDocument:
        """Apply a server change set; the document is unchanged on failure."""

        coerced = [_coerce_edit(edit) for edit in edits]
        self._log_state("edits ->", count=len(coerced))
        try:
            self.document = self.document.apply_edits(
                coerced, warn_on_overlap=self.settings.warn_on_overlap
            )
        except OffsetError as exc:
            self.logger.warning(f"edits rejected for {self.filename}: {exc}")
            self.hooks.update_status(f"edit_error:{exc}")
            self._log_state("edits !!", error=str(exc))
            raise
        self.hooks.update_status(f"edits:{len(coerced)}")
        self._refresh_buffer()
        return self.document

    def update_signs(self, signs: Sequence[Sign]) -> List[SignCommand]:
        """Replace the sign set and push the delta to the host."""

        commands = reconcile_signs(self.signs, signs, self.filename)
        self.signs = list(signs)
        self._log_state("signs ->", commands=len(commands))
        if commands:
            self.hooks.run_command(
                format_command_batch(
                    commands, name_prefix=self.settings.sign_name_prefix
                )
            )
        self.hooks.update_signs(tuple(self.signs))
        return commands

    def update_diagnostics(
        self, diagnostics: Iterable[Mapping[str, Any]]
    ) -> List[SignCommand]:
        signs = signs_from_diagnostics(
            diagnostics, id_base=self.settings.sign_id_base
        )
        return self.update_signs(signs)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.document.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "file": self.filename,
            "version": self.document.version,
            "lines": self.document.line_count,
            "signs": len(self.signs),
        }


__all__ = ["DocumentSession", "TextualSyncHooks"]
