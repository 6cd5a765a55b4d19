"""Executable Textual app that replays a change set against a file."""

from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use editsync.adapters.textual.app"
    ) from exc

from editsync.buffer import BufferDocument
from editsync.config import Settings
from editsync.errors import OffsetError
from editsync.runtime import telemetry
from editsync.signs import Sign, Severity

from .controller import DocumentSession, TextualSyncHooks

_GUTTER = {
    Severity.ERROR: "E",
    Severity.WARNING: "W",
    Severity.INFORMATION: "I",
    Severity.HINT: "H",
}


def render_with_gutter(lines: Sequence[str], signs: Sequence[Sign]) -> str:
    """Prefix each line with the most severe sign placed on it."""

    marks: Dict[int, Severity] = {}
    for sign in signs:
        current = marks.get(sign.line)
        if current is None or sign.severity < current:
            marks[sign.line] = sign.severity
    rendered = []
    for index, line in enumerate(lines, start=1):
        mark = _GUTTER[marks[index]] if index in marks else " "
        rendered.append(f"{mark} {line}")
    return "\n".join(rendered)


@dataclass
class UIState:
    lines: Sequence[str] = ()
    signs: Sequence[Sign] = ()
    status_text: str = ""
    commands: List[str] = field(default_factory=list)


class EditsyncApp(App[None]):
    """Minimal Textual UI showing a buffer, its signs, and issued commands."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#command-line {
		height: 3;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("e", "apply_edits", "Apply edits"),
        ("d", "apply_diagnostics", "Apply diagnostics"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        path: Path,
        *,
        payload: Optional[Dict[str, Any]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        super().__init__()
        self._path = path
        self._payload = payload or {}
        self._settings = settings or Settings()
        self._state = UIState()
        self.session: DocumentSession | None = None
        self._buffer_widget: Static | None = None
        self._command_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._command_widget = Static("", id="command-line", markup=False)
        self._status_widget = Static("", id="status-line")
        yield self._command_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualSyncHooks(
            update_buffer=self._update_buffer,
            update_signs=self._update_signs,
            run_command=self._run_command,
            update_status=self._update_status,
        )
        document = BufferDocument.from_text(self._path.read_text(encoding="utf-8"))
        self.session = DocumentSession(
            str(self._path), hooks, document=document, settings=self._settings
        )
        self._update_status(f"opened {self._path}")

    def action_apply_edits(self) -> None:
        if not self.session:
            return
        try:
            self.session.apply_edits(self._payload.get("edits", []))
        except OffsetError as exc:
            self._update_status(f"edit rejected: {exc}")

    def action_apply_diagnostics(self) -> None:
        if self.session:
            self.session.update_diagnostics(self._payload.get("diagnostics", []))

    def _update_buffer(self, lines: Sequence[str]) -> None:
        self._state.lines = lines
        self._redraw()

    def _update_signs(self, signs: Sequence[Sign]) -> None:
        self._state.signs = signs
        self._redraw()

    def _run_command(self, command: str) -> None:
        self._state.commands.append(command)
        if self._command_widget:
            self._command_widget.update(command)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _redraw(self) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(
                render_with_gutter(self._state.lines, self._state.signs)
            )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay text edits and diagnostics against a file."
    )
    parser.add_argument("path", type=Path, help="File to open")
    parser.add_argument(
        "--changes",
        type=Path,
        default=None,
        help='JSON file with "edits" and "diagnostics" arrays',
    )
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("EDITSYNC_LOG_PRESET"),
        help="Telemetry preset (development, production, performance)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = Settings.from_env(os.environ)
    telemetry.configure(
        preset=args.log_preset,
        temp_dir=settings.temp_dir,
        log_file_name=settings.log_file_name,
    )
    payload: Dict[str, Any] = {}
    if args.changes is not None:
        payload = json.loads(args.changes.read_text(encoding="utf-8"))
    app = EditsyncApp(args.path, payload=payload, settings=settings)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
