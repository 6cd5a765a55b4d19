from __future__ import annotations

from typing import List, Sequence

import pytest

from editsync.adapters.textual import DocumentSession, TextualSyncHooks
from editsync.buffer import BufferDocument, TextEdit
from editsync.config import Settings
from editsync.errors import OffsetError
from editsync.signs import AddSign, RemoveSign, Severity, Sign


def make_session(text: str = "fn main() {\n0;\n}\n", **hook_overrides) -> DocumentSession:
    hooks = TextualSyncHooks(update_buffer=lambda lines: None, **hook_overrides)
    return DocumentSession(
        "main.rs", hooks, document=BufferDocument.from_text(text)
    )


def diagnostic(line: int, severity: int | None = None) -> dict:
    payload: dict = {
        "range": {
            "start": {"line": line, "character": 0},
            "end": {"line": line, "character": 1},
        },
        "message": "problem",
    }
    if severity is not None:
        payload["severity"] = severity
    return payload


def test_document_from_text_keeps_trailing_line() -> None:
    document = BufferDocument.from_text("a\r\nb\n")

    assert document.snapshot() == ("a", "b", "")
    assert document.text == "a\nb\n"
    assert BufferDocument.from_lines([]).snapshot() == ("",)


def test_document_apply_edits_bumps_version() -> None:
    document = BufferDocument.from_text("x = 1")

    updated = document.apply_edits([TextEdit.replace((0, 4), (0, 5), "2")])

    assert updated.snapshot() == ("x = 2",)
    assert updated.version == document.version + 1
    assert document.snapshot() == ("x = 1",)


def test_session_applies_protocol_edits_and_refreshes_buffer() -> None:
    buffers: List[Sequence[str]] = []
    statuses: List[str] = []
    session = make_session(
        update_status=lambda status: statuses.append(status),
    )
    session.hooks.update_buffer = lambda lines: buffers.append(lines)

    session.apply_edits(
        [
            {
                "range": {
                    "start": {"line": 0, "character": 0},
                    "end": {"line": 3, "character": 0},
                },
                "newText": "fn main() {\n    0;\n}\n",
            }
        ]
    )

    assert buffers[-1] == ("fn main() {", "    0;", "}", "")
    assert session.document.version == 1
    assert statuses[-1] == "edits:1"


def test_session_keeps_document_on_offset_error() -> None:
    statuses: List[str] = []
    session = make_session(update_status=lambda status: statuses.append(status))
    before = session.document

    with pytest.raises(OffsetError):
        session.apply_edits([TextEdit.insert(10, 0, "x")])

    assert session.document is before
    assert statuses[-1].startswith("edit_error:")


def test_session_update_diagnostics_runs_sign_commands() -> None:
    commands: List[str] = []
    placed: List[Sequence[Sign]] = []
    session = make_session(
        run_command=lambda command: commands.append(command),
        update_signs=lambda signs: placed.append(signs),
    )

    first = session.update_diagnostics([diagnostic(0)])
    second = session.update_diagnostics([diagnostic(0), diagnostic(6, 4)])
    third = session.update_diagnostics([diagnostic(6, 4)])

    assert first == [AddSign(Sign.new(1, Severity.ERROR), "main.rs")]
    assert second == [AddSign(Sign.new(7, Severity.HINT), "main.rs")]
    assert third == [RemoveSign(Sign.new(1, Severity.ERROR), "main.rs")]
    assert commands[1] == (
        "echo | execute 'sign place 75027 line=7 name=LanguageClientHint file=main.rs'"
    )
    assert placed[-1] == (Sign.new(7, Severity.HINT),)


def test_session_skips_command_when_signs_unchanged() -> None:
    commands: List[str] = []
    session = make_session(run_command=lambda command: commands.append(command))

    session.update_signs([Sign.new(2, Severity.WARNING)])
    result = session.update_signs([Sign.new(2, Severity.WARNING)])

    assert result == []
    assert len(commands) == 1


def test_session_uses_settings_for_sign_rendering() -> None:
    commands: List[str] = []
    hooks = TextualSyncHooks(
        update_buffer=lambda lines: None,
        run_command=lambda command: commands.append(command),
    )
    settings = Settings.from_mapping({"sign_id_base": 10, "sign_name_prefix": "Lsp"})
    session = DocumentSession("a.py", hooks, settings=settings)

    session.update_diagnostics([diagnostic(0, 2)])

    assert commands == ["echo | execute 'sign place 11 line=1 name=LspWarning file=a.py'"]


def test_session_emits_log_lines() -> None:
    logs: List[str] = []
    session = make_session(log=lambda line: logs.append(line))

    session.apply_edits([TextEdit.insert(0, 0, "// ")])

    assert any(line.startswith("edits ->") for line in logs)
    assert "file='main.rs'" in logs[0]


def test_render_with_gutter_marks_most_severe_sign() -> None:
    from editsync.adapters.textual.app import render_with_gutter

    signs = [
        Sign.new(1, Severity.HINT),
        Sign.new(1, Severity.WARNING),
        Sign.new(3, Severity.ERROR),
    ]

    assert render_with_gutter(["a", "b", "c"], signs) == "W a\n  b\nE c"
