from __future__ import annotations

import pytest

from editsync.signs import (
    AddSign,
    RemoveSign,
    Severity,
    Sign,
    escape_single_quote,
    format_add_sign,
    format_command,
    format_command_batch,
    format_remove_sign,
    reconcile_signs,
    signs_from_diagnostics,
)


def test_escape_single_quote() -> None:
    assert escape_single_quote("my' precious") == "my'' precious"


def test_format_add_sign() -> None:
    assert (
        format_add_sign(Sign.new(1, Severity.ERROR), "")
        == " | execute 'sign place 75000 line=1 name=LanguageClientError file='"
    )
    assert (
        format_add_sign(Sign.new(7, Severity.ERROR), "")
        == " | execute 'sign place 75024 line=7 name=LanguageClientError file='"
    )
    assert (
        format_add_sign(Sign.new(7, Severity.HINT), "")
        == " | execute 'sign place 75027 line=7 name=LanguageClientHint file='"
    )


def test_format_add_sign_custom_prefix() -> None:
    sign = Sign.new(2, Severity.INFORMATION)

    assert format_add_sign(sign, "a.py", name_prefix="Lsp") == (
        " | execute 'sign place 75006 line=2 name=LspInformation file=a.py'"
    )


def test_format_remove_sign_escapes_filename() -> None:
    sign = Sign.new(3, Severity.WARNING)

    assert format_remove_sign(sign, "it's.py") == (
        " | execute 'sign unplace 75009 file=it''s.py'"
    )


def test_format_command_batch_from_reconcile() -> None:
    previous = [Sign.new(1, Severity.ERROR)]
    current = [Sign.new(7, Severity.HINT)]

    commands = reconcile_signs(previous, current, "f.rs")

    assert format_command_batch(commands) == (
        "echo"
        " | execute 'sign unplace 75000 file=f.rs'"
        " | execute 'sign place 75027 line=7 name=LanguageClientHint file=f.rs'"
    )


def test_format_command_batch_empty() -> None:
    assert format_command_batch([]) == "echo"


def test_format_command_dispatches_on_type() -> None:
    sign = Sign.new(1, Severity.ERROR)

    assert format_command(AddSign(sign, "x")).startswith(" | execute 'sign place")
    assert format_command(RemoveSign(sign, "x")).startswith(" | execute 'sign unplace")
    with pytest.raises(TypeError):
        format_command(sign)  # type: ignore[arg-type]


def test_signs_from_diagnostics() -> None:
    diagnostics = [
        {
            "range": {
                "start": {"line": 0, "character": 4},
                "end": {"line": 0, "character": 9},
            },
            "severity": 2,
            "message": "unused variable",
        },
        {
            "range": {
                "start": {"line": 6, "character": 0},
                "end": {"line": 6, "character": 1},
            },
            "message": "syntax error",
        },
    ]

    signs = signs_from_diagnostics(diagnostics)

    assert [(sign.line, sign.severity) for sign in signs] == [
        (1, Severity.WARNING),
        (7, Severity.ERROR),
    ]
    assert signs[1].id == 75024
