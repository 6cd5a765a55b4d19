"""Render sign commands as Vim ``execute`` fragments."""

from __future__ import annotations

from typing import Iterable

from .models import AddSign, RemoveSign, Sign, SignCommand

DEFAULT_SIGN_NAME_PREFIX = "LanguageClient"


def escape_single_quote(text: str) -> str:
    """Double every ``'`` so ``text`` fits inside a single-quoted Vim string."""

    return text.replace("'", "''")


def format_add_sign(
    sign: Sign, filename: str, *, name_prefix: str = DEFAULT_SIGN_NAME_PREFIX
) -> str:
    return (
        f" | execute 'sign place {sign.id} line={sign.line} "
        f"name={name_prefix}{sign.severity.label} "
        f"file={escape_single_quote(filename)}'"
    )


def format_remove_sign(sign: Sign, filename: str) -> str:
    return f" | execute 'sign unplace {sign.id} file={escape_single_quote(filename)}'"


def format_command(
    command: SignCommand, *, name_prefix: str = DEFAULT_SIGN_NAME_PREFIX
) -> str:
    if isinstance(command, AddSign):
        return format_add_sign(command.sign, command.target, name_prefix=name_prefix)
    if isinstance(command, RemoveSign):
        return format_remove_sign(command.sign, command.target)
    raise TypeError(f"Unsupported sign command {command!r}")


def format_command_batch(
    commands: Iterable[SignCommand], *, name_prefix: str = DEFAULT_SIGN_NAME_PREFIX
) -> str:
    """Join ``commands`` into one ``echo | execute ...`` line."""

    parts = ["echo"]
    parts.extend(format_command(cmd, name_prefix=name_prefix) for cmd in commands)
    return "".join(parts)


__all__ = [
    "DEFAULT_SIGN_NAME_PREFIX",
    "escape_single_quote",
    "format_add_sign",
    "format_remove_sign",
    "format_command",
    "format_command_batch",
]
