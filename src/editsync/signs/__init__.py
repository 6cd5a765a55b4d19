"""Diagnostic sign overlay: models, reconciliation, and Vim rendering."""

from .commands import (
    escape_single_quote,
    format_add_sign,
    format_command,
    format_command_batch,
    format_remove_sign,
)
from .models import (
    AddSign,
    RemoveSign,
    Severity,
    Sign,
    SignCommand,
    signs_from_diagnostics,
)
from .reconcile import reconcile_signs

__all__ = [
    "AddSign",
    "RemoveSign",
    "Severity",
    "Sign",
    "SignCommand",
    "signs_from_diagnostics",
    "reconcile_signs",
    "escape_single_quote",
    "format_add_sign",
    "format_remove_sign",
    "format_command",
    "format_command_batch",
]
