"""Dataclasses describing diagnostic signs and reconciliation commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterable, List, Mapping, Union

DEFAULT_SIGN_ID_BASE = 75000


class Severity(IntEnum):
    """Diagnostic severity, numbered as in the language server protocol."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True, slots=True)
class Sign:
    """Per-line marker. Compared and hashed on ``(line, severity)`` only."""

    id: int = field(compare=False)
    line: int
    severity: Severity

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity(self.severity))

    @classmethod
    def new(
        cls,
        line: int,
        severity: Severity | int,
        *,
        id_base: int = DEFAULT_SIGN_ID_BASE,
    ) -> "Sign":
        """Build a sign whose id is unique per ``(line, severity)``."""

        level = Severity(severity)
        sign_id = id_base + (line - 1) * len(Severity) + (int(level) - 1)
        return cls(id=sign_id, line=line, severity=level)

    @property
    def key(self) -> tuple[int, Severity]:
        return (self.line, self.severity)


@dataclass(frozen=True, slots=True)
class AddSign:
    sign: Sign
    target: str


@dataclass(frozen=True, slots=True)
class RemoveSign:
    sign: Sign
    target: str


SignCommand = Union[AddSign, RemoveSign]


def signs_from_diagnostics(
    diagnostics: Iterable[Mapping[str, Any]],
    *,
    id_base: int = DEFAULT_SIGN_ID_BASE,
) -> List[Sign]:
    """Convert protocol diagnostics into signs on their (one-based) start line."""

    signs = []
    for diagnostic in diagnostics:
        line = int(diagnostic["range"]["start"]["line"]) + 1
        severity = diagnostic.get("severity") or Severity.ERROR
        signs.append(Sign.new(line, severity, id_base=id_base))
    return signs


__all__ = [
    "DEFAULT_SIGN_ID_BASE",
    "Severity",
    "Sign",
    "AddSign",
    "RemoveSign",
    "SignCommand",
    "signs_from_diagnostics",
]
