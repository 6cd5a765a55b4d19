"""Diff two sign sets into a minimal, ordered add/remove command batch."""

from __future__ import annotations

from typing import Hashable, List, Sequence

from editsync.runtime.telemetry import sign_delta, span

from .models import AddSign, RemoveSign, Sign, SignCommand


def _suffix_lcs(left: Sequence[Hashable], right: Sequence[Hashable]) -> List[List[int]]:
    """``table[i][j]`` is the LCS length of ``left[i:]`` and ``right[j:]``."""

    table = [[0] * (len(right) + 1) for _ in range(len(left) + 1)]
    for i in range(len(left) - 1, -1, -1):
        row, below = table[i], table[i + 1]
        for j in range(len(right) - 1, -1, -1):
            if left[i] == right[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])
    return table


def reconcile_signs(
    previous: Sequence[Sign], current: Sequence[Sign], target: str
) -> List[SignCommand]:
    """Return the fewest commands that turn ``previous`` into ``current``.

    Signs match on ``(line, severity)`` and the kept signs form a longest
    common subsequence of both lists. Commands come out in the order the walk
    meets them, removals before additions where both are possible. Removals
    carry the instance from ``previous`` and additions the one from
    ``current``.
    """

    with span(
        "signs::reconcile",
        component="signs",
        metadata={
            "target": target,
            "previous": len(previous),
            "current": len(current),
        },
    ):
        old = [sign.key for sign in previous]
        new = [sign.key for sign in current]
        table = _suffix_lcs(old, new)

        commands: List[SignCommand] = []
        i = j = 0
        while i < len(old) and j < len(new):
            if old[i] == new[j]:
                i += 1
                j += 1
            elif table[i + 1][j] >= table[i][j + 1]:
                commands.append(RemoveSign(previous[i], target))
                i += 1
            else:
                commands.append(AddSign(current[j], target))
                j += 1
        commands.extend(RemoveSign(sign, target) for sign in previous[i:])
        commands.extend(AddSign(sign, target) for sign in current[j:])

        added = sum(isinstance(command, AddSign) for command in commands)
        sign_delta(target, added=added, removed=len(commands) - added)
        return commands


__all__ = ["reconcile_signs"]
