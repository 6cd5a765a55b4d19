"""Merge helpers for JSON-like values (dict / list / scalar / None)."""

from __future__ import annotations

from typing import Any, Dict, MutableMapping, Mapping, TypeVar

K = TypeVar("K")
V = TypeVar("V")


def combine(left: Any, right: Any) -> Any:
    """Deep-merge ``right`` over ``left``.

    ``None`` on the right keeps ``left``. Two mappings merge key by key, a key
    missing on one side counting as ``None``. Any other pairing returns
    ``right``.
    """

    if right is None:
        return left
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        merged: Dict[Any, Any] = {}
        for key in {**left, **right}:
            merged[key] = combine(left.get(key), right.get(key))
        return merged
    return right


def merge_into(target: MutableMapping[K, V], other: Mapping[K, V]) -> None:
    """Shallow update of ``target`` with ``other``; right-hand values win."""

    for key, value in other.items():
        target[key] = value


__all__ = ["combine", "merge_into"]
