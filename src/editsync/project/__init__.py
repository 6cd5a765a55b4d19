"""Project layout helpers."""

from .roots import find_project_root, traverse_up

__all__ = ["find_project_root", "traverse_up"]
