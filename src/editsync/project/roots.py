"""Project root discovery from a file path and language id."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional

from editsync.errors import ProjectRootError
from editsync.runtime.telemetry import root_fallback

Predicate = Callable[[Path], bool]

VCS_MARKERS = (".git", ".hg", ".svn")


def _has(*names: str) -> Predicate:
    return lambda directory: any((directory / name).exists() for name in names)


def is_dotnet_root(directory: Path) -> bool:
    if (directory / "project.json").exists():
        return True
    if not directory.is_dir():
        return False
    try:
        return any(entry.suffix == ".csproj" for entry in directory.iterdir())
    except OSError:
        return False


_LANGUAGE_MARKERS: Dict[str, tuple[Predicate, ...]] = {
    "rust": (_has("Cargo.toml"),),
    "php": (_has("composer.json"),),
    "javascript": (_has("package.json"),),
    "typescript": (_has("package.json"),),
    "python": (_has("__init__.py", "setup.py"),),
    "cs": (is_dotnet_root,),
    "java": (_has(".project", "pom.xml"),),
    "haskell": (_has("stack.yaml"), _has(".cabal")),
}


def traverse_up(path: Path, predicate: Predicate) -> Optional[Path]:
    """Return the first of ``path`` and its ancestors matching ``predicate``."""

    for directory in (path, *path.parents):
        if predicate(directory):
            return directory
    return None


def find_project_root(path: str | Path, language_id: str) -> Path:
    """Guess the project root for the file at ``path``.

    Language markers are tried first, then version control directories, then
    the file's own directory.
    """

    target = Path(path)
    for predicate in _LANGUAGE_MARKERS.get(language_id, ()):
        root = traverse_up(target, predicate)
        if root is not None:
            return root

    root = traverse_up(target, _has(*VCS_MARKERS))
    if root is not None:
        return root

    if target.parent == target:
        raise ProjectRootError(f"Failed to get directory of {target}")
    root_fallback(str(target), language_id)
    return target.parent


__all__ = ["find_project_root", "traverse_up", "is_dotnet_root", "VCS_MARKERS"]
