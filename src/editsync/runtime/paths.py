"""Log path selection for the language server process."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

DEFAULT_TEMP_DIR = "/tmp"
DEFAULT_LOG_FILE_NAME = "LanguageServer.log"


def resolve_temp_dir(environ: Mapping[str, str]) -> Path:
    """Pick ``TMP``, then ``TEMP``, then ``/tmp`` from ``environ``."""

    for key in ("TMP", "TEMP"):
        value = environ.get(key)
        if value:
            return Path(value)
    return Path(DEFAULT_TEMP_DIR)


def server_log_path(
    temp_dir: Optional[str | Path] = None,
    *,
    file_name: str = DEFAULT_LOG_FILE_NAME,
) -> Path:
    base = Path(temp_dir) if temp_dir is not None else Path(DEFAULT_TEMP_DIR)
    return base / file_name


__all__ = ["resolve_temp_dir", "server_log_path", "DEFAULT_LOG_FILE_NAME"]
