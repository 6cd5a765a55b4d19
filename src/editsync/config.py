"""Settings shared by the buffer, sign, and adapter layers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from editsync.errors import ConfigError
from editsync.merge import combine
from editsync.runtime.paths import (
    DEFAULT_LOG_FILE_NAME,
    resolve_temp_dir,
    server_log_path,
)

ENV_PREFIX = "EDITSYNC_"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    sign_id_base: int = 75000
    sign_name_prefix: str = "LanguageClient"
    log_file_name: str = DEFAULT_LOG_FILE_NAME
    temp_dir: Optional[str] = None
    warn_on_overlap: bool = True

    @classmethod
    def from_mapping(cls, overrides: Optional[Mapping[str, Any]] = None) -> "Settings":
        merged = combine(asdict(cls()), dict(overrides or {}))
        unknown = sorted(set(merged) - set(_FIELD_TYPES))
        if unknown:
            raise ConfigError(f"Unknown settings {unknown}", key=unknown[0])
        for key, expected in _FIELD_TYPES.items():
            value = merged[key]
            if value is None and key in _OPTIONAL:
                continue
            if not isinstance(value, expected) or (
                expected is int and isinstance(value, bool)
            ):
                raise ConfigError(
                    f"Setting '{key}' expects {expected.__name__}, "
                    f"got {type(value).__name__}",
                    key=key,
                )
        return cls(**merged)

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "Settings":
        """Build settings from ``EDITSYNC_*`` keys plus ``TMP``/``TEMP``."""

        overrides: dict[str, Any] = {
            "temp_dir": str(resolve_temp_dir(environ)),
        }
        raw_base = environ.get(f"{ENV_PREFIX}SIGN_ID_BASE")
        if raw_base is not None:
            try:
                overrides["sign_id_base"] = int(raw_base)
            except ValueError as exc:
                raise ConfigError(
                    f"{ENV_PREFIX}SIGN_ID_BASE must be an integer", key="sign_id_base"
                ) from exc
        prefix = environ.get(f"{ENV_PREFIX}SIGN_NAME_PREFIX")
        if prefix:
            overrides["sign_name_prefix"] = prefix
        log_name = environ.get(f"{ENV_PREFIX}LOG_FILE_NAME")
        if log_name:
            overrides["log_file_name"] = log_name
        overlap = environ.get(f"{ENV_PREFIX}WARN_ON_OVERLAP")
        if overlap is not None:
            overrides["warn_on_overlap"] = overlap.lower() in {"1", "true", "yes", "on"}
        return cls.from_mapping(overrides)

    @property
    def log_path(self) -> Path:
        return server_log_path(self.temp_dir, file_name=self.log_file_name)


_FIELD_TYPES: dict[str, type] = {
    "sign_id_base": int,
    "sign_name_prefix": str,
    "log_file_name": str,
    "temp_dir": str,
    "warn_on_overlap": bool,
}
_OPTIONAL = {"temp_dir"}


__all__ = ["Settings", "ENV_PREFIX"]
