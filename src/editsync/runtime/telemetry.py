"""Telemetry for edit application and sign reconciliation, built on telelog.

``configure(...)`` -- pick a preset or the env-driven default, log to a file
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured ``event::<name>`` line
``span(name, ...)`` -- profile a block and track it as a component

The event helpers at the bottom (``edit_overlap``, ``sign_delta``,
``root_fallback``) fix the payload of every event the package emits.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, MutableMapping, Optional, Sequence, cast

import telelog  # type: ignore[import]

from editsync.runtime.paths import DEFAULT_LOG_FILE_NAME, server_log_path

tl = cast(Any, telelog)

ENV_PREFIX = "EDITSYNC_"
DEFAULT_LOGGER_NAME = "editsync"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None

# preset -> (min level, console, json, buffered)
_PRESETS: Dict[str, tuple[str, bool, bool, bool]] = {
    "development": ("DEBUG", True, False, False),
    "production": ("INFO", False, False, True),
    "performance": ("DEBUG", False, True, True),
}


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _preset_config(preset: str, log_file: Optional[Path]) -> Any:
    try:
        level, console, as_json, buffered = _PRESETS[preset.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown preset '{preset}'.") from exc
    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    if console:
        config.with_colored_output(True)
    config.with_json_format(as_json)
    config.with_buffering(buffered)
    if not console:
        config.with_file_output(str(log_file or server_log_path()))
    return config


def _env_config(log_file: Optional[Path]) -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)
    target = log_file or _env("LOG_FILE")
    if target:
        config.with_file_output(str(target))
    if _env_flag("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))
    return config


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    temp_dir: Optional[str | Path] = None,
    log_file_name: str = DEFAULT_LOG_FILE_NAME,
) -> None:
    """Replace the active telelog configuration.

    ``config`` and ``preset`` are mutually exclusive. File output goes to the
    language server log inside ``temp_dir``; without ``temp_dir`` the
    env-driven default only writes a file when ``EDITSYNC_LOG_FILE`` is set.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    log_file = (
        server_log_path(temp_dir, file_name=log_file_name)
        if temp_dir is not None
        else None
    )
    if preset:
        config = _preset_config(preset, log_file)
    elif config is None:
        config = _env_config(log_file)
    config.with_profiling(True)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        configure()
    logger_name = name or _env("LOGGER") or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    with_data = getattr(log, f"{name}_with", None)
    if with_data is not None:
        with_data(message, _pairs(payload))
        return
    method = getattr(log, name, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for metadata updates."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, **self.metadata, "reason": reason}
        if self.component_name:
            payload["component"] = self.component_name
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block; ``component=True`` tracks it under ``name``.

    ``metadata`` is added to the logger context for the duration of the block.
    An exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(log, name, component_name, dict(context))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context:
                log.remove_context(key)


def edit_overlap(pairs: Sequence[tuple[int, int]], *, edits: int) -> None:
    """Warn that ``pairs`` of edit indices intersect in one change set."""

    record_event(
        "edits.overlap",
        level="warning",
        data={"pairs": list(pairs), "count": len(pairs), "edits": edits},
    )


def sign_delta(target: str, *, added: int, removed: int) -> None:
    record_event(
        "signs.delta",
        level="debug",
        data={"target": target, "added": added, "removed": removed},
    )


def root_fallback(path: str, language_id: str) -> None:
    record_event(
        "project.root_fallback",
        level="warning",
        data={"path": path, "language_id": language_id},
    )


__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "edit_overlap",
    "sign_delta",
    "root_fallback",
]
