from __future__ import annotations

from pathlib import Path

import pytest

from editsync.config import Settings
from editsync.errors import ConfigError
from editsync.merge import combine, merge_into
from editsync.runtime.paths import resolve_temp_dir, server_log_path


def test_combine_right_wins_on_scalars() -> None:
    assert combine(1, 2) == 2
    assert combine("a", [1]) == [1]
    assert combine([1, 2], [3]) == [3]


def test_combine_none_is_absorbing() -> None:
    assert combine({"a": 1}, None) == {"a": 1}
    assert combine(None, None) is None
    assert combine(None, 5) == 5


def test_combine_nested_objects() -> None:
    left = {"rust": {"clippy": True, "features": ["a"]}, "trace": "off"}
    right = {"rust": {"features": ["b"], "target": None}, "trace": None, "new": 1}

    assert combine(left, right) == {
        "rust": {"clippy": True, "features": ["b"], "target": None},
        "trace": "off",
        "new": 1,
    }


def test_merge_into_is_shallow() -> None:
    target = {"a": {"x": 1}, "b": 2}

    merge_into(target, {"a": {"y": 2}, "c": 3})

    assert target == {"a": {"y": 2}, "b": 2, "c": 3}


def test_settings_defaults() -> None:
    settings = Settings.from_mapping()

    assert settings == Settings()
    assert settings.log_path == Path("/tmp/LanguageServer.log")


def test_settings_overrides_merge_over_defaults() -> None:
    settings = Settings.from_mapping({"sign_id_base": 1000, "temp_dir": None})

    assert settings.sign_id_base == 1000
    assert settings.temp_dir is None
    assert settings.sign_name_prefix == "LanguageClient"


@pytest.mark.parametrize(
    "overrides",
    [
        {"sign_id_base": "75000"},
        {"sign_id_base": True},
        {"warn_on_overlap": "yes"},
        {"unknown_key": 1},
    ],
)
def test_settings_rejects_bad_values(overrides) -> None:
    with pytest.raises(ConfigError):
        Settings.from_mapping(overrides)


def test_settings_from_env() -> None:
    settings = Settings.from_env(
        {
            "TEMP": "/var/tmp",
            "EDITSYNC_SIGN_ID_BASE": "500",
            "EDITSYNC_WARN_ON_OVERLAP": "off",
        }
    )

    assert settings.sign_id_base == 500
    assert settings.warn_on_overlap is False
    assert settings.log_path == Path("/var/tmp/LanguageServer.log")


def test_settings_from_env_rejects_bad_integer() -> None:
    with pytest.raises(ConfigError):
        Settings.from_env({"EDITSYNC_SIGN_ID_BASE": "many"})


def test_resolve_temp_dir_precedence() -> None:
    assert resolve_temp_dir({"TMP": "/a", "TEMP": "/b"}) == Path("/a")
    assert resolve_temp_dir({"TEMP": "/b"}) == Path("/b")
    assert resolve_temp_dir({}) == Path("/tmp")


def test_server_log_path() -> None:
    assert server_log_path() == Path("/tmp/LanguageServer.log")
    assert server_log_path("/x", file_name="ls.log") == Path("/x/ls.log")
