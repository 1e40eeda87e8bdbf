"""Tests for configuration adapter."""

from pathlib import Path

import pytest

from train_board_proxy.adapters.config import AppConfig


def test_config_loads_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    monkeypatch.delenv("PORT", raising=False)
    config = AppConfig(_env_file=None)

    assert config.host == "0.0.0.0"
    assert config.port == 3000
    assert config.fetch_timeout_seconds == 20.0
    assert config.fetch_max_retries == 3
    assert config.board_rate_limit == 20
    assert config.board_rate_window_seconds == 60.0
    assert config.search_result_limit == 10
    assert config.suggestion_limit == 5


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("BOARD_RATE_LIMIT", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig(_env_file=None)

    assert config.host == "127.0.0.1"
    assert config.port == 9000
    assert config.board_rate_limit == 5
    assert config.log_level == "DEBUG"


def test_config_validates_max_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given zero retries, when loading config, then validation error is raised."""
    monkeypatch.setenv("FETCH_MAX_RETRIES", "0")

    with pytest.raises(ValueError, match="fetch_max_retries must be at least 1"):
        AppConfig(_env_file=None)


def test_config_validates_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an unknown log level, when loading config, then validation error is raised."""
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValueError, match="log_level must be a logging level name"):
        AppConfig(_env_file=None)


def test_config_applies_toml_sections(tmp_path: Path) -> None:
    """Given a TOML file with known sections, when loading overrides, then settings change."""
    path = tmp_path / "config.toml"
    path.write_text(
        """
[server]
port = 8080

[fetch]
fetch_max_retries = 5

[rate_limit]
board_rate_limit = 7

[display]
auto_refresh_seconds = 0
""",
        encoding="utf-8",
    )
    config = AppConfig(_env_file=None, config_file=str(path))

    overrides = config.get_cleanup_overrides()

    assert overrides == {}
    assert config.port == 8080
    assert config.fetch_max_retries == 5
    assert config.board_rate_limit == 7
    assert config.auto_refresh_seconds == 0


def test_config_parses_cleanup_selectors(tmp_path: Path) -> None:
    """Given a [cleanup] table, when loading overrides, then selectors per provider are returned."""
    path = tmp_path / "config.toml"
    path.write_text(
        """
[cleanup]
all = [".survey"]
NS = [".ns-banner", "#promo"]
""",
        encoding="utf-8",
    )
    config = AppConfig(_env_file=None, config_file=str(path))

    assert config.get_cleanup_overrides() == {"all": [".survey"], "NS": [".ns-banner", "#promo"]}


def test_config_rejects_non_list_cleanup_entry(tmp_path: Path) -> None:
    """Given a cleanup entry that is not a list, when loading overrides, then ValueError is raised."""
    path = tmp_path / "config.toml"
    path.write_text('[cleanup]\nNS = ".ns-banner"\n', encoding="utf-8")
    config = AppConfig(_env_file=None, config_file=str(path))

    with pytest.raises(ValueError, match="must be a list of selectors"):
        config.get_cleanup_overrides()


def test_config_raises_error_when_file_not_found() -> None:
    """Given non-existent config file, when loading overrides, then FileNotFoundError is raised."""
    config = AppConfig(_env_file=None, config_file="/nonexistent/config.toml")

    with pytest.raises(FileNotFoundError):
        config.get_cleanup_overrides()


def test_config_without_file_has_no_overrides() -> None:
    """Given no config file, when loading overrides, then none are returned."""
    config = AppConfig(_env_file=None, config_file=None)

    assert config.get_cleanup_overrides() == {}


def test_config_toml_values_are_validated(tmp_path: Path) -> None:
    """Given a lower-case log level in TOML, when loading overrides, then it is normalized."""
    path = tmp_path / "config.toml"
    path.write_text('[server]\nlog_level = "debug"\ntrust_forwarded_for = true\n', encoding="utf-8")
    config = AppConfig(_env_file=None, config_file=str(path))

    config.get_cleanup_overrides()

    assert config.log_level == "DEBUG"
    assert config.trust_forwarded_for is True


@pytest.mark.parametrize(
    ("toml", "message"),
    [
        ("[fetch]\nfetch_max_retries = 0\n", "fetch_max_retries must be at least 1"),
        ('[server]\nlog_level = "chatty"\n', "log_level must be a logging level name"),
        ('[server]\nport = "eighty"\n', "port"),
    ],
)
def test_config_rejects_invalid_toml_values(tmp_path: Path, toml: str, message: str) -> None:
    """Given an invalid value in a TOML section, when loading overrides, then ValueError is raised."""
    path = tmp_path / "config.toml"
    path.write_text(toml, encoding="utf-8")
    config = AppConfig(_env_file=None, config_file=str(path))

    with pytest.raises(ValueError, match=message):
        config.get_cleanup_overrides()


def test_config_does_not_trust_forwarded_for_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given no setting, when loading config, then X-Forwarded-For is not trusted."""
    monkeypatch.delenv("TRUST_FORWARDED_FOR", raising=False)

    assert AppConfig(_env_file=None).trust_forwarded_for is False
