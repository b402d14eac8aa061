"""Tests for configuration functionality."""

from pathlib import Path

import pytest

from gitcommitlint.config import Config, DEFAULT_CONFIG_FILENAME
from gitcommitlint.errors import ConfigurationError
from gitcommitlint.models import RuleLevel


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in [
        "GIT_COMMIT_LINT_API_URL",
        "GIT_COMMIT_LINT_TIMEOUT",
        "GIT_COMMIT_LINT_ALWAYS_LOG",
        "GIT_COMMIT_LINT_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)


def test_default_config():
    """Test default configuration values."""
    config = Config()
    assert config.api_url == "https://api.github.com"
    assert config.timeout == 10.0
    assert config.rules == {
        "header-format": RuleLevel.ERROR,
        "issue-reference": RuleLevel.ERROR,
    }
    assert config.always_log is False
    assert config.log_file is None


def test_config_load_nonexistent(tmp_path):
    """Test loading configuration when file doesn't exist."""
    config = Config.load(tmp_path)
    assert config.api_url == "https://api.github.com"


def test_config_load_and_save(tmp_path):
    """Test saving and loading configuration."""
    config = Config(
        api_url="https://github.example.com/api/v3",
        timeout=3.5,
        rules={"issue-reference": RuleLevel.WARNING},
        log_file="lint.log",
    )
    config.save(tmp_path)

    loaded_config = Config.load(tmp_path)

    assert loaded_config.api_url == "https://github.example.com/api/v3"
    assert loaded_config.timeout == 3.5
    assert loaded_config.level_of("issue-reference") == RuleLevel.WARNING
    assert loaded_config.level_of("header-format") == RuleLevel.ERROR
    assert loaded_config.log_file == "lint.log"


def test_config_load_invalid(tmp_path):
    """Test loading invalid configuration file."""
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text("invalid [ toml")

    config = Config.load(tmp_path)
    assert config.timeout == 10.0


def test_config_partial_rules(tmp_path):
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text(
        '[gitcommitlint.rules]\n"issue-reference" = 0\n'
    )

    config = Config.load(tmp_path)

    assert config.level_of("issue-reference") == RuleLevel.DISABLED
    assert config.level_of("header-format") == RuleLevel.ERROR


def test_config_unknown_rule(tmp_path):
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text(
        '[gitcommitlint.rules]\n"subject-case" = 2\n'
    )

    with pytest.raises(ConfigurationError, match="subject-case"):
        Config.load(tmp_path)


def test_config_invalid_level(tmp_path):
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text(
        '[gitcommitlint.rules]\n"header-format" = 5\n'
    )

    with pytest.raises(ConfigurationError):
        Config.load(tmp_path)


def test_config_unsafe_log_file_is_dropped(tmp_path):
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text(
        '[gitcommitlint]\nlog_file = "../outside.log"\n'
    )

    assert Config.load(tmp_path).log_file is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GIT_COMMIT_LINT_TIMEOUT", "2.5")
    monkeypatch.setenv("GIT_COMMIT_LINT_ALWAYS_LOG", "yes")

    config = Config()

    assert config.timeout == 2.5
    assert config.always_log is True


def test_invalid_environment_override(monkeypatch):
    monkeypatch.setenv("GIT_COMMIT_LINT_TIMEOUT", "abc")

    with pytest.raises(ConfigurationError, match="timeout"):
        Config()


def test_invalid_environment_override_without_config_file(monkeypatch, tmp_path):
    monkeypatch.setenv("GIT_COMMIT_LINT_TIMEOUT", "abc")

    with pytest.raises(ConfigurationError):
        Config.load(tmp_path)


def test_invalid_file_value_names_the_file(tmp_path):
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text('[gitcommitlint]\ntimeout = -1\n')

    with pytest.raises(ConfigurationError, match=DEFAULT_CONFIG_FILENAME):
        Config.load(tmp_path)


def test_explicit_values_beat_environment(monkeypatch):
    monkeypatch.setenv("GIT_COMMIT_LINT_TIMEOUT", "2.5")
    assert Config(timeout=7.0).timeout == 7.0


def test_get_log_file_disabled():
    """Test get_log_file when logging is disabled."""
    config = Config(always_log=False, log_file=None)
    assert config.get_log_file() is None


def test_get_log_file_custom():
    """Test get_log_file with custom log file."""
    config = Config(always_log=False, log_file="custom.log")
    assert config.get_log_file() == Path("custom.log")


def test_get_log_file_unsafe():
    config = Config(log_file="/etc/lint.log")
    assert config.get_log_file() is None


def test_get_log_file_always():
    """Test get_log_file with always_log enabled."""
    log_file = Config(always_log=True).get_log_file()

    assert log_file is not None
    assert log_file.name.startswith("gcl_log-")
    assert log_file.suffix == ".log"
