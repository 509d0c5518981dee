"""Tests for configuration loading."""

from pathlib import Path

import pytest

from todo_cli.core.config import Settings, constants, default_storage_path


@pytest.mark.unit
class TestResolveStoragePath:
    """Tests for storage path precedence."""

    def test_default_is_per_user(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))

        assert Settings().resolve_storage_path() == tmp_path / ".todo" / "tasks.json"

    def test_environment_overrides_default(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TODO_STORAGE_PATH", str(tmp_path / "env.json"))

        assert Settings().resolve_storage_path() == tmp_path / "env.json"

    def test_explicit_override_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TODO_STORAGE_PATH", str(tmp_path / "env.json"))

        assert Settings().resolve_storage_path(tmp_path / "cli.json") == tmp_path / "cli.json"

    def test_home_is_expanded(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))

        assert Settings().resolve_storage_path("~/tasks.json") == tmp_path / "tasks.json"


@pytest.mark.unit
def test_default_storage_path_without_home(monkeypatch):
    """No resolvable home directory falls back to the working directory."""

    def no_home() -> Path:
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(Path, "home", no_home)

    assert default_storage_path() == Path("tasks.json")


@pytest.mark.unit
def test_settings_defaults():
    settings = Settings()

    assert settings.storage_path is None
    assert settings.log_level == "WARNING"
    assert settings.logfire_token is None


@pytest.mark.unit
def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("TODO_LOG_LEVEL", "debug")

    assert Settings().log_level == "debug"


@pytest.mark.unit
def test_constants():
    assert constants.APP_VERSION == "1.0.0"
    assert constants.BACKUP_SUFFIX == ".backup"
    assert "yes" in constants.CONFIRM_ANSWERS
