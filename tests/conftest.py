"""Pytest configuration and shared fixtures."""

import io
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

import logfire
import pytest

from todo_cli.core.storage import FileStorage
from todo_cli.domain.task import current_time
from todo_cli.interface.cli import run
from todo_cli.modules.tasks import TaskManager


@pytest.fixture(scope="session", autouse=True)
def configure_test_logfire() -> None:
    """Keep spans local and silent during tests."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user configuration out of tests and run each test in its own directory."""
    for name in ("TODO_STORAGE_PATH", "TODO_LOG_LEVEL", "TODO_LOGFIRE_TOKEN", "TODO_ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    """Location of the tasks file, inside a directory that does not exist yet."""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def storage(tasks_file: Path) -> FileStorage:
    return FileStorage(tasks_file)


@pytest.fixture
def manager(storage: FileStorage) -> TaskManager:
    """A loaded manager over an empty storage location."""
    task_manager = TaskManager(storage)
    task_manager.load()
    return task_manager


@pytest.fixture
def now() -> datetime:
    return current_time()


@pytest.fixture
def yesterday(now: datetime) -> datetime:
    return now - timedelta(days=1)


@pytest.fixture
def tomorrow(now: datetime) -> datetime:
    return now + timedelta(days=1)


class CliResult:
    """Captured outcome of one CLI invocation."""

    def __init__(self, exit_code: int, stdout: str, stderr: str) -> None:
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


@pytest.fixture
def cli(tasks_file: Path) -> Callable[..., CliResult]:
    """Run the CLI against the test tasks file with in-memory streams."""

    def invoke(*argv: str, stdin: str = "") -> CliResult:
        stdout = io.StringIO()
        stderr = io.StringIO()
        exit_code = run(
            ["--storage", str(tasks_file), *argv],
            stdin=io.StringIO(stdin),
            stdout=stdout,
            stderr=stderr,
        )
        return CliResult(exit_code, stdout.getvalue(), stderr.getvalue())

    return invoke
