"""Tests for the command-line interface."""

import io
import json

import pytest

from todo_cli.interface.cli import EXIT_ERROR, EXIT_OK, build_parser, run


@pytest.mark.unit
class TestParser:
    """Tests for argument parsing."""

    def test_add_joins_title_words(self):
        args = build_parser().parse_args(["add", "Buy", "groceries", "--priority", "high", "--due", "2025-10-05"])

        assert args.title == ["Buy", "groceries"]
        assert args.priority == "high"
        assert args.due == "2025-10-05"

    def test_list_defaults(self):
        args = build_parser().parse_args(["list"])

        assert args.sort == "id"
        assert not args.completed
        assert not args.pending

    def test_non_numeric_task_id_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["complete", "abc"])

        assert exc_info.value.code == 2
        assert "invalid task ID 'abc'" in capsys.readouterr().err

    def test_unknown_sort_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list", "--sort", "title"])


@pytest.mark.unit
class TestTopLevel:
    """Version and help output."""

    def test_version(self, cli):
        result = cli("--version")

        assert result.exit_code == EXIT_OK
        assert "Todo CLI v1.0.0" in result.stdout

    def test_no_command_prints_help(self, cli, tasks_file):
        result = cli()

        assert result.exit_code == EXIT_OK
        assert "usage: todo" in result.stdout
        assert not tasks_file.exists()


@pytest.mark.unit
class TestAddCommand:
    """Tests for `todo add`."""

    def test_add(self, cli, tasks_file):
        result = cli("add", "Buy", "groceries", "--priority=HIGH", "--due=2025-10-05")

        assert result.exit_code == EXIT_OK
        assert "Task added successfully!" in result.stdout
        assert "Title: Buy groceries" in result.stdout
        task = json.loads(tasks_file.read_text(encoding="utf-8"))["tasks"][0]
        assert task["title"] == "Buy groceries"
        assert task["priority"] == "high"
        assert task["due_date"].startswith("2025-10-05T00:00:00")

    def test_invalid_priority(self, cli, tasks_file):
        result = cli("add", "Buy milk", "--priority", "urgent")

        assert result.exit_code == EXIT_ERROR
        assert "invalid priority" in result.stderr
        assert not tasks_file.exists()

    def test_invalid_due_date(self, cli, tasks_file):
        result = cli("add", "Buy milk", "--due", "tomorrow")

        assert result.exit_code == EXIT_ERROR
        assert "invalid due date format" in result.stderr
        assert not tasks_file.exists()

    def test_blank_title(self, cli):
        result = cli("add", "   ")

        assert result.exit_code == EXIT_ERROR
        assert "task title cannot be empty" in result.stderr


@pytest.mark.unit
class TestListCommand:
    """Tests for `todo list`."""

    @pytest.fixture(autouse=True)
    def seed(self, cli):
        cli("add", "Write report", "--priority", "low")
        cli("add", "Fix login bug", "--priority", "high")
        cli("add", "Buy milk")
        cli("complete", "3")

    def test_list_all(self, cli):
        result = cli("list")

        assert result.exit_code == EXIT_OK
        assert "Todo List (3 tasks)" in result.stdout
        assert result.stdout.index("Write report") < result.stdout.index("Fix login bug")

    def test_sort_by_priority(self, cli):
        result = cli("list", "--sort", "priority")

        assert result.stdout.index("Fix login bug") < result.stdout.index("Buy milk") < result.stdout.index("Write report")

    def test_completed_only(self, cli):
        result = cli("list", "--completed")

        assert "Todo List (1 tasks)" in result.stdout
        assert "Buy milk" in result.stdout

    def test_pending_only(self, cli):
        result = cli("list", "--pending")

        assert "Todo List (2 tasks)" in result.stdout
        assert "Buy milk" not in result.stdout

    def test_search_and_priority(self, cli):
        assert "Fix login bug" in cli("list", "--search", "LOGIN").stdout
        assert "Todo List (1 tasks)" in cli("list", "--priority", "high").stdout

    def test_no_matches(self, cli):
        result = cli("list", "--search", "nothing-here")

        assert result.exit_code == EXIT_OK
        assert "No tasks found" in result.stdout

    def test_invalid_priority_filter(self, cli):
        result = cli("list", "--priority", "urgent")

        assert result.exit_code == EXIT_ERROR
        assert "invalid priority" in result.stderr

    def test_list_stats(self, cli):
        result = cli("list", "--stats")

        assert "Task Statistics" in result.stdout
        assert "Total tasks:      3" in result.stdout


@pytest.mark.unit
class TestTaskCommands:
    """Tests for show, complete and delete."""

    @pytest.fixture(autouse=True)
    def seed(self, cli):
        cli("add", "Buy milk")

    def test_show(self, cli):
        result = cli("show", "1")

        assert result.exit_code == EXIT_OK
        assert "Title: Buy milk" in result.stdout
        assert "Status: Pending" in result.stdout

    def test_complete(self, cli):
        result = cli("complete", "1")

        assert result.exit_code == EXIT_OK
        assert "Task completed successfully!" in result.stdout

    def test_complete_twice(self, cli):
        cli("complete", "1")

        result = cli("complete", "1")

        assert result.exit_code == EXIT_ERROR
        assert "already completed" in result.stderr

    @pytest.mark.parametrize(("task_id", "message"), [("0", "invalid task ID"), ("9", "task not found")])
    def test_bad_ids(self, cli, task_id, message):
        result = cli("complete", task_id)

        assert result.exit_code == EXIT_ERROR
        assert message in result.stderr

    def test_delete_confirmed(self, cli):
        result = cli("delete", "1", stdin="yes\n")

        assert result.exit_code == EXIT_OK
        assert "Type 'yes' to confirm deletion" in result.stdout
        assert "Task deleted successfully!" in result.stdout
        assert "task not found" in cli("show", "1").stderr

    def test_delete_cancelled(self, cli):
        result = cli("delete", "1", stdin="no\n")

        assert result.exit_code == EXIT_OK
        assert "Deletion cancelled." in result.stdout
        assert cli("show", "1").exit_code == EXIT_OK

    def test_delete_cancelled_on_end_of_input(self, cli):
        assert "Deletion cancelled." in cli("delete", "1").stdout

    def test_delete_force(self, cli):
        result = cli("delete", "1", "--force")

        assert "Task deleted successfully!" in result.stdout
        assert "confirm" not in result.stdout


@pytest.mark.unit
class TestFileCommands:
    """Tests for export, backup and stats."""

    def test_backup_without_file(self, cli):
        result = cli("backup")

        assert result.exit_code == EXIT_ERROR
        assert "no tasks file exists yet" in result.stderr

    def test_backup(self, cli, tasks_file):
        cli("add", "Buy milk")

        result = cli("backup")

        assert result.exit_code == EXIT_OK
        assert str(tasks_file.with_name("tasks.json.backup")) in result.stdout

    def test_export_csv(self, cli, tmp_path):
        cli("add", "Buy milk")

        result = cli("export", "--format", "csv", "--file", str(tmp_path / "out.csv"))

        assert result.exit_code == EXIT_OK
        assert "(1 tasks)" in result.stdout
        assert (tmp_path / "out.csv").read_text(encoding="utf-8").startswith("ID,Title,Completed")

    def test_export_default_txt(self, cli, tmp_path):
        result = cli("export")

        assert result.exit_code == EXIT_OK
        assert (tmp_path / "tasks.txt").exists()

    def test_stats_empty(self, cli, tasks_file):
        result = cli("stats")

        assert "Total tasks:      0" in result.stdout
        assert "Completion rate" not in result.stdout
        assert str(tasks_file) in result.stdout


@pytest.mark.unit
class TestCorruptFile:
    """A corrupt tasks file warns and is never overwritten."""

    @pytest.fixture(autouse=True)
    def corrupt(self, tasks_file):
        tasks_file.parent.mkdir(parents=True)
        tasks_file.write_text("{broken", encoding="utf-8")

    def test_read_commands_warn_and_continue(self, cli):
        result = cli("list")

        assert result.exit_code == EXIT_OK
        assert "Warning: Failed to load tasks" in result.stderr
        assert "No tasks found" in result.stdout

    def test_mutation_refused(self, cli, tasks_file):
        result = cli("add", "Buy milk")

        assert result.exit_code == EXIT_ERROR
        assert "refusing to overwrite" in result.stderr
        assert tasks_file.read_text(encoding="utf-8") == "{broken"


@pytest.mark.unit
def test_undecodable_file_warns_and_continues(cli, tasks_file):
    """Invalid UTF-8 takes the same warning path as any other corrupt file."""
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_bytes(b"\xff\xfe garbage")

    result = cli("list")

    assert result.exit_code == EXIT_OK
    assert "Warning: Failed to load tasks" in result.stderr
    assert "not valid UTF-8" in result.stderr
    assert tasks_file.read_bytes() == b"\xff\xfe garbage"


@pytest.mark.unit
def test_storage_directory_blocked(tmp_path):
    """A storage location that cannot be created fails before any command runs."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    stdout, stderr = io.StringIO(), io.StringIO()

    exit_code = run(["--storage", str(blocker / "tasks.json"), "list"], stdout=stdout, stderr=stderr)

    assert exit_code == EXIT_ERROR
    assert "failed to create directory" in stderr.getvalue()
