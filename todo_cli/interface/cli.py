"""Command-line interface: argument parsing and one Manager call per command."""

import argparse
import logging
import sys
from collections.abc import Callable
from typing import TextIO

from todo_cli.core.config import constants, get_settings
from todo_cli.core.errors import CorruptStorageError, TodoError, classify_error_with_response
from todo_cli.domain.task import validate_priority
from todo_cli.interface import templates
from todo_cli.interface.dates import parse_due_date
from todo_cli.interface.export import ExportFormat, export_tasks
from todo_cli.interface.interactive import InteractiveSession
from todo_cli.models.service_models import SortKey, TaskFilter
from todo_cli.modules.tasks import TaskManager


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def task_id_arg(raw: str) -> int:
    """argparse type for task IDs: any integer, range checked by the manager."""
    try:
        return int(raw)
    except ValueError:
        msg = f"invalid task ID '{raw}'. Please provide a valid number"
        raise argparse.ArgumentTypeError(msg) from None


def build_parser() -> argparse.ArgumentParser:
    """Build the `todo` argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="todo",
        description="A simple and efficient command-line todo manager.",
        epilog=(
            "examples:\n"
            '  todo add "Buy groceries" --priority=high --due=2025-10-05\n'
            "  todo list --completed\n"
            "  todo complete 1\n"
            "  todo delete 2"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--storage", metavar="PATH", help="tasks file (default: ~/.todo/tasks.json)")
    parser.add_argument("--verbose", action="store_true", help="print debug logs")
    parser.add_argument("-v", "--version", action="store_true", help="show version information")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    add_parser = subparsers.add_parser("add", help="add a new task")
    add_parser.add_argument("title", nargs="+", help="task title (words are joined with spaces)")
    add_parser.add_argument("-p", "--priority", help="task priority (low, medium, high)")
    add_parser.add_argument("-d", "--due", help="due date (YYYY-MM-DD or YYYY-MM-DD HH:MM)")

    list_parser = subparsers.add_parser("list", help="list tasks")
    list_parser.add_argument("-c", "--completed", action="store_true", help="show only completed tasks")
    list_parser.add_argument("-p", "--pending", action="store_true", help="show only pending tasks")
    list_parser.add_argument("--priority", help="filter by priority (low, medium, high)")
    list_parser.add_argument("-s", "--search", help="search tasks by title")
    list_parser.add_argument(
        "--sort",
        default=SortKey.ID.value,
        choices=[key.value for key in SortKey],
        help="sort by: id, priority, due, created",
    )
    list_parser.add_argument("--stats", action="store_true", help="show task statistics")

    show_parser = subparsers.add_parser("show", help="show one task")
    show_parser.add_argument("task_id", type=task_id_arg, help="task ID")

    complete_parser = subparsers.add_parser("complete", help="mark a task as completed")
    complete_parser.add_argument("task_id", type=task_id_arg, help="task ID")

    delete_parser = subparsers.add_parser("delete", help="delete a task")
    delete_parser.add_argument("task_id", type=task_id_arg, help="task ID")
    delete_parser.add_argument("-f", "--force", action="store_true", help="delete without confirmation")

    export_parser = subparsers.add_parser("export", help="export tasks to a file")
    export_parser.add_argument(
        "-f",
        "--format",
        default=ExportFormat.TXT.value,
        choices=[fmt.value for fmt in ExportFormat],
        help="export format (csv, txt)",
    )
    export_parser.add_argument("-o", "--file", help="output filename (default: tasks.csv / tasks.txt)")

    subparsers.add_parser("backup", help="create a backup of your tasks file")
    subparsers.add_parser("stats", help="show task statistics")
    subparsers.add_parser("ui", help="launch the interactive menu")

    return parser


class CommandRunner:
    """Runs a parsed command against one TaskManager."""

    def __init__(self, manager: TaskManager, *, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> None:
        self.manager = manager
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr

    def _print(self, text: str = "", *, end: str = "\n") -> None:
        print(text, file=self.stdout, end=end)

    def add(self, args: argparse.Namespace) -> int:
        due_date = parse_due_date(args.due) if args.due else None
        task = self.manager.add_task(" ".join(args.title), args.priority, due_date)
        self._print(templates.task_added(task))
        return EXIT_OK

    def list_tasks(self, args: argparse.Namespace) -> int:
        if args.stats:
            return self.stats(args)

        task_filter = TaskFilter.from_flags(
            show_completed=args.completed,
            show_pending=args.pending,
            priority=validate_priority(args.priority) if args.priority else None,
            search=args.search,
            sort_by=args.sort,
        )
        tasks = self.manager.list_tasks(task_filter)
        if not tasks:
            self._print(templates.no_tasks_found())
            return EXIT_OK

        self._print(templates.task_list(tasks))
        return EXIT_OK

    def show(self, args: argparse.Namespace) -> int:
        self._print(templates.task_details(self.manager.get_task(args.task_id)))
        return EXIT_OK

    def complete(self, args: argparse.Namespace) -> int:
        self._print(templates.task_completed(self.manager.complete_task(args.task_id)))
        return EXIT_OK

    def delete(self, args: argparse.Namespace) -> int:
        task = self.manager.get_task(args.task_id)

        if not args.force:
            self._print(templates.delete_confirmation(task), end="")
            self.stdout.flush()
            answer = self.stdin.readline().strip().lower()
            if answer not in constants.CONFIRM_ANSWERS:
                self._print(templates.deletion_cancelled())
                return EXIT_OK

        self._print(templates.task_deleted(self.manager.delete_task(args.task_id)))
        return EXIT_OK

    def export(self, args: argparse.Namespace) -> int:
        tasks = self.manager.list_tasks(TaskFilter())
        path = export_tasks(tasks, export_format=ExportFormat(args.format), path=args.file)
        self._print(templates.export_finished(path=path, count=len(tasks)))
        return EXIT_OK

    def backup(self, args: argparse.Namespace) -> int:
        self._print(templates.backup_created(backup_path=self.manager.backup_tasks()))
        return EXIT_OK

    def stats(self, args: argparse.Namespace) -> int:
        stats = self.manager.get_stats()
        self._print(templates.statistics(stats, storage_path=self.manager.get_storage_path()))
        return EXIT_OK

    def ui(self, args: argparse.Namespace) -> int:
        InteractiveSession(self.manager, stdin=self.stdin, stdout=self.stdout).run()
        return EXIT_OK

    def dispatch(self, args: argparse.Namespace) -> int:
        handlers: dict[str, Callable[[argparse.Namespace], int]] = {
            "add": self.add,
            "list": self.list_tasks,
            "show": self.show,
            "complete": self.complete,
            "delete": self.delete,
            "export": self.export,
            "backup": self.backup,
            "stats": self.stats,
            "ui": self.ui,
        }
        try:
            return handlers[args.command](args)
        except TodoError as e:
            response = classify_error_with_response(e)
            logger.debug("Command %s failed: %s (%s)", args.command, e, response.code)
            print(templates.error_message(response), file=self.stderr)
            return EXIT_ERROR


def execute(
    args: argparse.Namespace,
    *,
    parser: argparse.ArgumentParser | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Load the task manager once and run the parsed command.

    Returns:
        Process exit status
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    if args.version:
        print(f"Todo CLI v{constants.APP_VERSION}", file=stdout)
        print("A simple and efficient command-line todo manager", file=stdout)
        return EXIT_OK

    if not args.command:
        (parser or build_parser()).print_help(file=stdout)
        return EXIT_OK

    manager = TaskManager(storage_path=get_settings().resolve_storage_path(args.storage))
    try:
        manager.load()
    except CorruptStorageError as e:
        logger.warning("Continuing with an empty task list: %s", e)
        print(templates.load_warning(e), file=stderr)
    except TodoError as e:
        print(templates.error_message(classify_error_with_response(e)), file=stderr)
        return EXIT_ERROR

    runner = CommandRunner(manager, stdin=stdin, stdout=stdout, stderr=stderr)
    return runner.dispatch(args)


def run(argv: list[str] | None = None, **streams: TextIO) -> int:
    """Parse argv and execute it."""
    parser = build_parser()
    return execute(parser.parse_args(argv), parser=parser, **streams)
