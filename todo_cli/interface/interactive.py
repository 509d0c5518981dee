"""Interactive, menu-driven front end over the same TaskManager contract."""

import logging
from typing import TextIO

from todo_cli.core.config import constants
from todo_cli.core.errors import DateParseError, TodoError, classify_error_with_response
from todo_cli.domain.task import Priority
from todo_cli.interface import templates, theme
from todo_cli.interface.dates import parse_due_date
from todo_cli.interface.export import ExportFormat, export_tasks
from todo_cli.models.service_models import StatusFilter, TaskFilter
from todo_cli.modules.tasks import TaskManager


logger = logging.getLogger(__name__)

PRIORITY_CHOICES = {"1": Priority.LOW, "2": Priority.MEDIUM, "3": Priority.HIGH}
FORMAT_CHOICES = {"1": ExportFormat.CSV, "2": ExportFormat.TXT}
EXIT_CHOICES = {"8", "q"}


class InteractiveSession:
    """Menu loop reading choices from stdin until exit or end of input."""

    def __init__(self, manager: TaskManager, *, stdin: TextIO, stdout: TextIO) -> None:
        self.manager = manager
        self.stdin = stdin
        self.stdout = stdout
        self._eof = False

    def _print(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def _prompt(self, label: str) -> str:
        print(label, file=self.stdout, end="")
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            self._eof = True
        return line.strip()

    def _report(self, error: TodoError) -> None:
        response = classify_error_with_response(error)
        self._print(theme.color(f"\n  ❌ {response.message}", theme.RED))

    def run(self) -> None:
        """Show the menu until the user exits."""
        actions = {
            "1": self.view_tasks,
            "2": self.add_task,
            "3": self.complete_task,
            "4": self.delete_task,
            "5": self.view_statistics,
            "6": self.export,
            "7": self.backup,
        }
        self._print(templates.banner("TODO CLI - Task Manager"))

        while True:
            self._print(templates.main_menu())
            choice = self._prompt("\n  Choose an option: ").lower()

            if self._eof or choice in EXIT_CHOICES:
                self._print("\n  Thank you for using Todo CLI!")
                return
            if choice == "c":
                print(theme.clear_screen_sequence(), file=self.stdout, end="")
                continue

            action = actions.get(choice)
            if action is None:
                self._print(theme.color("  ❌ Invalid option. Please try again.", theme.RED))
                continue

            try:
                action()
            except TodoError as e:
                logger.debug("Menu action %s failed: %s", choice, e)
                self._report(e)

    def _show(self, tasks_filter: TaskFilter, empty_message: str) -> bool:
        tasks = self.manager.list_tasks(tasks_filter)
        if not tasks:
            self._print(theme.color(f"\n  {empty_message}", theme.YELLOW))
            return False
        self._print(templates.task_list(tasks))
        return True

    def view_tasks(self) -> None:
        self._print(templates.banner("ALL TASKS"))
        self._show(TaskFilter(), "No tasks found. Add your first task to get started!")

    def add_task(self) -> None:
        self._print(templates.banner("ADD NEW TASK"))
        title = self._prompt("  Task Title: ")
        if not title:
            self._print(theme.color("\n  ❌ Task title cannot be empty!", theme.RED))
            return

        self._print("\n  Priority:\n     1. Low\n     2. Medium (default)\n     3. High")
        priority = PRIORITY_CHOICES.get(self._prompt("\n  Choose (1-3, or press Enter for default): "), Priority.MEDIUM)

        due_date = None
        raw_due = self._prompt("\n  Due Date (YYYY-MM-DD or press Enter to skip): ")
        if raw_due:
            try:
                due_date = parse_due_date(raw_due)
            except DateParseError:
                self._print(theme.color("\n  ⚠️  Invalid date format. Task will be added without due date.", theme.RED))

        task = self.manager.add_task(title, priority, due_date)
        self._print("\n" + templates.task_added(task))

    def _ask_task_id(self, verb: str) -> int | None:
        raw = self._prompt(f"\n  Enter Task ID to {verb} (or 0 to cancel): ")
        try:
            task_id = int(raw)
        except ValueError:
            self._print(theme.color("\n  ❌ Invalid input!", theme.RED))
            return None
        if task_id == 0:
            self._print(theme.color("\n  Cancelled.", theme.YELLOW))
            return None
        return task_id

    def complete_task(self) -> None:
        self._print(templates.banner("COMPLETE TASK"))
        if not self._show(TaskFilter(status=StatusFilter.PENDING), "No pending tasks to complete!"):
            return

        task_id = self._ask_task_id("complete")
        if task_id is None:
            return
        self._print("\n" + templates.task_completed(self.manager.complete_task(task_id)))

    def delete_task(self) -> None:
        self._print(templates.banner("DELETE TASK"))
        if not self._show(TaskFilter(), "No tasks to delete!"):
            return

        task_id = self._ask_task_id("delete")
        if task_id is None:
            return

        task = self.manager.get_task(task_id)
        answer = self._prompt("\n" + templates.delete_confirmation(task)).lower()
        if answer not in constants.CONFIRM_ANSWERS:
            self._print("\n" + templates.deletion_cancelled())
            return
        self._print("\n" + templates.task_deleted(self.manager.delete_task(task_id)))

    def view_statistics(self) -> None:
        self._print(templates.banner("TASK STATISTICS"))
        stats = self.manager.get_stats()
        self._print(templates.statistics(stats, storage_path=self.manager.get_storage_path(), show_bar=True))

    def export(self) -> None:
        self._print(templates.banner("EXPORT TASKS"))
        self._print("  Export Format:\n     1. CSV (Comma-Separated Values)\n     2. TXT (Plain Text)")
        export_format = FORMAT_CHOICES.get(self._prompt("\n  Choose format (1-2): "))
        if export_format is None:
            self._print(theme.color("\n  ❌ Invalid format choice!", theme.RED))
            return

        filename = self._prompt(f"\n  Filename (press Enter for '{export_format.default_file}'): ")
        tasks = self.manager.list_tasks(TaskFilter())
        path = export_tasks(tasks, export_format=export_format, path=filename or None)
        self._print("\n" + templates.export_finished(path=path, count=len(tasks)))

    def backup(self) -> None:
        self._print(templates.banner("BACKUP TASKS"))
        self._print(templates.backup_created(backup_path=self.manager.backup_tasks()))
