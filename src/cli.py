"""Interactive menu loop for the task tracker.

All input validation happens here (titles, priorities, dates, ids); the
store only ever receives clean values. Tasks are saved on exit, on
Ctrl-C/EOF, and on demand from the menu.
"""
from datetime import date
from typing import List, Optional

import click

from models import Priority, Task, parse_due_date
from store import TaskStore
from theme import task_line

PRIORITY_CHOICE = click.Choice([p.name for p in Priority], case_sensitive=False)
SORT_CHOICE = click.Choice(["1", "2"])

MENU = (
    "\n---- MENU ----\n"
    "1) Add Task\n"
    "2) View Tasks (sorted)\n"
    "3) Mark Task Completed\n"
    "4) Delete Task\n"
    "5) Search Tasks\n"
    "6) Edit Task\n"
    "7) Save Now\n"
    "0) Exit"
)


class DueDateType(click.ParamType):
    """Blank means no due date; anything else must be YYYY-MM-DD."""
    name = "date"

    def convert(self, value, param, ctx) -> Optional[date]:
        if isinstance(value, date) or value is None:
            return value
        value = value.strip()
        if not value:
            return None
        try:
            return parse_due_date(value)
        except ValueError:
            self.fail("Invalid date format. Use YYYY-MM-DD.", param, ctx)


DUE_DATE = DueDateType()


class CLI:
    def __init__(self, store: TaskStore):
        self.store: TaskStore = store
        self._handlers = {
            '1': self._add,
            '2': self._list,
            '3': self._mark_complete,
            '4': self._delete,
            '5': self._search,
            '6': self._edit,
            '7': self._save_now,
        }

    def run(self) -> None:
        """Main menu loop; saves the store however the loop ends."""
        try:
            while True:
                click.echo(MENU)
                choice = click.prompt("Choose option", default="", show_default=False).strip()
                if choice == '0':
                    break
                handler = self._handlers.get(choice)
                if handler is None:
                    click.echo("Unknown choice. Try again.")
                    continue
                handler()
        except (KeyboardInterrupt, EOFError, click.Abort):
            click.echo("\nSaving tasks...")
            self.store.save()
            click.echo("Interrupted. Goodbye.")
            return
        click.echo("Saving tasks...")
        self.store.save()
        click.echo("Goodbye.")

    # -------------------- prompts --------------------
    @staticmethod
    def _read_priority(default: Priority = Priority.MEDIUM) -> Priority:
        raw = click.prompt("Priority", type=PRIORITY_CHOICE, default=default.name)
        return Priority[raw.upper()]

    @staticmethod
    def _read_due_date() -> Optional[date]:
        return click.prompt("Due date (YYYY-MM-DD) or leave empty", type=DUE_DATE, default="", show_default=False)

    @staticmethod
    def _read_id(action: str) -> int:
        return click.prompt(f"Enter task ID to {action}", type=int)

    @staticmethod
    def _print_tasks(tasks: List[Task]) -> None:
        for task in tasks:
            click.echo(task_line(task))

    # -------------------- menu actions --------------------
    def _add(self) -> None:
        title = click.prompt("Title", default="", show_default=False).strip()
        if not title:
            click.echo("Title cannot be empty.")
            return
        priority = self._read_priority()
        due = self._read_due_date()
        task = self.store.add_task(title, priority, due)
        click.echo("Added: " + task_line(task))

    def _list(self) -> None:
        order = click.prompt("Sort by (1) Due date (2) Priority", type=SORT_CHOICE, default="1", show_choices=False)
        if order == "2":
            tasks = self.store.list_all_sorted_by_priority()
        else:
            tasks = self.store.list_all_sorted_by_due_date()
        if not tasks:
            click.echo("No tasks found.")
            return
        click.echo("\n--- TASKS ---")
        self._print_tasks(tasks)

    def _mark_complete(self) -> None:
        ok = self.store.mark_completed(self._read_id("mark complete"))
        click.echo("Marked completed." if ok else "Task not found.")

    def _delete(self) -> None:
        ok = self.store.delete_task(self._read_id("delete"))
        click.echo("Deleted." if ok else "Task not found.")

    def _search(self) -> None:
        keyword = click.prompt("Enter keyword to search in titles", default="", show_default=False).strip()
        found = self.store.search_by_title(keyword)
        if not found:
            click.echo("No matches.")
            return
        self._print_tasks(found)

    def _edit(self) -> None:
        task = self.store.find_by_id(self._read_id("edit"))
        if task is None:
            click.echo("Task not found.")
            return
        click.echo("Editing: " + task_line(task))
        new_title = click.prompt("New title (leave empty to keep)", default="", show_default=False).strip()
        if new_title:
            task.set_title(new_title)
        if click.confirm("Change priority?", default=False):
            task.priority = self._read_priority(task.priority)
        if click.confirm("Change due date?", default=False):
            task.due_date = self._read_due_date()
        if click.confirm("Toggle completed?", default=False):
            task.completed = not task.completed
        click.echo("Saved: " + task_line(task))

    def _save_now(self) -> None:
        if self.store.save():
            click.echo("Tasks saved.")
        else:
            click.echo("Could not save tasks; see the log for details.")
