"""Task store: ordered task list, id allocation, queries and load/save.

Insertion order is the natural order. Sorted listings and searches return
new lists and never reorder the stored tasks.
"""
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple, Union

from models import Priority, Task
from storage import Storage

logger = logging.getLogger(__name__)


def _due_key(task: Task) -> Tuple[bool, date]:
    # tasks without a due date sort after every dated task
    return (task.due_date is None, task.due_date or date.min)


class TaskStore:
    def __init__(self, path: Union[str, Path]):
        self.storage: Storage = Storage(path)
        self._tasks: List[Task] = []
        self._next_id: int = 1

    @property
    def path(self) -> Path:
        return self.storage.path

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    # -------------------- loading / saving --------------------
    def load(self) -> bool:
        """Replace the in-memory tasks with the file's contents.

        A missing file leaves the store empty. Returns False if reading
        failed part-way; tasks parsed before the failure are kept.
        """
        self._tasks.clear()
        if not self.storage.exists():
            logger.debug("No task file at %s; starting empty", self.path)
            return True
        try:
            for task in self.storage.iter_tasks():
                self._tasks.append(task)
                self._next_id = max(self._next_id, task.id + 1)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to load tasks from %s: %s", self.path, exc)
            return False
        logger.debug("Loaded %s from %s", self, self.path)
        return True

    def save(self) -> bool:
        """Overwrite the task file with the current tasks in natural order."""
        try:
            self.storage.save_tasks(self._tasks)
        except OSError as exc:
            logger.error("Failed to save tasks to %s: %s", self.path, exc)
            return False
        logger.debug("Saved %d tasks to %s", len(self._tasks), self.path)
        return True

    # -------------------- id management --------------------
    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    # -------------------- task operations --------------------
    def add_task(self, title: str, priority: Priority, due_date: Optional[date] = None) -> Task:
        task = Task(id=self._allocate_id(), title=title, priority=priority, due_date=due_date)
        self._tasks.append(task)
        return task

    def delete_task(self, task_id: int) -> bool:
        for task in self._tasks:
            if task.id == task_id:
                self._tasks.remove(task)
                return True
        return False

    def find_by_id(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def mark_completed(self, task_id: int) -> bool:
        task = self.find_by_id(task_id)
        if task is None:
            return False
        task.completed = True
        return True

    # -------------------- queries --------------------
    def list_all_sorted_by_due_date(self) -> List[Task]:
        """Earliest due first, undated last; ties go LOW, MEDIUM, HIGH."""
        return sorted(self._tasks, key=lambda t: (_due_key(t), t.priority))

    def list_all_sorted_by_priority(self) -> List[Task]:
        """HIGH first; ties by earliest due date, undated last."""
        return sorted(self._tasks, key=lambda t: (-t.priority, _due_key(t)))

    def search_by_title(self, keyword: str) -> List[Task]:
        needle = keyword.lower()
        return [t for t in self._tasks if needle in t.title.lower()]

    def count(self) -> int:
        return len(self._tasks)

    def __len__(self) -> int:
        return self.count()

    def __str__(self) -> str:
        done = sum(1 for t in self._tasks if t.completed)
        return f'{len(self._tasks)} tasks ({done} completed)'
