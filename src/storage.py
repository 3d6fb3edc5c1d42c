"""Persistence helpers (read/write) for the task file.

One task per line in the format documented in ``models``. Blank lines are
ignored; malformed lines are reported and skipped so a single bad line never
costs the rest of the file.
"""
import logging
from pathlib import Path
from typing import Iterable, Iterator, Union

from models import FormatError, Task

logger = logging.getLogger(__name__)


class Storage:
    def __init__(self, path: Union[str, Path]):
        self.path: Path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def iter_tasks(self) -> Iterator[Task]:
        """Yield tasks parsed from the file, skipping blank and malformed lines.

        I/O and decoding errors are not handled here; they surface from the
        generator at the point of failure.
        """
        with open(self.path, 'r', encoding='utf-8') as f:
            for lineno, raw in enumerate(f, start=1):
                line = raw.strip()
                if not line:
                    continue
                try:
                    yield Task.from_line(line)
                except FormatError as exc:
                    logger.warning("Skipping malformed line %d in %s: %s", lineno, self.path, exc)

    def save_tasks(self, tasks: Iterable[Task]) -> None:
        """Overwrite the file with one line per task."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            for task in tasks:
                f.write(task.to_line() + '\n')
