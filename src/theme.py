"""Color & style helpers for task lines.

Decisions:
- Open tasks are colored by priority; completed tasks use the done color.
- Truecolor preferred; falls back to the 256-color cube if unsupported.
- Disabled when stdout is not a TTY unless FORCE_COLOR=1; NO_COLOR disables.
- Palette overrides come from the environment or a project .env file.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

from models import Priority, Task

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_USE_TRUECOLOR = _ENABLE and any(tok in os.environ.get("COLORTERM", "").lower() for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ("TASKS_HIGH", "TASKS_MEDIUM", "TASKS_LOW", "TASKS_DONE")
PALETTE_DEFAULTS = {
    "TASKS_HIGH": "#E06C75",
    "TASKS_MEDIUM": "#E5C07B",
    "TASKS_LOW": "#56B6C2",
    "TASKS_DONE": "#7F848E",
}


def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def read_env_file(path: Path) -> dict[str, str]:
    """Return palette overrides found in a KEY=VALUE file; bad entries are ignored."""
    overrides: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, value = (part.strip() for part in line.split('=', 1))
        if key in PALETTE_KEYS and _is_hex(value):
            overrides[key] = '#' + value.lstrip('#')
    return overrides


def resolve_palette(environ: dict[str, str], file_overrides: dict[str, str]) -> dict[str, str]:
    """Pick each palette hex value: environment > .env file > default."""
    palette: dict[str, str] = {}
    for key in PALETTE_KEYS:
        env_value = environ.get(key, "")
        if _is_hex(env_value):
            palette[key] = '#' + env_value.lstrip('#')
        else:
            palette[key] = file_overrides.get(key, PALETTE_DEFAULTS[key])
    return palette


def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''


def hex_to_ansi(hex_code: str, truecolor: bool) -> str:
    """Foreground escape for a hex color, truecolor or nearest 256-color entry."""
    h = hex_code.lstrip('#')
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    if truecolor:
        return f"\033[38;2;{r};{g};{b}m"
    idx = 16 + 36 * round(r / 255 * 5) + 6 * round(g / 255 * 5) + round(b / 255 * 5)
    return f"\033[38;5;{idx}m"


RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

_env_path = Path(__file__).resolve().parent.parent / '.env'
PALETTE = resolve_palette(dict(os.environ), read_env_file(_env_path) if _env_path.exists() else {})


def _style(key: str) -> str:
    return hex_to_ansi(PALETTE[key], _USE_TRUECOLOR) if _ENABLE else ''


PRIORITY_COLOR = {
    Priority.HIGH: _style("TASKS_HIGH") + BOLD,
    Priority.MEDIUM: _style("TASKS_MEDIUM"),
    Priority.LOW: _style("TASKS_LOW"),
}
DONE_COLOR = _style("TASKS_DONE") + DIM


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET


def task_line(task: Task) -> str:
    """Display line for a task, colored by priority or as done."""
    style = DONE_COLOR if task.completed else PRIORITY_COLOR[task.priority]
    return color(task.display(), style)


__all__ = [
    'color', 'task_line', 'hex_to_ansi', 'read_env_file', 'resolve_palette',
    'RESET', 'BOLD', 'DIM', 'PRIORITY_COLOR', 'DONE_COLOR', 'PALETTE',
]
