"""Main entry point for the terminal task tracker."""
import logging
from pathlib import Path

import click

from cli import CLI
from store import TaskStore

DEFAULT_TASKS_FILE = Path("tasks.txt")


@click.command()
@click.option(
    "--file", "-f", "tasks_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_TASKS_FILE,
    envvar="TASKS_FILE",
    show_default=True,
    help="Task file to load on start and save on exit (or set TASKS_FILE).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def main(tasks_file: Path, verbose: bool) -> None:
    """Track tasks from an interactive menu."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )
    store = TaskStore(tasks_file)
    store.load()
    click.echo(f"Tasks loaded: {store.count()}")
    CLI(store).run()


if __name__ == "__main__":
    main()
