"""Console output for the ``medit`` command.

The CLI installs one rich ``Console`` at startup; commands print through the
helpers below. Tag values and file names are user data, so every message is
escaped before rich interprets markup.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.status import Status
from rich.table import Table

_console: Console | None = None


def get_console() -> Console:
    if _console is None:
        raise RuntimeError("Console not initialized. Call set_console() first.")
    return _console


def set_console(console: Console) -> None:
    global _console
    _console = console


@contextmanager
def status(message: str, spinner: str = "dots") -> Iterator[Status]:
    """Show a spinner while a file is being written."""
    with get_console().status(escape(message), spinner=spinner) as current:
        yield current


def make_table(
    title: str,
    columns: Mapping[str, str],
    rows: Iterable[tuple[Any, ...]],
) -> Table:
    """Build a table; ``columns`` maps each header to its style, None cells stay blank."""
    table = Table(title=escape(title))
    for header, style in columns.items():
        table.add_column(header, style=style)
    for row in rows:
        table.add_row(*("" if cell is None else escape(str(cell)) for cell in row))
    return table


def print(*args: Any, **kwargs: Any) -> None:
    get_console().print(*args, **kwargs)


def _print_styled(style: str, message: str, prefix: str = "") -> None:
    get_console().print(f"[{style}]{prefix}{escape(message)}[/{style}]")


def print_error(message: str) -> None:
    _print_styled("red", message, prefix="Error: ")


def print_warning(message: str) -> None:
    _print_styled("yellow", message, prefix="Warning: ")


def print_success(message: str) -> None:
    _print_styled("green", message)


def print_json(data: Any) -> None:
    """Print ``data`` as indented JSON; long paths are never wrapped."""
    get_console().print_json(data=data)
