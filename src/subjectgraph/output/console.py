"""Buffered Rich console for rendering ServiceResults to a string.

Renderers draw onto a console whose file is a StringIO, and the formatter
returns the buffer's text. Rich drops colour codes by itself when the real
stdout is not a terminal (pipes, CliRunner).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

_STYLES = {
    "ok": "bold green",
    "error": "bold red",
    "warning": "bold yellow",
    "op": "bold cyan",
    "key": "dim",
    "id": "bold blue",
    "label": "bold",
    "course": "magenta",
}

SG_THEME = Theme({f"sg.{name}": style for name, style in _STYLES.items()})

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """New console writing to its own StringIO buffer.

    Emoji shortcodes are off: course codes and URLs contain colons.
    """
    return Console(
        file=StringIO(),
        theme=SG_THEME,
        width=width or DEFAULT_WIDTH,
        no_color=no_color,
        highlight=False,
        emoji=False,
    )


def get_output(console: Console) -> str:
    """Everything rendered so far on a console from :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console was not created by create_console()"
        raise TypeError(msg)
    return buffer.getvalue()
