"""Rich Console factory and theme for spacectl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Outside a terminal (tests, pipes) Rich drops color.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SPACECTL_THEME = Theme(
    {
        "sc.ok": "bold green",
        "sc.error": "bold red",
        "sc.warning": "bold yellow",
        "sc.op": "bold cyan",
        "sc.key": "dim",
        "sc.name": "bold blue",
        "sc.good": "green",
        "sc.bad": "red",
        "sc.state.started": "green",
        "sc.state.stopped": "yellow",
    }
)

_STATE_STYLES: dict[str, str] = {
    "STARTED": "sc.state.started",
    "STOPPED": "sc.state.stopped",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SPACECTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    """Rich style name for an app state."""
    return _STATE_STYLES.get(state.upper(), "")
