"""Rich console setup shared by the renderers.

Renderers draw into an in-memory console and hand back a string; the
command layer decides whether it goes to stdout or stderr.
"""

from __future__ import annotations

from io import StringIO
from typing import cast

from rich.console import Console
from rich.theme import Theme

_DEFAULT_WIDTH = 120

PROJ_THEME = Theme(
    {
        "proj.ok": "bold green",
        "proj.error": "bold red",
        "proj.op": "bold cyan",
        "proj.key": "dim",
        "proj.id": "bold blue",
        "proj.field": "bold",
        "proj.value": "magenta",
        "proj.link": "underline cyan",
        "proj.kind.scalar": "dim",
        "proj.kind.option": "green",
        "proj.kind.iteration": "yellow",
    }
)

_KIND_STYLES = {
    "scalar": "proj.kind.scalar",
    "option": "proj.kind.option",
    "iteration": "proj.kind.iteration",
}


def create_console(*, width: int | None = None, no_color: bool = False) -> Console:
    """Return a themed console writing to a string buffer.

    ``soft_wrap`` keeps outcome lines and project URLs on one line each when
    output is piped or grepped.
    """
    return Console(
        file=StringIO(),
        theme=PROJ_THEME,
        width=width or _DEFAULT_WIDTH,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
    )


def get_output(console: Console) -> str:
    """Return everything printed to a console from :func:`create_console`."""
    return cast(StringIO, console.file).getvalue()


def style_for_kind(kind: str) -> str:
    return _KIND_STYLES.get(kind, "")
