"""projctl subcommands.

Each command imports its service inside the callback, so ``--help`` and
``--examples`` never build one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach ``update`` and ``fields`` to the root group."""
    from projctl.commands.fields import fields
    from projctl.commands.update import update

    for command in (update, fields):
        cli.add_command(command)
