"""ProjCommand: a click.Command that can print worked examples.

Examples are declared as ``(command line, note)`` pairs and shown by an
eager ``--examples`` flag, so ``--help`` stays short.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

Example = tuple[str, str]


def format_examples(examples: Sequence[Example]) -> str:
    """Render examples as ``$ command`` lines, each note as a comment above it."""
    lines: list[str] = []
    for command, note in examples:
        if note:
            lines.append(f"  # {note}")
        lines.append(f"  $ {command}")
    return "\n".join(lines)


class ProjCommand(click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: Sequence[Example] = (), **kwargs: Any) -> None:
        if examples and not kwargs.get("epilog"):
            kwargs["epilog"] = "Run with --examples for sample invocations."
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(self.examples))
        ctx.exit(0)
