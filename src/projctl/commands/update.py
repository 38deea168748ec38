"""Command: resolve and apply field values on a project item."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from projctl.commands._base import ProjCommand
from projctl.commands._options import project_options, resolve_target
from projctl.domain.requests import FieldUpdate, pair_fields, parse_field_assignment

if TYPE_CHECKING:
    from projctl.commands._context import AppContext


def _parse_assignments(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> list[FieldUpdate]:
    try:
        return [parse_field_assignment(v) for v in value]
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


@click.command(
    cls=ProjCommand,
    examples=[
        (
            'projctl update PNI_lADOABC -o my-org -n 12 '
            '--field-names "Status,Iteration" --field-values "Todo,[0]"',
            "[0] is the current iteration",
        ),
        (
            "projctl update PNI_lADOABC -u octocat -n 3 --field Estimate=5 --field Due=2024-06-01",
            "",
        ),
        (
            'projctl update PNI_lADOABC -n 12 --field "Size=[2]"',
            "owner from projctl.toml or GITHUB_REPOSITORY",
        ),
        ("projctl --json update PNI_lADOABC -o my-org -n 12 --field Status=Done", ""),
    ],
)
@click.argument("item_id")
@project_options
@click.option("--field-names", default=None, help="Comma-separated field names.")
@click.option(
    "--field-values",
    default=None,
    help="Comma-separated values, paired with --field-names by position. "
    "Use [N] to pick the Nth option or iteration ([0] is the current iteration).",
)
@click.option(
    "--field",
    "assignments",
    multiple=True,
    callback=_parse_assignments,
    metavar="NAME=VALUE",
    help="One field update (repeatable); applied after --field-names pairs.",
)
@click.pass_obj
def update(
    app: AppContext,
    item_id: str,
    project_number: int | None,
    organization: str | None,
    user: str | None,
    github_token: str | None,
    field_names: str | None,
    field_values: str | None,
    assignments: list[FieldUpdate],
) -> None:
    """Update custom fields of a project item."""
    from projctl.services.update import FieldUpdateService

    settings = app.settings.with_overrides(github={"token": github_token})
    target = resolve_target(
        settings,
        project_number=project_number,
        organization=organization,
        user=user,
    )
    updates = [*pair_fields(field_names, field_values), *assignments]

    service = FieldUpdateService(app.gateway(settings), settings)
    app.emit(
        service.update_item(
            item_id,
            project_number=target.number,
            updates=updates,
            organization=target.organization,
            user=target.user,
        )
    )
