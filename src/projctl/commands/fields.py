"""Command: list a project's fields and their choices."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from projctl.commands._base import ProjCommand
from projctl.commands._options import project_options, resolve_target

if TYPE_CHECKING:
    from projctl.commands._context import AppContext


@click.command(
    cls=ProjCommand,
    examples=[
        ("projctl fields -o my-org -n 12", ""),
        ("projctl -v fields -u octocat -n 3", "adds field ids and completed iterations"),
        ("projctl --json fields -o my-org -n 12", ""),
    ],
)
@project_options
@click.pass_obj
def fields(
    app: AppContext,
    project_number: int | None,
    organization: str | None,
    user: str | None,
    github_token: str | None,
) -> None:
    """List the fields of a project, with option and iteration indexes."""
    from projctl.services.project import ProjectService

    settings = app.settings.with_overrides(github={"token": github_token})
    target = resolve_target(
        settings,
        project_number=project_number,
        organization=organization,
        user=user,
    )
    service = ProjectService(app.gateway(settings), settings)
    app.emit(
        service.list_fields(target.number, organization=target.organization, user=target.user)
    )
