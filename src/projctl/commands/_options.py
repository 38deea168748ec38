"""Shared project-targeting options and their resolution against config."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NamedTuple

import click

if TYPE_CHECKING:
    from projctl.config.settings import ProjSettings

REPOSITORY_ENV_VAR = "GITHUB_REPOSITORY"


class ProjectTarget(NamedTuple):
    """Which project to operate on."""

    number: int
    organization: str | None
    user: str | None


def project_options[F: Callable[..., Any]](func: F) -> F:
    """Attach ``--project-number``, ``--organization``, ``--user``, ``--github-token``."""
    decorators = [
        click.option(
            "-n",
            "--project-number",
            type=int,
            default=None,
            help="Project number (from the project URL).",
        ),
        click.option(
            "-o",
            "--organization",
            default=None,
            help="Organization login that owns the project.",
        ),
        click.option(
            "-u",
            "--user",
            default=None,
            help="User login that owns the project (takes precedence).",
        ),
        click.option(
            "--github-token",
            envvar="GITHUB_TOKEN",
            default=None,
            help="Token with project scope. [env: GITHUB_TOKEN]",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _repository_owner() -> str | None:
    repo = os.environ.get(REPOSITORY_ENV_VAR, "")
    owner, sep, _ = repo.partition("/")
    return owner if sep and owner else None


def resolve_target(
    settings: ProjSettings,
    *,
    project_number: int | None,
    organization: str | None,
    user: str | None,
) -> ProjectTarget:
    """Merge CLI flags over ``[project]`` config.

    Owner flags, when given, replace the configured owner.  With no owner
    anywhere, the organization falls back to the owner part of
    ``GITHUB_REPOSITORY``.  An owner may still be missing afterwards; the
    service reports that as an error.

    Raises:
        click.UsageError: If no project number is given or configured.
    """
    cfg = settings.project
    number = project_number if project_number is not None else cfg.number
    if number is None:
        msg = "Missing option '--project-number' (or [project] number in projctl.toml)."
        raise click.UsageError(msg)

    # An owner flag replaces the configured owner pair as a whole.
    if not organization and not user:
        organization, user = cfg.organization, cfg.user
    if not organization and not user:
        organization = _repository_owner()
    return ProjectTarget(number, organization, user)
