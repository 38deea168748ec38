"""AppContext: the object every subcommand receives through ``@click.pass_obj``.

It owns the GraphQL client for the run and turns a ServiceResult into
output plus an exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from projctl.config.logging import configure_logging
from projctl.infrastructure.graphql import GraphQLClient
from projctl.infrastructure.projects import ProjectsGateway
from projctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from projctl.config.settings import ProjSettings
    from projctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The GraphQL client is created on first use so ``--help`` and
    ``--version`` never need a token or touch the network.
    """

    def __init__(self, settings: ProjSettings) -> None:
        self.settings = settings
        self._client: GraphQLClient | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def gateway(self, settings: ProjSettings | None = None) -> ProjectsGateway:
        """Return a ProjectsGateway, opening the client on first call.

        The client is closed when the current Click context tears down.
        """
        if self._client is None:
            self._client = GraphQLClient.from_settings(settings or self.settings)
            ctx = click.get_current_context(silent=True)
            if ctx is not None:
                ctx.call_on_close(self.close)
        return ProjectsGateway(self._client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          In quiet mode warnings are also echoed to stderr.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if settings.quiet and not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
