"""projctl entry point: global output/logging flags and subcommand registration."""

from __future__ import annotations

import click

from projctl import __version__
from projctl.commands import register_commands
from projctl.commands._context import AppContext
from projctl.config.discovery import CONFIG_ENV_VAR
from projctl.config.settings import ProjSettings

_EPILOG = """\
Environment: GITHUB_TOKEN supplies the API token, GITHUB_REPOSITORY
(owner/repo) supplies a default organization, and PROJCTL_<SECTION>__<KEY>
overrides any projctl.toml setting."""


@click.group(
    invoke_without_command=True,
    epilog=_EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, prog_name="projctl")
@click.option("--json", "json_output", is_flag=True, help="Emit the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only OK/ERROR lines.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and detailed output.")
@click.option("--log-json", is_flag=True, help="Write log records to stderr as JSON.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar=CONFIG_ENV_VAR,
    default=None,
    help=f"Path to projctl.toml. [env: {CONFIG_ENV_VAR}]",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Update GitHub project item fields by name and human-readable value."""
    ctx.obj = AppContext(
        ProjSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
