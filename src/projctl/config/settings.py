"""ProjSettings: one frozen object built from flags, environment and projctl.toml.

Later sources lose to earlier ones:

1. keyword arguments (the global CLI flags)
2. ``PROJCTL_*`` environment variables, ``__`` between section and key
   (``PROJCTL_GITHUB__TOKEN``, ``PROJCTL_PROJECT__NUMBER``)
3. the TOML file (``--config``, ``PROJCTL_CONFIG`` or discovery)
4. model defaults

Per-command flags such as ``--github-token`` are layered on afterwards with
:meth:`ProjSettings.with_overrides`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Self

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from projctl.config.discovery import find_config
from projctl.config.models import GitHubConfig, ProjectConfig

# File for the ProjSettings currently being constructed by from_cli().
_loading_from: ContextVar[Path | None] = ContextVar("_loading_from", default=None)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a parsed projctl.toml (empty without a file)."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = _read_toml(path) if path is not None and path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class ProjSettings(BaseSettings):
    """Runtime configuration for projctl.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        json_output: ``--json``.
        quiet: ``-q``.
        verbose: ``-v``.
        log_json: ``--log-json``.
        github: API endpoint, token, timeout and feature header.
        project: Default project owner and number.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PROJCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _loading_from.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> Self:
        """Load settings for a CLI run.

        An explicit *config_path* that does not exist means "no TOML" rather
        than an error; without one, :func:`find_config` searches from *start*.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(start)

        token = _loading_from.set(toml_path)
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _loading_from.reset(token)

    def with_overrides(self, **sections: dict[str, Any]) -> Self:
        """Return a copy with the non-None *sections* values merged in.

        ``settings.with_overrides(github={"token": flag_value})`` keeps the
        configured token when *flag_value* is None.
        """
        update: dict[str, Any] = {}
        for name, values in sections.items():
            changes = {key: value for key, value in values.items() if value is not None}
            if changes:
                update[name] = getattr(self, name).model_copy(update=changes)
        return self.model_copy(update=update) if update else self
