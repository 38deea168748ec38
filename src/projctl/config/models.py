"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, projctl.toml only contains
overrides.  Most setups need nothing beyond ``[project] organization``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- projctl.toml sections ---


class GitHubConfig(BaseModel):
    """[github] section."""

    model_config = {"frozen": True}

    api_url: str = "https://api.github.com/graphql"
    web_url: str = "https://github.com"
    token: str = ""
    timeout: float = 30.0
    graphql_features: str = "projects_next_graphql"


class ProjectConfig(BaseModel):
    """[project] section — defaults for the target project."""

    model_config = {"frozen": True}

    organization: str | None = None
    user: str | None = None
    number: int | None = None
    field_page_size: int = Field(default=20, ge=1, le=100)
