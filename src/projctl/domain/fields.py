"""Field schema models for a project board.

A project's fields arrive with a ``settings`` payload whose shape depends on
the field's type.  It is parsed once, at fetch time, into a tagged union:

- ``IterationSettings`` — iteration fields (``configuration.iterations``)
- ``OptionSettings`` — single-select fields (``options``)
- ``ScalarSettings`` — text, number, and date fields (anything else)
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, ValidationError


class FieldSchemaError(ValueError):
    """Raised when a field node or its settings payload cannot be parsed."""


class Option(BaseModel):
    """One selectable value of a single-select field."""

    model_config = {"frozen": True}

    id: str
    name: str


class Iteration(BaseModel):
    """One sprint/time-box of an iteration field."""

    model_config = {"frozen": True}

    id: str
    title: str


class ScalarSettings(BaseModel):
    """Plain text, number, or date field — values are sent verbatim."""

    model_config = {"frozen": True}

    kind: Literal["scalar"] = "scalar"


class OptionSettings(BaseModel):
    """Single-select field settings."""

    model_config = {"frozen": True}

    kind: Literal["option"] = "option"
    options: list[Option] = Field(default_factory=list)


class IterationSettings(BaseModel):
    """Iteration field settings.

    ``iterations`` holds the current and upcoming iterations, current first.
    ``completed_iterations`` holds past ones.
    """

    model_config = {"frozen": True}

    kind: Literal["iteration"] = "iteration"
    iterations: list[Iteration] = Field(default_factory=list)
    completed_iterations: list[Iteration] = Field(default_factory=list)


FieldSettings = Annotated[
    ScalarSettings | OptionSettings | IterationSettings,
    Field(discriminator="kind"),
]


class FieldDescriptor(BaseModel):
    """One field in a project's schema."""

    model_config = {"frozen": True}

    id: str
    name: str
    settings: FieldSettings = Field(default_factory=ScalarSettings)

    @property
    def kind(self) -> str:
        return self.settings.kind

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> FieldDescriptor:
        """Build a descriptor from a raw GraphQL field node.

        Raises:
            FieldSchemaError: If the node lacks ``id``/``name`` or its
                settings payload is not valid JSON of a known shape.
        """
        try:
            return cls(
                id=node["id"],
                name=node["name"],
                settings=parse_settings(node.get("settings")),
            )
        except (KeyError, TypeError) as exc:
            raise FieldSchemaError(f"Field node is missing {exc}") from exc
        except ValidationError as exc:
            raise FieldSchemaError(f"Invalid field node: {exc}") from exc


def parse_settings(
    raw: str | dict[str, Any] | None,
) -> ScalarSettings | OptionSettings | IterationSettings:
    """Parse a serialized settings payload into its tagged variant.

    The API returns settings as a JSON string; already-decoded dicts are
    accepted too.  ``None``, empty strings, and ``"null"`` are scalar.
    """
    if raw is None or raw == "":
        return ScalarSettings()

    data: Any = raw
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise FieldSchemaError(f"Invalid settings JSON: {exc}") from exc

    if data is None:
        return ScalarSettings()
    if not isinstance(data, dict):
        raise FieldSchemaError(f"Settings must be an object, got {type(data).__name__}")

    try:
        configuration = data.get("configuration")
        if isinstance(configuration, dict) and configuration.get("iterations") is not None:
            return IterationSettings(
                iterations=configuration["iterations"],
                completed_iterations=configuration.get("completed_iterations") or [],
            )
        if data.get("options") is not None:
            return OptionSettings(options=data["options"])
    except ValidationError as exc:
        raise FieldSchemaError(f"Invalid field settings: {exc}") from exc

    return ScalarSettings()
