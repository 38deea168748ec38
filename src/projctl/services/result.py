"""ServiceResult and ServiceError, the value every command-backing service returns.

A failed result always carries an error; per-field problems in a
successful run travel as ``warnings`` instead.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed: a ``code`` to branch on plus free-form ``detail``."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False only for fatal failures; the batch never ran or stopped early.
        op: Operation name (``"update_item"``, ``"list_fields"``, ...).
        data: Operation payload when ``ok``.
        warnings: Human-readable notes on non-fatal problems.
        error: Set when not ``ok``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls, op: str, error: ServiceError | str, message: str = "", **detail: Any
    ) -> Self:
        """Build a failed result from a ServiceError or a code/message pair."""
        if isinstance(error, str):
            error = ServiceError(code=error, message=message, detail=detail)
        return cls(ok=False, op=op, error=error)

    def for_op(self, op: str) -> Self:
        """Return this result relabelled as *op* (for results passed up a layer)."""
        return self if self.op == op else self.model_copy(update={"op": op})
