"""ServiceResult and ServiceError — the envelope every service returns.

The graph engine itself is total (unknown ids give empty results); the
service layer is where lookups that make no sense for the user become
``ok=False`` results with a machine-readable code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes emitted by the services.
NOT_FOUND = "NOT_FOUND"
NO_PATH = "NO_PATH"
INVALID_DEPTH = "INVALID_DEPTH"
INVALID_MODE = "INVALID_MODE"
INVALID_FORMAT = "INVALID_FORMAT"


class ServiceError(BaseModel):
    """Why a query failed: a stable ``code`` plus a readable message."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """What every service method hands back to the command layer.

    Attributes:
        ok: False when ``error`` is set.
        op: Name of the operation (e.g. ``"relatives"``).
        data: Payload, shaped per ``op``.
        warnings: Messages printed to stderr alongside a successful result.
        error: Populated for failed queries.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for an ``ok=False`` result."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
