"""ServiceResult and ServiceError — the contract every space operation returns.

INVARIANT: All public service methods return ServiceResult. Resolution and
precondition failures become ``ok=False`` results; per-item batch problems
(skipped or aborted spaces, failed role grants) stay ``ok=True`` and are
reported through ``warnings`` and the operation's ``data``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from spacectl.domain.errors import SpaceCtlError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for space operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"delete_space"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues, in the order they happened.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans under ``--verbose``).
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
        cls, op: str, exc: SpaceCtlError, *, warnings: list[str] | None = None
    ) -> ServiceResult:
        """Build an ``ok=False`` result from a raised :class:`SpaceCtlError`."""
        return cls(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=exc.code, message=exc.message, detail=dict(exc.detail)),
        )
