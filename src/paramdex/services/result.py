"""ServiceResult and ServiceError: the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
Parse exceptions stop at the service boundary and become ServiceError
payloads, so one failing document never aborts its siblings.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from paramdex.domain.errors import ParamdexError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: ParamdexError, **extra: Any) -> ServiceError:
        """Copy code, message and structured detail from a parse error."""
        return cls(code=exc.code, message=exc.message, detail={**exc.detail(), **extra})


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"check"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, error: ServiceError) -> ServiceResult:
        return cls(ok=False, op=op, error=error)
