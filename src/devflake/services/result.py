"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Every service operation returns ServiceResult.  Fatal errors
(``ConfigError``) become ``ok=False`` results; per-platform failures are
reported as warnings on an ``ok=True`` result so resolved platforms are
never thrown away.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Codes carried by ServiceError."""

    CONFIG_ERROR = "CONFIG_ERROR"
    PLATFORM_UNSUPPORTED = "PLATFORM_UNSUPPORTED"
    INPUT_ERROR = "INPUT_ERROR"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    BUILD_FAILED = "BUILD_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"resolve"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, one per failed platform.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry, counts).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
