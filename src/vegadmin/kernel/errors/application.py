"""Application-layer errors — failures at use-case level."""

from __future__ import annotations

from typing import Any

from vegadmin.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class ValidationError(ApplicationError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class TimeoutError(ApplicationError):  # noqa: A001
    """Operation timed out."""

    default_code = "timeout"


__all__ = [
    "ApplicationError",
    "TimeoutError",
    "ValidationError",
]
