"""Infrastructure errors — I/O failures, backend integrations."""

from __future__ import annotations

from typing import Any

from vegadmin.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class ExternalServiceError(InfrastructureError):
    """The hosted backend returned an error or could not be reached."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        backend_code: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code
        self.backend_code = backend_code


__all__ = [
    "ExternalServiceError",
    "InfrastructureError",
    "SerializationError",
]
