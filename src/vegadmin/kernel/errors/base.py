"""Root of the vegadmin error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Every error raised by vegadmin derives from this class.

    Screens show ``str(error)``, which is just the message. Logs get
    :meth:`to_dict`, which adds the error type, a machine-readable ``code``
    and any ``detail`` the raiser attached.

    Args:
        message: Text shown to the dashboard user. Falls back to
            ``default_message``.
        code: Slug for log queries (defaults to ``default_code``).
        detail: Extra context, must be JSON-serialisable.
        cause: Lower-level exception this error wraps; also set as
            ``__cause__``.
    """

    default_code: str = "error"
    default_message: str = "Unexpected error"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
