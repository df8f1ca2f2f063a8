"""Application search – SearchError."""
from __future__ import annotations

from typing import Any

from vegadmin.kernel.errors import ApplicationError


class SearchError(ApplicationError):
    """A search could not be completed (network or backend failure).

    Never retried automatically.
    """

    default_code = "search_error"
    default_message = "Search failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        backend: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.backend = backend


__all__ = ["SearchError"]
