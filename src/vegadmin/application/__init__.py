"""Application – use-case building blocks (framework-agnostic)."""

from vegadmin.application.pagination import PageState
from vegadmin.application.scheduler import AsyncioTimer, Debouncer, Timer
from vegadmin.application.search import (
    ControllerState,
    FilterSet,
    NormalizedQuery,
    SearchBackend,
    SearchError,
    SearchPaginationController,
    SearchResult,
    SearchType,
    normalize_query,
)

__all__ = [
    "AsyncioTimer",
    "ControllerState",
    "Debouncer",
    "FilterSet",
    "NormalizedQuery",
    "PageState",
    "SearchBackend",
    "SearchError",
    "SearchPaginationController",
    "SearchResult",
    "SearchType",
    "Timer",
    "normalize_query",
]
