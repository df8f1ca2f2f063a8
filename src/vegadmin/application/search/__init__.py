"""Application search – query normalisation, search port and screen controller."""
from vegadmin.application.search.controller import ControllerState, SearchPaginationController
from vegadmin.application.search.errors import SearchError
from vegadmin.application.search.port import SearchBackend
from vegadmin.application.search.query import (
    BACKEND_WILDCARD,
    EMPTY_VALUE,
    WILDCARD_MARKERS,
    FilterSet,
    NormalizedQuery,
    SearchType,
    normalize_query,
)
from vegadmin.application.search.result import SearchResult

__all__ = [
    "BACKEND_WILDCARD",
    "EMPTY_VALUE",
    "WILDCARD_MARKERS",
    "ControllerState",
    "FilterSet",
    "NormalizedQuery",
    "SearchBackend",
    "SearchError",
    "SearchPaginationController",
    "SearchResult",
    "SearchType",
    "normalize_query",
]
