"""Application search – query normalisation and FilterSet."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from types import MappingProxyType

__all__ = [
    "BACKEND_WILDCARD",
    "EMPTY_VALUE",
    "WILDCARD_MARKERS",
    "FilterSet",
    "NormalizedQuery",
    "SearchType",
    "normalize_query",
]

WILDCARD_MARKERS: tuple[str, ...] = ("*", "%")
BACKEND_WILDCARD = "%"

# Filter value selecting records whose dimension has no value.
EMPTY_VALUE = "null"


class SearchType(str, Enum):
    EXACT = "exact"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    CONTAINS = "contains"
    PATTERN = "pattern"


@dataclasses.dataclass(frozen=True)
class NormalizedQuery:
    """Search text translated into the backend's ``LIKE`` syntax."""

    text: str
    pattern: str
    search_type: SearchType

    @property
    def is_wildcard(self) -> bool:
        return self.search_type is not SearchType.EXACT


def normalize_query(
    text: str,
    *,
    markers: tuple[str, ...] = WILDCARD_MARKERS,
    wildcard: str = BACKEND_WILDCARD,
) -> NormalizedQuery | None:
    """Translate user search text into a :class:`NormalizedQuery`.

    Returns ``None`` when *text* is blank, meaning "no search".

    Examples::

        salt    -> exact        "salt"
        salt*   -> starts_with  "salt%"
        *salt   -> ends_with    "%salt"
        *salt*  -> contains     "%salt%"
        sa*lt   -> pattern      "sa%lt"
    """
    trimmed = text.strip()
    if not trimmed:
        return None

    if not any(marker in trimmed for marker in markers):
        return NormalizedQuery(text=trimmed, pattern=trimmed, search_type=SearchType.EXACT)

    pattern = trimmed
    for marker in markers:
        if marker != wildcard:
            pattern = pattern.replace(marker, wildcard)

    leading = pattern.startswith(wildcard)
    trailing = pattern.endswith(wildcard)
    if leading and trailing:
        search_type = SearchType.CONTAINS
    elif leading:
        search_type = SearchType.ENDS_WITH
    elif trailing:
        search_type = SearchType.STARTS_WITH
    else:
        search_type = SearchType.PATTERN
    return NormalizedQuery(text=trimmed, pattern=pattern, search_type=search_type)


class FilterSet(Mapping[str, frozenset[str]]):
    """Immutable mapping of filter dimension to accepted values.

    An empty value set means the dimension is unrestricted.
    """

    __slots__ = ("_dims",)

    def __init__(self, dimensions: Mapping[str, Iterable[str]] | None = None) -> None:
        dims = {name: frozenset(values) for name, values in (dimensions or {}).items()}
        self._dims = MappingProxyType(dims)

    @classmethod
    def of(cls, **dimensions: Iterable[str]) -> "FilterSet":
        return cls(dimensions)

    def __getitem__(self, name: str) -> frozenset[str]:
        return self._dims[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._dims)

    def __len__(self) -> int:
        return len(self._dims)

    def __bool__(self) -> bool:
        return any(self._dims.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self.active() == other.active()

    def __hash__(self) -> int:
        return hash(frozenset(self.active().items()))

    def __repr__(self) -> str:
        return f"FilterSet({dict(self.as_params())!r})"

    def values_for(self, name: str) -> frozenset[str]:
        return self._dims.get(name, frozenset())

    def with_values(self, name: str, values: Iterable[str]) -> "FilterSet":
        dims = dict(self._dims)
        dims[name] = frozenset(values)
        return FilterSet(dims)

    def without(self, name: str) -> "FilterSet":
        return FilterSet({k: v for k, v in self._dims.items() if k != name})

    def active(self) -> dict[str, frozenset[str]]:
        """Only the dimensions that actually restrict results."""
        return {k: v for k, v in self._dims.items() if v}

    def as_params(self) -> dict[str, list[str]]:
        return {k: sorted(v) for k, v in self.active().items()}
