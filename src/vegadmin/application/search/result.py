"""Application search – SearchResult generic container."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

__all__ = ["SearchResult"]


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """One page of records plus the total match count at fetch time."""

    items: list[T] = field(default_factory=list)
    total_count: int = 0

    def __post_init__(self) -> None:
        if self.total_count < 0:
            raise ValueError("total_count must be >= 0")

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @classmethod
    def empty(cls) -> "SearchResult[T]":
        return cls(items=[], total_count=0)
