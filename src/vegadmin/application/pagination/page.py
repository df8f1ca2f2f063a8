"""Application pagination – PageState."""
from __future__ import annotations

import dataclasses
import math


@dataclasses.dataclass(frozen=True)
class PageState:
    """Offset pagination cursor for one search screen.

    ``page_index`` is 0-based. ``total_count`` is only known after a fetch.
    """

    page_index: int = 0
    page_size: int = 20
    total_count: int = 0

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise ValueError("page_index must be >= 0")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")
        if self.total_count < 0:
            raise ValueError("total_count must be >= 0")

    @property
    def offset(self) -> int:
        return self.page_index * self.page_size

    @property
    def total_pages(self) -> int:
        if self.total_count <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0

    @property
    def first_record(self) -> int:
        """1-based number of the first record on this page (0 when empty)."""
        if self.total_count == 0:
            return 0
        return self.offset + 1

    @property
    def last_record(self) -> int:
        return min(self.offset + self.page_size, self.total_count)

    def contains(self, page_index: int) -> bool:
        return 0 <= page_index < self.total_pages

    def with_index(self, page_index: int) -> "PageState":
        return dataclasses.replace(self, page_index=page_index)

    def with_total(self, total_count: int) -> "PageState":
        return dataclasses.replace(self, total_count=total_count)

    def reset(self) -> "PageState":
        return dataclasses.replace(self, page_index=0)


__all__ = ["PageState"]
