"""Page slicing for the displayed row sequence."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from ...config import settings

T = TypeVar("T")

PAGE_WINDOW_LEAD = 3


@dataclass(slots=True)
class Page(Generic[T]):
    rows: list[T]
    page: int
    page_size: int
    page_count: int
    total_rows: int
    start_index: int

    @property
    def has_next_page(self) -> bool:
        return self.page < self.page_count


@dataclass(slots=True)
class PageWindow:
    pages: list[int]
    show_first: bool
    show_last: bool


def page_count_for(total_rows: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"Page size must be at least 1, got {page_size}.")
    return max(1, math.ceil(total_rows / page_size))


def paginate(
    rows: Sequence[T],
    page_size: int,
    page: int,
    *,
    disable_pagination: bool = False,
) -> Page[T]:
    """Slice ``rows`` to the requested 1-based page, clamped to the valid range."""

    if disable_pagination:
        return Page(
            rows=list(rows),
            page=page,
            page_size=page_size,
            page_count=1,
            total_rows=len(rows),
            start_index=0,
        )

    page_count = page_count_for(len(rows), page_size)
    current = min(max(page, 1), page_count)
    start = (current - 1) * page_size
    return Page(
        rows=list(rows[start:start + page_size]),
        page=current,
        page_size=page_size,
        page_count=page_count,
        total_rows=len(rows),
        start_index=start,
    )


def page_window(page: int, page_count: int, size: Optional[int] = None) -> PageWindow:
    """Sliding window of page numbers around ``page``.

    The window starts a few pages before the current one and is shifted
    left near the end so it stays full whenever enough pages exist.
    """
    size = size or settings.page_window_size
    if page_count <= size:
        pages = list(range(1, page_count + 1))
    else:
        start = max(1, page - PAGE_WINDOW_LEAD)
        end = min(page_count, start + size - 1)
        if end - start < size - 1:
            start = max(1, end - size + 1)
        pages = list(range(start, end + 1))
    return PageWindow(
        pages=pages,
        show_first=page > PAGE_WINDOW_LEAD,
        show_last=(page_count - page) >= PAGE_WINDOW_LEAD,
    )


class Paginator:
    """Tracks the current page for a table and resets it when the rows change."""

    def __init__(self, page_size: Optional[int] = None, *, disable_pagination: bool = False) -> None:
        self.page_size = page_size or settings.default_page_size
        if self.page_size < 1:
            raise ValueError(f"Page size must be at least 1, got {self.page_size}.")
        self.disable_pagination = disable_pagination
        self.page = 1
        self._row_count: Optional[int] = None

    def reset(self) -> None:
        self.page = 1

    def sync_row_count(self, row_count: int) -> bool:
        """Record the upstream row count; returns True when the page was reset."""
        changed = self._row_count is not None and row_count != self._row_count
        self._row_count = row_count
        if changed and self.page != 1:
            self.reset()
            return True
        return False

    def set_page_size(self, page_size: int) -> None:
        if page_size not in settings.page_size_options:
            raise ValueError(
                f"Unsupported page size {page_size}; expected one of {list(settings.page_size_options)}."
            )
        self.page_size = page_size
        self.reset()

    def go_to(self, page: int) -> int:
        if self._row_count is None or self.disable_pagination:
            self.page = max(1, page)
        else:
            self.page = min(max(page, 1), page_count_for(self._row_count, self.page_size))
        return self.page

    def paginate(self, rows: Sequence[T]) -> Page[T]:
        self.sync_row_count(len(rows))
        result = paginate(rows, self.page_size, self.page, disable_pagination=self.disable_pagination)
        if not self.disable_pagination:
            self.page = result.page
        return result
