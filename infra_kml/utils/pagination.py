"""Pagination (windowing) over ordered collections.

Computes page slices and a bounded set of page numbers for
navigation.  Used by batched exports and by list-rendering callers.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from infra_kml.core.constants import PAGE_WINDOW_SIZE
from infra_kml.core.exceptions import ValidationError

T = TypeVar("T")


class PaginationError(ValidationError):
    """Raised for an invalid page size."""

    default_stage = "pagination"
    default_code = "PAGINATION_INVALID"


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One window over an ordered collection.

    Attributes:
        items: The records on this page, in collection order.
        page: 1-based page number.
        page_size: Maximum records per page.
        total_items: Size of the whole collection.
        total_pages: ``ceil(total_items / page_size)``; 0 when empty.
        page_range: Page numbers to offer for navigation (at most 5).
    """

    items: tuple[T, ...]
    page: int
    page_size: int
    total_items: int
    total_pages: int
    page_range: tuple[int, ...]

    @property
    def start_index(self) -> int:
        """1-based position of the first item on this page (0 when empty)."""
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def end_index(self) -> int:
        """1-based position of the last item on this page (0 when empty)."""
        if not self.items:
            return 0
        return min(self.page * self.page_size, self.total_items)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def total_pages(count: int, page_size: int) -> int:
    """Number of pages needed for ``count`` items."""
    _check_page_size(page_size)
    return math.ceil(count / page_size)


def page_range(current_page: int, pages: int, *, window: int = PAGE_WINDOW_SIZE) -> tuple[int, ...]:
    """Sliding window of page numbers centred on ``current_page``.

    Never starts below 1 or ends past ``pages``; near the end the
    window shifts left so up to ``window`` numbers are still shown.
    """
    start = max(1, current_page - window // 2)
    end = min(pages, start + window - 1)
    if end - start + 1 < window:
        start = max(1, end - window + 1)
    return tuple(range(start, end + 1))


def paginate(items: Sequence[T], page_size: int, page: int = 1) -> Page[T]:
    """Return page ``page`` of ``items``.

    The slice is the half-open range ``[(page-1)*page_size, page*page_size)``
    clipped to the collection.  Pages outside ``1..total_pages`` produce an
    empty slice.

    Raises:
        PaginationError: If ``page_size`` is less than 1.
    """
    pages = total_pages(len(items), page_size)
    start = (page - 1) * page_size
    chunk = tuple(items[start : start + page_size]) if page >= 1 else ()
    return Page(
        items=chunk,
        page=page,
        page_size=page_size,
        total_items=len(items),
        total_pages=pages,
        page_range=page_range(page, pages),
    )


def iter_pages(items: Sequence[T], page_size: int) -> Iterator[Page[T]]:
    """Yield every page of ``items`` in order."""
    pages = total_pages(len(items), page_size)
    for number in range(1, pages + 1):
        yield paginate(items, page_size, number)


class Paginator(Generic[T]):
    """Stateful page navigator.

    Navigation to page 0, negative pages, or pages beyond
    ``total_pages`` leaves the current page unchanged.
    """

    def __init__(self, items: Sequence[T], page_size: int, initial_page: int = 1) -> None:
        _check_page_size(page_size)
        self._items = items
        self._page_size = page_size
        self._current = initial_page

    @property
    def current_page(self) -> int:
        return self._current

    @property
    def total_pages(self) -> int:
        return total_pages(len(self._items), self._page_size)

    @property
    def page(self) -> Page[T]:
        """The current page view."""
        return paginate(self._items, self._page_size, self._current)

    def go_to_page(self, page: int) -> bool:
        """Move to ``page`` if it exists.  Returns whether the request was accepted."""
        if 1 <= page <= self.total_pages:
            self._current = page
            return True
        return False

    def first(self) -> bool:
        return self.go_to_page(1)

    def last(self) -> bool:
        return self.go_to_page(self.total_pages)

    def previous(self) -> bool:
        return self.go_to_page(self._current - 1)

    def next(self) -> bool:
        return self.go_to_page(self._current + 1)


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        msg = f"Page size must be >= 1, got {page_size}"
        raise PaginationError(msg)
