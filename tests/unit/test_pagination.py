"""Tests for pagination (windowing) helpers."""

from __future__ import annotations

import pytest

from infra_kml.utils.pagination import (
    PaginationError,
    Paginator,
    iter_pages,
    page_range,
    paginate,
    total_pages,
)

ITEMS = list(range(1, 24))  # 23 items


class TestTotalPages:
    """total_pages is ceil(count / page_size)."""

    @pytest.mark.parametrize(
        ("count", "size", "expected"),
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (23, 5, 5)],
    )
    def test_values(self, count: int, size: int, expected: int) -> None:
        assert total_pages(count, size) == expected

    @pytest.mark.parametrize("size", [0, -3])
    def test_invalid_page_size(self, size: int) -> None:
        with pytest.raises(PaginationError, match="Page size must be >= 1"):
            total_pages(10, size)

    def test_error_category(self) -> None:
        with pytest.raises(PaginationError) as exc_info:
            paginate(ITEMS, 0)
        assert exc_info.value.category == "validation"
        assert exc_info.value.code == "PAGINATION_INVALID"


class TestPaginate:
    """paginate returns the half-open page slice."""

    def test_first_page(self) -> None:
        page = paginate(ITEMS, 10)
        assert page.items == tuple(range(1, 11))
        assert (page.start_index, page.end_index) == (1, 10)
        assert not page.has_previous
        assert page.has_next

    def test_last_partial_page(self) -> None:
        page = paginate(ITEMS, 10, 3)
        assert page.items == (21, 22, 23)
        assert (page.start_index, page.end_index) == (21, 23)
        assert page.has_previous
        assert not page.has_next

    def test_pages_reconstruct_collection(self) -> None:
        rebuilt = [item for page in iter_pages(ITEMS, 4) for item in page.items]
        assert rebuilt == ITEMS

    @pytest.mark.parametrize("number", [0, -1, 4, 99])
    def test_out_of_range_page_is_empty(self, number: int) -> None:
        page = paginate(ITEMS, 10, number)
        assert page.items == ()
        assert (page.start_index, page.end_index) == (0, 0)

    def test_empty_collection(self) -> None:
        page = paginate([], 10)
        assert page.items == ()
        assert page.total_pages == 0
        assert page.page_range == ()
        assert list(iter_pages([], 10)) == []


class TestPageRange:
    """page_range offers at most five page numbers."""

    @pytest.mark.parametrize(
        ("current", "pages", "expected"),
        [
            (1, 10, (1, 2, 3, 4, 5)),
            (5, 10, (3, 4, 5, 6, 7)),
            (10, 10, (6, 7, 8, 9, 10)),
            (9, 10, (6, 7, 8, 9, 10)),
            (2, 3, (1, 2, 3)),
            (1, 1, (1,)),
        ],
    )
    def test_window(self, current: int, pages: int, expected: tuple[int, ...]) -> None:
        assert page_range(current, pages) == expected

    def test_no_pages(self) -> None:
        assert page_range(1, 0) == ()


class TestPaginator:
    """Stateful navigation ignores impossible moves."""

    def test_initial_state(self) -> None:
        paginator = Paginator(ITEMS, 5)
        assert paginator.current_page == 1
        assert paginator.total_pages == 5
        assert paginator.page.items == (1, 2, 3, 4, 5)

    def test_next_and_previous(self) -> None:
        paginator = Paginator(ITEMS, 5)
        assert paginator.next()
        assert paginator.current_page == 2
        assert paginator.previous()
        assert paginator.current_page == 1

    def test_previous_on_first_page_is_noop(self) -> None:
        paginator = Paginator(ITEMS, 5)
        assert not paginator.previous()
        assert paginator.current_page == 1

    def test_next_on_last_page_is_noop(self) -> None:
        paginator = Paginator(ITEMS, 5, initial_page=5)
        assert not paginator.next()
        assert paginator.current_page == 5

    @pytest.mark.parametrize("target", [0, -2, 6])
    def test_go_to_invalid_page_is_noop(self, target: int) -> None:
        paginator = Paginator(ITEMS, 5, initial_page=3)
        assert not paginator.go_to_page(target)
        assert paginator.current_page == 3

    def test_first_and_last(self) -> None:
        paginator = Paginator(ITEMS, 5, initial_page=3)
        assert paginator.last()
        assert paginator.page.items == (21, 22, 23)
        assert paginator.first()
        assert paginator.current_page == 1

    def test_invalid_page_size(self) -> None:
        with pytest.raises(PaginationError):
            Paginator(ITEMS, 0)
