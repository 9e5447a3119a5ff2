"""
Unit tests for the pagination store factory.

These tests verify:
1. total_pages is always ceil(total_items / limit)
2. Stores from the factory are isolated
3. set_limit returns to page 1
4. next_page / prev_page stay within bounds
5. Out-of-range pages are clamped when the total shrinks
"""

import pytest

from getgrip.shared.domain.pagination.store import (
    PaginationState,
    create_pagination_store,
    page_window,
)


class TestCreate:
    def test_initial_state(self):
        store = create_pagination_store(10)
        assert (store.page, store.limit, store.total_items, store.total_pages) == (1, 10, 0, 0)

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValueError):
            create_pagination_store(0)

    def test_stores_are_isolated(self):
        outer = create_pagination_store(10)
        detail = create_pagination_store(10)

        outer.set_total_items(100)
        outer.set_page(4)

        assert detail.snapshot() == PaginationState(page=1, limit=10, total_items=0)
        assert outer.page == 4


class TestTotals:
    @pytest.mark.parametrize(
        "total_items, limit, expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (100, 20, 5), (7, 3, 3)],
    )
    def test_total_pages_is_ceiling(self, total_items, limit, expected):
        store = create_pagination_store(limit)
        store.set_total_items(total_items)
        assert store.total_pages == expected

    def test_negative_total_rejected(self):
        store = create_pagination_store(10)
        with pytest.raises(ValueError):
            store.set_total_items(-1)

    def test_in_range_page_is_kept(self):
        store = create_pagination_store(10)
        store.set_total_items(100)
        store.set_page(3)
        store.set_total_items(95)
        assert store.page == 3

    def test_page_beyond_new_last_page_is_clamped(self):
        store = create_pagination_store(10)
        store.set_total_items(50)
        store.set_page(5)

        store.set_total_items(41)
        assert store.page == 5

        store.set_total_items(40)
        assert store.page == 4

    def test_empty_total_clamps_to_first_page(self):
        store = create_pagination_store(10)
        store.set_total_items(30)
        store.set_page(3)
        store.set_total_items(0)
        assert store.page == 1
        assert store.total_pages == 0


class TestLimit:
    def test_set_limit_resets_page(self):
        store = create_pagination_store(10)
        store.set_pagination(page=5, limit=10, total_items=100)

        store.set_limit(20)

        assert store.page == 1
        assert store.limit == 20
        assert store.total_pages == 5

    def test_set_limit_rejects_zero(self):
        store = create_pagination_store(10)
        with pytest.raises(ValueError):
            store.set_limit(0)


class TestStepping:
    def test_next_page_advances(self):
        store = create_pagination_store(10)
        store.set_total_items(30)
        store.next_page()
        assert store.page == 2

    def test_next_page_noop_on_last_page(self):
        store = create_pagination_store(10)
        store.set_total_items(30)
        store.set_page(3)
        store.next_page()
        assert store.page == 3

    def test_next_page_noop_without_pages(self):
        store = create_pagination_store(10)
        store.next_page()
        assert store.page == 1

    def test_prev_page_noop_on_first_page(self):
        store = create_pagination_store(10)
        store.set_total_items(30)
        store.prev_page()
        assert store.page == 1

    def test_prev_page_steps_back(self):
        store = create_pagination_store(10)
        store.set_total_items(30)
        store.set_page(3)
        store.prev_page()
        assert store.page == 2

    def test_set_page_is_unchecked(self):
        store = create_pagination_store(10)
        store.set_page(9)
        assert store.page == 9


class TestResetAndObservers:
    def test_reset_keeps_limit(self):
        store = create_pagination_store(25)
        store.set_pagination(page=3, total_items=200)
        store.reset()
        assert store.snapshot() == PaginationState(page=1, limit=25, total_items=0)

    def test_set_pagination_notifies_once(self):
        store = create_pagination_store(10)
        seen = []
        store.subscribe(seen.append)

        store.set_pagination(page=2, limit=5, total_items=40)

        assert seen == [PaginationState(page=2, limit=5, total_items=40)]

    def test_unchanged_state_does_not_notify(self):
        store = create_pagination_store(10)
        seen = []
        store.subscribe(seen.append)
        store.set_page(1)
        store.reset()
        assert seen == []

    def test_unsubscribe(self):
        store = create_pagination_store(10)
        seen = []
        unsubscribe = store.subscribe(seen.append)
        store.set_total_items(10)
        unsubscribe()
        store.set_total_items(20)
        assert len(seen) == 1


class TestPageWindow:
    def test_short_ranges_are_listed_in_full(self):
        assert page_window(1, 0) == []
        assert page_window(3, 7) == [1, 2, 3, 4, 5, 6, 7]

    def test_middle_page_has_two_gaps(self):
        assert page_window(5, 10) == [1, None, 4, 5, 6, None, 10]

    def test_near_start(self):
        assert page_window(2, 10) == [1, 2, 3, None, 10]

    def test_near_end(self):
        assert page_window(10, 10) == [1, None, 9, 10]
