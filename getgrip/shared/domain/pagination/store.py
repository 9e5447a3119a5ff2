"""
Pagination store for server-paginated views.

Each call to ``create_pagination_store`` returns a new, independent store so
nested views (the visitor list and one visitor's visit history) never share
page bookkeeping. The store is pure state: fetching the page's rows is the
caller's job, triggered from ``subscribe`` or after each call.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Optional


@dataclass(frozen=True)
class PaginationState:
    """Immutable snapshot handed to listeners."""

    page: int
    limit: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.limit)


PaginationListener = Callable[[PaginationState], None]


class PaginationStore:
    """Page/limit/total bookkeeping for one paginated view.

    ``total_pages`` is always derived from ``total_items`` and ``limit``.
    ``set_page`` does not bounds-check; callers guard against out-of-range
    pages (``next_page``/``prev_page`` guard themselves).
    """

    def __init__(self, default_limit: int = 10):
        _check_limit(default_limit)
        self._state = PaginationState(page=1, limit=default_limit, total_items=0)
        self._listeners: List[PaginationListener] = []

    # --- Read access ---

    @property
    def page(self) -> int:
        return self._state.page

    @property
    def limit(self) -> int:
        return self._state.limit

    @property
    def total_items(self) -> int:
        return self._state.total_items

    @property
    def total_pages(self) -> int:
        return self._state.total_pages

    def snapshot(self) -> PaginationState:
        return self._state

    # --- Mutations ---

    def set_page(self, page: int) -> None:
        self._commit(page=page)

    def set_limit(self, limit: int) -> None:
        """Change the page size and return to page 1."""
        _check_limit(limit)
        self._commit(page=1, limit=limit)

    def set_total_items(self, total_items: int) -> None:
        """Record the server's row count.

        A page left beyond the last page (the last row of the last page was
        deleted) is pulled back to the new last page; in-range pages stay.
        """
        _check_total(total_items)
        total_pages = math.ceil(total_items / self._state.limit)
        page = self._state.page
        if page > total_pages:
            page = max(1, total_pages)
        self._commit(page=page, total_items=total_items)

    def set_pagination(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        total_items: Optional[int] = None,
    ) -> None:
        """Merge any subset of page/limit/total in a single update."""
        if limit is not None:
            _check_limit(limit)
        if total_items is not None:
            _check_total(total_items)
        self._commit(page=page, limit=limit, total_items=total_items)

    def next_page(self) -> None:
        if self._state.page < self._state.total_pages:
            self._commit(page=self._state.page + 1)

    def prev_page(self) -> None:
        if self._state.page > 1:
            self._commit(page=self._state.page - 1)

    def reset(self) -> None:
        """Back to page 1 with no known rows; the page size is kept."""
        self._commit(page=1, total_items=0)

    # --- Observers ---

    def subscribe(self, listener: PaginationListener) -> Callable[[], None]:
        """Call ``listener`` with the new snapshot after every change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        total_items: Optional[int] = None,
    ) -> None:
        new_state = PaginationState(
            page=self._state.page if page is None else page,
            limit=self._state.limit if limit is None else limit,
            total_items=self._state.total_items if total_items is None else total_items,
        )
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)


def create_pagination_store(default_limit: int = 10) -> PaginationStore:
    """Return a new store; stores are never shared between calls."""
    return PaginationStore(default_limit)


def page_window(current: int, total: int) -> List[Optional[int]]:
    """Page numbers for a pagination bar, ``None`` marking an ellipsis.

    Up to 7 pages are listed in full; beyond that the first and last page
    and the neighbours of ``current`` are shown.

    >>> page_window(5, 10)
    [1, None, 4, 5, 6, None, 10]
    """
    if total <= 7:
        return list(range(1, total + 1))

    pages: List[Optional[int]] = [1]
    if current > 3:
        pages.append(None)
    pages.extend(range(max(2, current - 1), min(total - 1, current + 1) + 1))
    if current < total - 2:
        pages.append(None)
    pages.append(total)
    return pages


def _check_limit(limit: int) -> None:
    if limit < 1:
        raise ValueError(f"Page size must be at least 1, got {limit}")


def _check_total(total_items: int) -> None:
    if total_items < 0:
        raise ValueError(f"Total items cannot be negative, got {total_items}")
