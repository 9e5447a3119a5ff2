"""Independent pagination controllers."""

from .store import PaginationState, PaginationStore, create_pagination_store, page_window

__all__ = ["PaginationState", "PaginationStore", "create_pagination_store", "page_window"]
