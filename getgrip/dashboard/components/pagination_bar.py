"""Numbered pagination bar bound to a PaginationStore."""

from typing import Optional

import streamlit as st

from getgrip.shared.domain.pagination.store import PaginationStore, page_window


def pagination_bar(store: PaginationStore, key: str) -> Optional[int]:
    """Render Prev / page numbers / Next and return the page that was clicked.

    The store is not modified here; the caller decides whether the requested
    page is applied (and what else changes with it).
    """
    if store.total_pages <= 1:
        return None

    window = page_window(store.page, store.total_pages)
    cols = st.columns(len(window) + 2)
    requested = None

    with cols[0]:
        if st.button("‹ Prev", key=f"{key}_prev", disabled=store.page <= 1):
            requested = store.page - 1

    for offset, number in enumerate(window, start=1):
        with cols[offset]:
            if number is None:
                st.markdown("…")
            elif st.button(
                str(number),
                key=f"{key}_page_{number}",
                type="primary" if number == store.page else "secondary",
            ):
                requested = number

    with cols[-1]:
        if st.button("Next ›", key=f"{key}_next", disabled=store.page >= store.total_pages):
            requested = store.page + 1

    return requested
