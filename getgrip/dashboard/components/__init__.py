"""Reusable Streamlit widgets for the dashboard views."""

from .confirm_delete import confirm_delete
from .file_upload import file_upload
from .pagination_bar import pagination_bar

__all__ = [
    'confirm_delete',
    'file_upload',
    'pagination_bar',
]
