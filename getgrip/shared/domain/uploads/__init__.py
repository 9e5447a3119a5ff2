"""Concurrent image uploads and field merging."""

from .coordinator import (
    BatchOutcome,
    UploadCoordinator,
    UploadField,
    UploadFile,
    UploadMode,
    UploadResult,
    merge_urls,
)

__all__ = [
    "BatchOutcome",
    "UploadCoordinator",
    "UploadField",
    "UploadFile",
    "UploadMode",
    "UploadResult",
    "merge_urls",
]
