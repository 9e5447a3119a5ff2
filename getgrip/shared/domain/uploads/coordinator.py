"""Concurrent upload coordinator for image/file form fields.

A batch of files is uploaded concurrently, one ``POST /upload/single`` per
file. Failures never abort sibling uploads; once every upload has settled the
successful URLs are merged into the field in one step.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from getgrip.shared.core import events
from getgrip.shared.core.event_bus import EventBus, EventPayload
from getgrip.shared.core.exceptions import GripError, error_message
from getgrip.shared.infrastructure.api import endpoints
from getgrip.shared.infrastructure.api.client import ApiClient

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024
BATCH_CRASH_MESSAGE = "Failed to upload files. Please try again."


class UploadMode(str, Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class UploadFile:
    """One user-selected file."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path | str) -> "UploadFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(path.name, path.read_bytes(), content_type or "application/octet-stream")


@dataclass(frozen=True)
class UploadResult:
    success: bool
    url: Optional[str] = None
    error: Optional[str] = None


@dataclass
class BatchOutcome:
    """What a batch did to its field.

    Attributes:
        urls: The field value after the merge (unchanged when nothing
            succeeded or the batch was cancelled)
        results: Per-file results in submission order
        error: Summary message when at least one file failed
        cancelled: The coordinator was closed while the batch ran
    """

    urls: List[str]
    results: List[UploadResult] = field(default_factory=list)
    error: Optional[str] = None
    cancelled: bool = False

    @property
    def uploaded(self) -> List[str]:
        return [r.url for r in self.results if r.success and r.url]

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)


def merge_urls(existing: Sequence[str], uploaded: Sequence[str], mode: UploadMode) -> List[str]:
    """Apply a batch's successful URLs to a field value.

    Multiple mode appends after the existing URLs. Single mode keeps only the
    first new URL and drops the previous value. No successes, no change.
    """
    if not uploaded:
        return list(existing)
    if mode is UploadMode.SINGLE:
        return [uploaded[0]]
    return [*existing, *uploaded]


class UploadCoordinator:
    """Runs upload batches against the API.

    Each batch runs in its own task group. ``close()`` cancels whatever is
    in flight; a closed coordinator reports its batches as cancelled and
    never hands back a new field value.
    """

    def __init__(
        self,
        api: ApiClient,
        max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
        event_bus: Optional[EventBus] = None,
        upload_path: str = endpoints.UPLOAD_SINGLE,
    ):
        self.api = api
        self.max_size_bytes = max_size_bytes
        self.event_bus = event_bus
        self.upload_path = upload_path
        self.error: Optional[str] = None
        self._closed = False
        self._active_batches = 0
        self._in_flight: set[asyncio.Task] = set()

    @property
    def max_size_mb(self) -> int:
        return self.max_size_bytes // (1024 * 1024)

    @property
    def is_uploading(self) -> bool:
        """True while any batch is still outstanding."""
        return self._active_batches > 0

    @property
    def closed(self) -> bool:
        return self._closed

    async def upload_file(self, file: UploadFile) -> UploadResult:
        """Upload one file; every failure becomes an unsuccessful result."""
        if file.size > self.max_size_bytes:
            return UploadResult(False, error=f"File size exceeds {self.max_size_mb}MB limit")

        try:
            envelope = await self.api.upload(
                self.upload_path, file.filename, file.content, file.content_type
            )
            data = envelope.unwrap("Upload failed") or {}
        except GripError as e:
            logger.warning(f"Upload of {file.filename} failed: {e}")
            return UploadResult(False, error=error_message(e, "Upload failed"))
        except Exception:
            logger.exception(f"Upload of {file.filename} crashed")
            return UploadResult(False, error="Upload failed")

        url = data.get("url") if isinstance(data, dict) else None
        if not url:
            return UploadResult(False, error="Upload response did not include a URL")
        return UploadResult(True, url=url)

    async def handle_files(
        self,
        files: Sequence[UploadFile],
        existing_urls: Sequence[str],
        mode: UploadMode = UploadMode.MULTIPLE,
        field_name: str = "images",
    ) -> BatchOutcome:
        """Upload a batch and compute the field's new value.

        In single mode only the first file is sent. Successful URLs keep the
        order the files were selected in.
        """
        existing = list(existing_urls)
        if not files or self._closed:
            return BatchOutcome(urls=existing, cancelled=self._closed)

        batch = list(files[:1]) if mode is UploadMode.SINGLE else list(files)
        if not self.is_uploading:
            self.error = None
        self._active_batches += 1
        await self._publish(
            events.TOPIC_UPLOAD_BATCH_START,
            events.create_upload_batch_start_event(field_name, len(batch)),
        )

        try:
            results = await self._run_batch(batch)
        except Exception:
            logger.exception(f"Upload batch for '{field_name}' crashed")
            self.error = BATCH_CRASH_MESSAGE
            return BatchOutcome(urls=existing, error=self.error)
        finally:
            self._active_batches -= 1

        if self._closed:
            logger.info(f"Upload batch for '{field_name}' cancelled")
            outcome = BatchOutcome(urls=existing, results=results, cancelled=True)
        else:
            outcome = BatchOutcome(results=results, urls=[])
            outcome.urls = merge_urls(existing, outcome.uploaded, mode)
            if outcome.failed:
                outcome.error = f"{outcome.failed} file(s) failed to upload."
                self.error = outcome.error
            logger.info(
                f"Upload batch for '{field_name}': {len(outcome.uploaded)} ok, {outcome.failed} failed"
            )

        await self._publish(
            events.TOPIC_UPLOAD_BATCH_END,
            events.create_upload_batch_end_event(
                field_name, outcome.uploaded, outcome.failed, outcome.cancelled
            ),
        )
        return outcome

    async def _run_batch(self, batch: List[UploadFile]) -> List[UploadResult]:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self.upload_file(f)) for f in batch]
            for task in tasks:
                self._in_flight.add(task)
                task.add_done_callback(self._in_flight.discard)

        return [
            UploadResult(False, error="Upload cancelled") if task.cancelled() else task.result()
            for task in tasks
        ]

    def close(self) -> None:
        """Cancel in-flight uploads; the owning view is going away."""
        self._closed = True
        for task in list(self._in_flight):
            task.cancel()

    async def _publish(self, topic: str, payload: EventPayload) -> None:
        if self.event_bus is not None:
            await self.event_bus.publish(topic, payload)


class UploadField:
    """The accepted URLs of one form field.

    Single-mode fields hold at most one URL. Uploads go through the
    coordinator and land here only after the whole batch settles.
    """

    def __init__(
        self,
        name: str,
        coordinator: UploadCoordinator,
        mode: UploadMode = UploadMode.MULTIPLE,
        urls: Optional[Sequence[str]] = None,
    ):
        self.name = name
        self.coordinator = coordinator
        self.mode = mode
        self._urls: List[str] = []
        self.replace(urls or [])

    @property
    def urls(self) -> List[str]:
        return list(self._urls)

    @property
    def first(self) -> str:
        """The single value a one-image field submits (``""`` if empty)."""
        return self._urls[0] if self._urls else ""

    @property
    def is_uploading(self) -> bool:
        return self.coordinator.is_uploading

    @property
    def error(self) -> Optional[str]:
        return self.coordinator.error

    @property
    def show_upload_zone(self) -> bool:
        """Single-mode fields hide the drop zone once they hold a file."""
        return self.mode is UploadMode.MULTIPLE or not self._urls

    def replace(self, urls: Sequence[str]) -> None:
        urls = [u for u in urls if u]
        self._urls = urls[:1] if self.mode is UploadMode.SINGLE else urls

    def remove(self, index: int) -> None:
        """Drop the URL at ``index``."""
        del self._urls[index]

    def clear(self) -> None:
        self._urls = []

    async def upload(self, files: Sequence[UploadFile]) -> BatchOutcome:
        outcome = await self.coordinator.handle_files(files, self._urls, self.mode, self.name)
        if not outcome.cancelled:
            self._urls = outcome.urls
        return outcome
