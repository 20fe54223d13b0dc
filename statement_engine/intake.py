# intake.py
# ------------------------------------------------------------------
# Category intake: collects at most one statement image per category.
#
# Rules:
#   - Only content types starting with "image/" are accepted. A rejected
#     file records a user-visible error and leaves the slots untouched.
#   - Each category has exactly one slot. Dropping a new image onto an
#     occupied slot supersedes the old entry; its preview handle is
#     released at that moment.
#   - Removing a file is an explicit action and also releases its
#     preview handle.
#
# Preview handles are opaque string tokens resolving to the image bytes
# so that the UI can render thumbnails without holding on to the
# CategoryFile itself.
# ------------------------------------------------------------------

import logging
import time
import uuid
from typing import Callable, Dict, List, Optional

from statement_engine.constants import (
    ACCEPTED_MIME_PREFIX,
    CATEGORY_IDS,
)
from statement_engine.exceptions import UnknownCategoryError
from statement_engine.models import CategoryFile, FileMetadata

_logger = logging.getLogger(__name__)

NON_IMAGE_ERROR = "Only image files are accepted. Please upload an image file."


class PreviewRegistry:
    """Issues and releases preview handles for in-memory image payloads."""

    def __init__(self) -> None:
        self._handles: Dict[str, bytes] = {}

    def issue(self, data: bytes) -> str:
        handle = f"preview:{uuid.uuid4().hex}"
        self._handles[handle] = data
        return handle

    def resolve(self, handle: str) -> Optional[bytes]:
        return self._handles.get(handle)

    def release(self, handle: str) -> bool:
        """Drop a handle. Returns False if it was unknown or already released."""
        return self._handles.pop(handle, None) is not None

    def active_count(self) -> int:
        return len(self._handles)


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class CategoryIntake:
    """Holds the collected CategoryFile entries, one slot per category."""

    def __init__(
        self,
        previews: Optional[PreviewRegistry] = None,
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        self._previews = previews if previews is not None else PreviewRegistry()
        self._clock = clock
        self._slots: Dict[str, CategoryFile] = {}
        self.last_error: Optional[str] = None

    @property
    def previews(self) -> PreviewRegistry:
        return self._previews

    def add_file(
        self,
        category: str,
        file_name: str,
        content_type: Optional[str],
        data: bytes,
    ) -> Optional[CategoryFile]:
        """
        Offer a dropped or selected file for a category.

        Returns:
            The stored CategoryFile, or None if the file was rejected
            (``last_error`` then holds the message to show).

        Raises:
            UnknownCategoryError: if ``category`` is not one of the fixed set.
        """
        if category not in CATEGORY_IDS:
            raise UnknownCategoryError(category)

        if not (content_type or "").startswith(ACCEPTED_MIME_PREFIX):
            _logger.info("Rejected %s for %s: content type %r", file_name, category, content_type)
            self.last_error = NON_IMAGE_ERROR
            return None

        previous = self._slots.get(category)
        if previous is not None:
            self._previews.release(previous.preview)
            _logger.debug("Superseding %s in %s", previous.file_name, category)

        entry = CategoryFile(
            id=f"{category}-{self._clock()}",
            category=category,
            file_name=file_name,
            content_type=content_type or "",
            data=data,
            preview=self._previews.issue(data),
        )
        self._slots[category] = entry
        self.last_error = None
        return entry

    def remove_file(self, category: str) -> bool:
        entry = self._slots.pop(category, None)
        if entry is None:
            return False
        self._previews.release(entry.preview)
        return True

    def get(self, category: str) -> Optional[CategoryFile]:
        return self._slots.get(category)

    def entries(self) -> List[CategoryFile]:
        """Current entries in category order."""
        return [self._slots[c] for c in CATEGORY_IDS if c in self._slots]

    def can_proceed(self) -> bool:
        return len(self._slots) > 0

    def all_categories_filled(self) -> bool:
        return all(c in self._slots for c in CATEGORY_IDS)

    def metadata(self) -> List[FileMetadata]:
        return [e.metadata() for e in self.entries()]

    def clear(self) -> None:
        for entry in self._slots.values():
            self._previews.release(entry.preview)
        self._slots.clear()
        self.last_error = None

    def __len__(self) -> int:
        return len(self._slots)
