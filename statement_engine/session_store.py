# session_store.py
# ------------------------------------------------------------------
# Session-scoped key/value storage for lightweight page hand-off state.
#
# Values are JSON strings, exactly as they would sit in a browser's
# sessionStorage. The backing mapping is st.session_state in the app
# and a plain dict in tests. Binary payloads never go in here.
# ------------------------------------------------------------------

import json
import logging
from typing import Any, List, MutableMapping, Optional

from statement_engine.constants import (
    KEY_PROCESSING_COMPLETE,
    KEY_PROCESSING_RESULTS,
    KEY_UPLOADED_FILES_METADATA,
    SESSION_KEYS,
)
from statement_engine.exceptions import SessionStorageError
from statement_engine.models import FileMetadata, ProcessingResult

_logger = logging.getLogger(__name__)

# Prefix keeps our entries apart from widget keys in st.session_state.
_NAMESPACE = "session_storage:"


class SessionStore:
    def __init__(self, backing: MutableMapping[str, Any]) -> None:
        self._backing = backing

    # ── raw access ───────────────────────────────────────────────────

    def get_item(self, key: str) -> Optional[str]:
        return self._backing.get(_NAMESPACE + key)

    def set_item(self, key: str, value: Any) -> None:
        self._backing[_NAMESPACE + key] = json.dumps(value)

    def remove_item(self, key: str) -> None:
        full_key = _NAMESPACE + key
        if full_key in self._backing:
            del self._backing[full_key]

    def _load(self, key: str) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise SessionStorageError(key, str(exc)) from exc

    # ── typed helpers ────────────────────────────────────────────────

    def save_metadata(self, metadata: List[FileMetadata]) -> None:
        self.set_item(KEY_UPLOADED_FILES_METADATA, [m.to_dict() for m in metadata])

    def load_metadata(self) -> List[FileMetadata]:
        """
        Raises:
            SessionStorageError: if the stored value is not a JSON list of objects.
        """
        data = self._load(KEY_UPLOADED_FILES_METADATA)
        if data is None:
            return []
        if not isinstance(data, list):
            raise SessionStorageError(KEY_UPLOADED_FILES_METADATA, "expected a list")
        try:
            return [FileMetadata.from_dict(d) for d in data]
        except (AttributeError, TypeError, ValueError) as exc:
            raise SessionStorageError(KEY_UPLOADED_FILES_METADATA, str(exc)) from exc

    def save_results(self, results: List[ProcessingResult]) -> None:
        self.set_item(KEY_PROCESSING_RESULTS, [r.to_dict() for r in results])

    def load_results(self) -> Optional[List[ProcessingResult]]:
        """
        Returns:
            Stored results, or None when nothing has been stored yet.

        Raises:
            SessionStorageError: if the stored value cannot be decoded.
        """
        data = self._load(KEY_PROCESSING_RESULTS)
        if data is None:
            return None
        if not isinstance(data, list):
            raise SessionStorageError(KEY_PROCESSING_RESULTS, "expected a list")
        try:
            return [ProcessingResult.from_payload(d) for d in data]
        except (AttributeError, TypeError, ValueError) as exc:
            raise SessionStorageError(KEY_PROCESSING_RESULTS, str(exc)) from exc

    def mark_complete(self) -> None:
        self.set_item(KEY_PROCESSING_COMPLETE, True)

    def is_complete(self) -> bool:
        """True only when the flag is present and truthy; a corrupt flag counts as absent."""
        try:
            return bool(self._load(KEY_PROCESSING_COMPLETE))
        except SessionStorageError:
            _logger.warning("Ignoring unreadable %s flag", KEY_PROCESSING_COMPLETE)
            return False

    def clear(self) -> None:
        for key in SESSION_KEYS:
            self.remove_item(key)
