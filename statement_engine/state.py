# state.py
# ------------------------------------------------------------------
# Application state owned by a single controller.
#
# AppController holds everything that has to survive a page change:
#   - the CategoryIntake (upload stage)
#   - the FileContext, i.e. the binary payloads handed from upload to
#     processing; it lives only as long as the controller, never in
#     session storage
#   - the SessionStore with the JSON hand-off values
#
# Pages read from and act through the controller; they keep no state
# of their own. In the app one controller is kept per Streamlit
# session, so two browser tabs never share a FileContext.
# ------------------------------------------------------------------

import logging
from typing import Any, Dict, List, MutableMapping, Optional

from statement_engine.client import DocumentProcessingClient
from statement_engine.constants import (
    KEY_PROCESSING_COMPLETE,
    KEY_PROCESSING_RESULTS,
    ROUTE_PROCESSING,
    ROUTE_RESULTS,
    ROUTE_UPLOAD,
)
from statement_engine.coordinator import ProgressFn, SubmissionCoordinator, SubmissionOutcome
from statement_engine.intake import CategoryIntake
from statement_engine.models import CategoryFile, FileMetadata, ProcessingResult
from statement_engine.navigation import guard_route, resolve_route
from statement_engine.session_store import SessionStore

_logger = logging.getLogger(__name__)


class FileContext:
    """Binary file hand-off between the upload and processing stages."""

    def __init__(self) -> None:
        self._files: List[CategoryFile] = []

    def hand_over(self, files: List[CategoryFile]) -> None:
        self._files = list(files)

    def files(self) -> List[CategoryFile]:
        return list(self._files)

    def pending(self) -> List[CategoryFile]:
        return [f for f in self._files if not f.processed]

    def clear(self) -> None:
        self._files = []

    def __len__(self) -> int:
        return len(self._files)


class AppController:
    def __init__(
        self,
        backing: Optional[MutableMapping[str, Any]] = None,
        client: Optional[DocumentProcessingClient] = None,
        intake: Optional[CategoryIntake] = None,
    ) -> None:
        self.store = SessionStore(backing if backing is not None else {})
        self.client = client if client is not None else DocumentProcessingClient()
        self.intake = intake if intake is not None else CategoryIntake()
        self.file_context = FileContext()

    # ── navigation ───────────────────────────────────────────────────

    def route_for(self, requested: Optional[str]) -> str:
        """Resolve a requested page and apply the stage entry guards."""
        return guard_route(
            resolve_route(requested),
            has_files=len(self.file_context) > 0,
            processing_complete=self.store.is_complete(),
        )

    # ── upload -> processing ─────────────────────────────────────────

    def begin_processing(self) -> str:
        """
        Hand the collected files over to the processing stage.

        Returns:
            The route to navigate to next.
        """
        if not self.intake.can_proceed():
            return ROUTE_UPLOAD
        entries = self.intake.entries()
        self.file_context.hand_over(entries)
        pending = [e for e in entries if not e.processed]
        if pending:
            # A fresh run replaces whatever the previous run left behind;
            # metadata describes only the files this run will submit.
            self.store.save_metadata([e.metadata() for e in pending])
            self.store.remove_item(KEY_PROCESSING_RESULTS)
            self.store.remove_item(KEY_PROCESSING_COMPLETE)
        _logger.info("Handed %d files to processing", len(entries))
        return ROUTE_PROCESSING

    # ── processing -> results ────────────────────────────────────────

    def run_processing(self, on_progress: Optional[ProgressFn] = None) -> SubmissionOutcome:
        coordinator = SubmissionCoordinator(
            submit=self.client.process_document,
            store=self.store,
            on_progress=on_progress,
        )
        return coordinator.run(self.file_context.files())

    def process_documents(self, on_progress: Optional[ProgressFn] = None) -> str:
        """
        Submit the pending files and return the route to hand off to.

        The results route is returned whether or not any file failed.
        """
        outcome = self.run_processing(on_progress)
        _logger.info(
            "Processed %d documents (%d failed), opening results",
            outcome.submitted, outcome.error_count,
        )
        return ROUTE_RESULTS

    def processing_pending(self) -> bool:
        return len(self.file_context.pending()) > 0

    # ── results ──────────────────────────────────────────────────────

    def load_results(self) -> Optional[List[ProcessingResult]]:
        """
        Raises:
            SessionStorageError: if the stored results cannot be decoded.
        """
        return self.store.load_results()

    def load_metadata(self) -> List[FileMetadata]:
        return self.store.load_metadata()

    def start_over(self) -> str:
        """Clear session storage, the file context and the intake."""
        self.store.clear()
        self.file_context.clear()
        self.intake.clear()
        _logger.info("Session cleared, starting over")
        return ROUTE_UPLOAD

    def snapshot(self) -> Dict[str, Any]:
        """Small debug view of the controller state."""
        return {
            "intake": len(self.intake),
            "file_context": len(self.file_context),
            "pending": len(self.file_context.pending()),
            "complete": self.store.is_complete(),
        }
