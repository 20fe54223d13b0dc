# coordinator.py
# ------------------------------------------------------------------
# Sequential submission of collected statement images.
#
# Each file that is not yet marked processed is submitted on its own,
# and the loop waits for the answer before submitting the next one.
# There is no worker pool, no retry and no cancellation: a failed file
# becomes a failed ProcessingResult and the loop moves on.
#
# Progress:
#   starts at PROGRESS_START (10) when the loop begins, then after each
#   file resolves becomes 10 + 90 * processed / total, reaching exactly
#   100 once every file has resolved, success or failure.
#
# When the loop finishes, the submitted files' metadata, their results
# and the processingComplete flag are written to session storage for
# the results page. Metadata and results pair up by position.
# ------------------------------------------------------------------

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from statement_engine.constants import PROGRESS_DONE, PROGRESS_SPAN, PROGRESS_START
from statement_engine.exceptions import DocumentProcessingError
from statement_engine.models import CategoryFile, ProcessingResult
from statement_engine.session_store import SessionStore

_logger = logging.getLogger(__name__)

SubmitFn = Callable[[CategoryFile], ProcessingResult]
ProgressFn = Callable[[float, Optional[CategoryFile]], None]


def progress_after(processed: int, total: int) -> float:
    """Overall progress once ``processed`` of ``total`` files have resolved."""
    if total <= 0:
        return PROGRESS_DONE
    return PROGRESS_START + PROGRESS_SPAN * (processed / total)


@dataclass
class SubmissionOutcome:
    results: List[ProcessingResult] = field(default_factory=list)
    progress: float = PROGRESS_DONE
    submitted: int = 0

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if not r.success)


class SubmissionCoordinator:
    """Runs the one-at-a-time submission loop over collected files."""

    def __init__(
        self,
        submit: SubmitFn,
        store: SessionStore,
        on_progress: Optional[ProgressFn] = None,
    ) -> None:
        self._submit = submit
        self._store = store
        self._on_progress = on_progress
        self.progress: float = 0.0

    def _set_progress(self, value: float, entry: Optional[CategoryFile] = None) -> None:
        self.progress = value
        if self._on_progress is not None:
            self._on_progress(value, entry)

    def _submit_one(self, entry: CategoryFile) -> ProcessingResult:
        # Marked before the call so a rerun never submits the same file twice.
        entry.processed = True
        try:
            result = self._submit(entry)
        except DocumentProcessingError as exc:
            _logger.warning("Processing failed for %s: %s", entry.file_name, exc.message)
            result = ProcessingResult.failure(exc.message)
        except Exception as exc:
            _logger.exception("Unexpected error processing %s", entry.file_name)
            result = ProcessingResult.failure(str(exc) or "Unknown error")
        entry.progress = PROGRESS_DONE
        entry.error = None if result.success else result.error
        return result

    def run(self, files: Iterable[CategoryFile]) -> SubmissionOutcome:
        """
        Submit every unprocessed file in order.

        Returns:
            SubmissionOutcome with one result per submitted file, in
            submission order.
        """
        files = list(files)
        pending = [f for f in files if not f.processed]
        if not pending:
            _logger.info("No new files to process, all %d files were already processed", len(files))
            self._set_progress(PROGRESS_DONE)
            return SubmissionOutcome(results=[], progress=PROGRESS_DONE, submitted=0)

        _logger.info(
            "Processing %d files: %s",
            len(pending), ", ".join(f"{f.category}-{f.file_name}" for f in pending),
        )
        self._set_progress(PROGRESS_START)

        results: List[ProcessingResult] = []
        for i, entry in enumerate(pending, start=1):
            results.append(self._submit_one(entry))
            self._set_progress(progress_after(i, len(pending)), entry)

        # Metadata is rewritten alongside the results so both lists describe
        # the same files in the same order.
        self._store.save_metadata([f.metadata() for f in pending])
        self._store.save_results(results)
        self._store.mark_complete()

        outcome = SubmissionOutcome(results=results, progress=self.progress, submitted=len(pending))
        _logger.info(
            "Processing complete: %d succeeded, %d failed",
            outcome.success_count, outcome.error_count,
        )
        return outcome
