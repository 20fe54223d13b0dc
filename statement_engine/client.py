# client.py
# ------------------------------------------------------------------
# HTTP client for the external document-processing endpoint.
#
# The endpoint runs OCR and AI metric extraction on one statement image
# per request:
#   POST {base}/api/process-document
#     multipart: document=<binary>, category=<category id>
#   -> JSON {success, ocr_text, parsing_results, financial_analysis,
#            financial_data?, files, error?}
#
# Notes:
#   - Every request has an explicit timeout (10 s connect, read timeout
#     from DOCUMENT_API_TIMEOUT, default 300 s). Extraction of a single
#     page can take minutes on the backend.
#   - There is deliberately no retry. A failed document is reported
#     back to the user and the next document is still submitted.
#   - Failures are raised as DocumentProcessingError carrying a message
#     fit for display: the endpoint's own "error" field when present,
#     otherwise the response text or the transport exception.
# ------------------------------------------------------------------

import logging
import os
from typing import Optional, Tuple

import requests

from statement_engine.exceptions import DocumentProcessingError
from statement_engine.models import CategoryFile, ProcessingResult

_logger = logging.getLogger(__name__)

# Set DOCUMENT_API_BASE_URL to point the app at a deployed backend, e.g.:
#   export DOCUMENT_API_BASE_URL="http://192.168.1.119:5001"
_DEFAULT_BASE_URL = "http://localhost:5001"
API_BASE_URL = os.environ.get("DOCUMENT_API_BASE_URL", _DEFAULT_BASE_URL).rstrip("/")

# Request timeouts: (connect_timeout_s, read_timeout_s)
_TIMEOUT: Tuple[float, float] = (10, float(os.environ.get("DOCUMENT_API_TIMEOUT", "300")))

PROCESS_PATH = "/api/process-document"

# Longest slice of a non-JSON error body shown to the user.
_MAX_ERROR_TEXT = 200


def _error_message_from_response(resp: requests.Response, file_name: str) -> str:
    """Derive a human-readable message from a non-success response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    text = (resp.text or "").strip()
    if text:
        return text[:_MAX_ERROR_TEXT]
    return f"HTTP {resp.status_code} processing {file_name}"


class DocumentProcessingClient:
    """Sends statement images to the processing endpoint, one call per file."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Tuple[float, float] = _TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._http = session if session is not None else requests

    @property
    def process_url(self) -> str:
        return f"{self.base_url}{PROCESS_PATH}"

    def process_document(self, entry: CategoryFile) -> ProcessingResult:
        """
        Submit one CategoryFile and wait for the endpoint's answer.

        Returns:
            ProcessingResult parsed from the JSON body.

        Raises:
            DocumentProcessingError: on transport failure, non-2xx status,
                or a body that is not a JSON object.
        """
        files = {"document": (entry.file_name, entry.data, entry.content_type or "application/octet-stream")}
        data = {"category": entry.category} if entry.category else {}

        _logger.info("Sending %s (%s, %d bytes) to %s", entry.file_name, entry.category, entry.size, self.process_url)
        try:
            resp = self._http.post(self.process_url, files=files, data=data, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise DocumentProcessingError(
                entry.file_name, None, f"Network error processing {entry.file_name}: {exc}"
            ) from exc
        except requests.RequestException as exc:
            raise DocumentProcessingError(
                entry.file_name, None, f"Request failed for {entry.file_name}: {exc}"
            ) from exc

        if not resp.ok:
            message = _error_message_from_response(resp, entry.file_name)
            _logger.warning("Endpoint returned %s for %s: %s", resp.status_code, entry.file_name, message)
            raise DocumentProcessingError(entry.file_name, resp.status_code, message)

        try:
            payload = resp.json()
        except ValueError as exc:
            raise DocumentProcessingError(
                entry.file_name, resp.status_code, f"Invalid response for {entry.file_name}: body is not JSON"
            ) from exc
        if not isinstance(payload, dict):
            raise DocumentProcessingError(
                entry.file_name, resp.status_code, f"Invalid response for {entry.file_name}: expected a JSON object"
            )

        _logger.debug("Response for %s: success=%s", entry.file_name, payload.get("success"))
        return ProcessingResult.from_payload(payload)

    def check_connection(self) -> Tuple[bool, str]:
        """Probe the endpoint root. Used only for the status line on the processing page."""
        try:
            resp = self._http.get(f"{self.base_url}/", timeout=(self.timeout[0], 15))
        except requests.RequestException as exc:
            _logger.warning("API connection test failed: %s", exc)
            return False, str(exc)
        if resp.ok:
            return True, "Connected"
        return False, f"HTTP {resp.status_code}"
