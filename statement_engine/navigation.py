# navigation.py
# ------------------------------------------------------------------
# Route resolution and entry guards for the three-stage flow
#   upload-documents -> processing-documents -> view-results
#
# Each stage only checks the single condition left behind by the
# previous stage; when it is missing the user is sent back to upload.
# There is no other forward-skip validation.
# ------------------------------------------------------------------

import logging
from typing import Optional

from statement_engine.constants import (
    ROUTE_HOME,
    ROUTE_PROCESSING,
    ROUTE_RESULTS,
    ROUTE_UPLOAD,
    ROUTES,
)

_logger = logging.getLogger(__name__)


def resolve_route(raw: Optional[str]) -> str:
    """Map a requested path or page name onto a known route; unknown -> home."""
    if not raw:
        return ROUTE_HOME
    name = str(raw).strip().strip("/").lower()
    if name in ROUTES:
        return name
    _logger.debug("Unknown route %r, falling back to home", raw)
    return ROUTE_HOME


def guard_route(route: str, has_files: bool, processing_complete: bool) -> str:
    """
    Return the route that should actually be shown for ``route``.

    - processing-documents needs files handed over from the upload stage.
    - view-results needs the processingComplete flag.
    """
    if route == ROUTE_PROCESSING and not has_files:
        _logger.info("No files found for processing, redirecting to %s", ROUTE_UPLOAD)
        return ROUTE_UPLOAD
    if route == ROUTE_RESULTS and not processing_complete:
        _logger.info("Processing not complete, redirecting to %s", ROUTE_UPLOAD)
        return ROUTE_UPLOAD
    return route
