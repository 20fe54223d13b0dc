# app.py
"""
Financial Statement Analyzer - Main Application
===============================================

Three-stage flow over statement images:
- Upload Documents: one image per statement category
- Processing Documents: sequential submission to the extraction service
- View Results: merged metrics, charts and per-document details

Routing uses the ``page`` query parameter so each stage has a stable URL.
Unknown pages fall back to home; gated pages redirect to upload when the
previous stage has not left its state behind.
"""
import sys
import os
import logging

from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
sys.path.append(str(ROOT_DIR))

import streamlit as st

from statement_engine.constants import (
    ROUTE_HOME,
    ROUTE_PROCESSING,
    ROUTE_RESULTS,
    ROUTE_UPLOAD,
)
from statement_engine.state import AppController

from ui.components import navigate
from ui.home import render_home
from ui.upload import render_upload
from ui.processing import render_processing
from ui.results import render_results

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Streamlit setup
# ---------------------------------------------------------
st.set_page_config(page_title="Financial Statement Analyzer", layout="wide")

# ---------------------------------------------------------
# Controller (one per browser session)
# ---------------------------------------------------------
if "controller" not in st.session_state:
    st.session_state["controller"] = AppController(backing=st.session_state)
controller: AppController = st.session_state["controller"]

# ---------------------------------------------------------
# Router
# ---------------------------------------------------------
requested = st.query_params.get("page", ROUTE_HOME)
current_page = controller.route_for(requested)
if current_page != requested:
    _logger.debug("Route %r resolved to %r", requested, current_page)
    st.query_params["page"] = current_page

# =================================================================
# SIDEBAR
# =================================================================
st.sidebar.markdown(
    """
    <div style="text-align:center;font-weight:900;font-size:34px;line-height:1.05;margin:0.2rem 0 0.9rem 0;">
        Statement Analyzer
    </div>
    """,
    unsafe_allow_html=True,
)
st.sidebar.markdown("---")

_NAV = [
    ("Home", ROUTE_HOME),
    ("Upload Documents", ROUTE_UPLOAD),
    ("Processing", ROUTE_PROCESSING),
    ("View Results", ROUTE_RESULTS),
]
for label, route in _NAV:
    if st.sidebar.button(label, width="stretch",
                         type="primary" if current_page == route else "secondary"):
        navigate(route)

st.sidebar.markdown("---")
snapshot = controller.snapshot()
st.sidebar.caption(
    f"{snapshot['intake']} document(s) selected · "
    f"{'results ready' if snapshot['complete'] else 'no results yet'}"
)

# =================================================================
# PAGES
# =================================================================
if current_page == ROUTE_UPLOAD:
    render_upload(controller)
elif current_page == ROUTE_PROCESSING:
    render_processing(controller)
elif current_page == ROUTE_RESULTS:
    render_results(controller)
else:
    render_home()
