# ui/upload.py
"""
Upload stage: one image slot per financial statement category.

Each slot wraps an ``st.file_uploader``. Whatever the widget holds is
offered to the controller's CategoryIntake, which validates it and keeps
at most one entry per category. Each widget upload is offered once,
keyed by its file id. Removing a file, or a rejected upload, bumps a
per-category nonce so the widget is recreated empty on the next run.
"""

import logging
from typing import Dict

import streamlit as st

from statement_engine.constants import ACCEPTED_EXTENSIONS, FINANCIAL_CATEGORIES
from statement_engine.exceptions import UnknownCategoryError
from statement_engine.intake import CategoryIntake
from statement_engine.state import AppController
from ui.components import BORDER, GREY, UP, navigate, page_header

_logger = logging.getLogger(__name__)

_NONCE_KEY = "uploader_nonce"
_OFFERED_KEY = "uploader_offered"


def _format_size(num_bytes: int) -> str:
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def offer_upload(intake: CategoryIntake, category: str, uploaded, offered: Dict[str, str]) -> bool:
    """
    Hand the widget's file to the intake once per widget file id.

    ``offered`` maps category -> the file id last handed over, so a rerun
    never offers the same upload twice while a different upload with an
    identical name and size is still taken.

    Returns:
        True when the file was rejected and the slot's widget should be
        recreated empty.
    """
    if offered.get(category) == uploaded.file_id:
        return False
    offered[category] = uploaded.file_id
    try:
        entry = intake.add_file(category, uploaded.name, uploaded.type, uploaded.getvalue())
    except UnknownCategoryError as e:
        _logger.warning("Upload for unknown category ignored: %s", e)
        return True
    if entry is None:
        offered.pop(category, None)
        return True
    _logger.info("Stored %s for %s", entry.file_name, category)
    return False


def _category_slot(controller: AppController, category: str, name: str, hint: str) -> None:
    nonces = st.session_state.setdefault(_NONCE_KEY, {})
    offered = st.session_state.setdefault(_OFFERED_KEY, {})
    nonce = nonces.get(category, 0)

    entry = controller.intake.get(category)
    status_color = UP if entry is not None else GREY
    st.markdown(
        f'<div style="border-top:1px solid {BORDER};padding-top:10px;font-size:16px;font-weight:700;">'
        f'{name} <span style="color:{status_color};font-size:12px;">'
        f'{"● uploaded" if entry is not None else "○ empty"}</span></div>',
        unsafe_allow_html=True,
    )
    st.caption(hint)

    uploaded = st.file_uploader(
        f"Upload {name}",
        type=ACCEPTED_EXTENSIONS,
        key=f"uploader_{category}_{nonce}",
        label_visibility="collapsed",
    )
    if uploaded is not None:
        if offer_upload(controller.intake, category, uploaded, offered):
            nonces[category] = nonce + 1
            st.rerun()
        entry = controller.intake.get(category)

    if entry is None:
        return

    preview = controller.intake.previews.resolve(entry.preview)
    if preview is not None:
        st.image(preview, caption=entry.file_name)
    st.caption(f"{entry.file_name} · {_format_size(entry.size)}")
    if st.button("Remove", key=f"remove_{category}"):
        controller.intake.remove_file(category)
        offered.pop(category, None)
        nonces[category] = nonce + 1
        st.rerun()


def render_upload(controller: AppController) -> None:
    page_header(
        "Upload Documents",
        "Add an image for each financial statement you want analyzed. "
        "At least one document is required to continue.",
    )

    cols = st.columns(2)
    for i, (category, name, hint) in enumerate(FINANCIAL_CATEGORIES):
        with cols[i % 2]:
            _category_slot(controller, category, name, hint)

    if controller.intake.last_error:
        st.error(controller.intake.last_error)

    st.markdown("---")
    count = len(controller.intake)
    total = len(FINANCIAL_CATEGORIES)
    if controller.intake.all_categories_filled():
        st.success(f"All {total} statements uploaded.")
    else:
        st.caption(f"{count} of {total} statements uploaded.")

    if st.button("Continue to Processing", type="primary",
                 disabled=not controller.intake.can_proceed(), key="upload_continue"):
        navigate(controller.begin_processing())
