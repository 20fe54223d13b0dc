# ui/processing.py
"""
Processing stage: submits each handed-over file in turn, with a progress
bar and a per-category checklist. Once every file has resolved the page
hands off to the results, failures included; each failure is listed
there with its error text.
"""

from typing import List, Optional

import streamlit as st

from statement_engine.constants import ROUTE_RESULTS, category_name
from statement_engine.models import CategoryFile
from statement_engine.state import AppController
from ui.components import DOWN, GREY, UP, navigate, page_header


def _checklist_html(files: List[CategoryFile], current: Optional[CategoryFile] = None) -> str:
    rows = []
    for f in files:
        if f.progress >= 100 and f.error:
            mark, color, note = "✕", DOWN, f.error
        elif f.progress >= 100:
            mark, color, note = "✓", UP, "done"
        elif current is not None and f.id == current.id:
            mark, color, note = "…", GREY, "processing"
        else:
            mark, color, note = "○", GREY, "waiting"
        rows.append(
            f'<div style="padding:4px 0;"><span style="color:{color};font-weight:700;">{mark}</span> '
            f'{category_name(f.category)} <span style="color:{GREY};font-size:12px;">'
            f'{f.file_name} · {note}</span></div>'
        )
    return "".join(rows)


def render_processing(controller: AppController) -> None:
    page_header("Processing Documents", "Your statements are sent one at a time for extraction.")

    files = controller.file_context.files()

    if not controller.processing_pending():
        # Nothing left to submit: hand off directly.
        navigate(ROUTE_RESULTS)

    ok, message = controller.client.check_connection()
    if not ok:
        st.warning(message)

    bar = st.progress(0.0, text="Starting...")
    checklist = st.empty()
    checklist.markdown(_checklist_html(files), unsafe_allow_html=True)

    def on_progress(value: float, entry: Optional[CategoryFile]) -> None:
        label = f"{value:.0f}%"
        if entry is not None:
            label = f"{value:.0f}% · finished {entry.file_name}"
        bar.progress(min(value, 100.0) / 100.0, text=label)
        checklist.markdown(_checklist_html(files, entry), unsafe_allow_html=True)

    navigate(controller.process_documents(on_progress))
