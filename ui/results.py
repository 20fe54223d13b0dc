# ui/results.py
"""
Results dashboard
=================
Reads the processing results left in session storage, merges their
metrics (first value wins) and renders:

- upload status summary cards
- chart tabs (the metrics line chart uses extracted data; the cash-flow
  tabs are illustrative sample data and are captioned as such)
- key financial metrics grid and a CSV export
- per-document details with an OCR text preview
"""

import logging
from typing import List

import streamlit as st

from statement_engine.aggregation import (
    aggregate_metrics,
    metric_display_rows,
    metrics_frame,
    upload_stats,
)
from statement_engine.constants import OCR_PREVIEW_CHARS, ROUTE_UPLOAD
from statement_engine.exceptions import SessionStorageError
from statement_engine.formatting import format_currency, humanize_key, truncate
from statement_engine.models import FileMetadata, ProcessingResult
from statement_engine.state import AppController
from ui.charts import (
    chart_cash_components,
    chart_cash_flow_trend,
    chart_cash_flows,
    chart_financial_metrics,
)
from ui.components import BLUE, DOWN, UP, metric_card, navigate, page_header, section_title

_logger = logging.getLogger(__name__)

_SAMPLE_CAPTION = (
    "Illustrative sample data. Period-by-period cash-flow figures are not "
    "extracted from uploaded documents yet."
)
_CARDS_PER_ROW = 3


def _render_summary(metadata: List[FileMetadata], results: List[ProcessingResult]) -> None:
    stats = upload_stats(metadata, results)
    section_title("Upload Status Summary")
    c1, c2, c3 = st.columns(3)
    c1.markdown(metric_card("Documents Processed", str(stats.count), BLUE), unsafe_allow_html=True)
    c2.markdown(metric_card("Successful", str(stats.success_count), UP), unsafe_allow_html=True)
    c3.markdown(
        metric_card("Errors", str(stats.error_count), DOWN if stats.error_count else "#ffffff"),
        unsafe_allow_html=True,
    )
    if stats.categories:
        st.caption("Categories: " + ", ".join(stats.categories))
    st.markdown(f"Successfully analyzed {stats.success_count} of {stats.count} documents.")


def _render_charts(metrics) -> None:
    tabs = st.tabs(["Financial Metrics", "Cash Flow Trend", "Cash Flow Components", "Income Breakdown"])
    with tabs[0]:
        fig = chart_financial_metrics(metrics)
        if fig is None:
            st.info("No financial metrics data available")
        else:
            st.caption("Prior quarters are simulated from the current value for illustration.")
            st.plotly_chart(fig, width="stretch")
    with tabs[1]:
        st.caption(_SAMPLE_CAPTION)
        st.plotly_chart(chart_cash_flow_trend(), width="stretch")
    with tabs[2]:
        st.caption(_SAMPLE_CAPTION)
        st.plotly_chart(chart_cash_flows(), width="stretch")
    with tabs[3]:
        st.caption(_SAMPLE_CAPTION)
        st.plotly_chart(chart_cash_components(), width="stretch")


def _render_key_metrics(metrics) -> None:
    rows = metric_display_rows(metrics)
    if not rows:
        return
    section_title("Key Financial Metrics")
    for start in range(0, len(rows), _CARDS_PER_ROW):
        cols = st.columns(_CARDS_PER_ROW)
        for col, row in zip(cols, rows[start:start + _CARDS_PER_ROW]):
            col.markdown(
                metric_card(row.label, row.display_value, footnote=row.period),
                unsafe_allow_html=True,
            )

    df = metrics_frame(metrics)
    with st.expander("All metrics as a table"):
        st.dataframe(df[["Metric", "Formatted", "From", "To"]], hide_index=True, width="stretch")
    st.download_button(
        "Download metrics (CSV)",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name="financial_metrics.csv",
        mime="text/csv",
        key="results_download_csv",
    )


def _document_title(i: int, metadata: List[FileMetadata]) -> str:
    if i < len(metadata):
        return metadata[i].original_file_name
    return f"Document {i + 1}"


def _render_documents(metadata: List[FileMetadata], results: List[ProcessingResult]) -> None:
    section_title("Document Processing Details")
    for i, result in enumerate(results):
        status = "✓" if result.success else "✕"
        with st.expander(f"{status} {_document_title(i, metadata)}"):
            if not result.success:
                st.error(result.error or "Processing failed")
                continue
            if result.ocr_text:
                st.markdown("**Extracted text (preview)**")
                st.code(truncate(result.ocr_text, OCR_PREVIEW_CHARS), language=None)
            if result.financial_data:
                st.markdown("**Extracted metrics**")
                for key, metric in result.financial_data.items():
                    period = f" ({metric.period})" if metric.period else ""
                    st.markdown(f"- {humanize_key(key)}: {format_currency(metric.value)}{period}")
            else:
                st.caption("No financial metrics extracted from this document.")


def render_results(controller: AppController) -> None:
    page_header("Analysis Results")

    try:
        results = controller.load_results()
        metadata = controller.load_metadata()
    except SessionStorageError as e:
        _logger.warning("Could not load results: %s", e)
        st.error("Error loading results. Please try processing your documents again.")
        if st.button("Upload New Documents", key="results_start_over_error"):
            navigate(controller.start_over())
        return

    if results is None:
        st.info("No results found. Please upload and process documents first.")
        if st.button("Upload Documents", key="results_go_upload"):
            navigate(ROUTE_UPLOAD)
        return

    metrics = aggregate_metrics(results)

    _render_summary(metadata, results)
    if st.button("Upload New Documents", type="primary", key="results_start_over"):
        navigate(controller.start_over())

    _render_charts(metrics)
    _render_key_metrics(metrics)
    _render_documents(metadata, results)
