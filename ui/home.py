# ui/home.py
"""
Landing page: what the analyzer does and a preview of the metrics chart.
"""

import streamlit as st

from statement_engine.constants import FINANCIAL_CATEGORIES, ROUTE_UPLOAD
from statement_engine.models import FinancialMetric
from statement_engine.sample_data import SAMPLE_METRICS
from ui.charts import chart_financial_metrics
from ui.components import navigate, page_header, section_title


def render_home() -> None:
    page_header(
        "Financial Statement Analyzer",
        "Upload images of your financial statements, extract the key figures "
        "and explore them on a results dashboard.",
    )

    cols = st.columns(len(FINANCIAL_CATEGORIES))
    for col, (_, name, hint) in zip(cols, FINANCIAL_CATEGORIES):
        with col:
            st.markdown(f"**{name}**")
            st.caption(hint)

    if st.button("Get Started", type="primary", key="home_get_started"):
        navigate(ROUTE_UPLOAD)

    section_title("Dashboard preview")
    st.caption("Sample data. Your own figures replace it once documents are processed.")
    preview = {k: FinancialMetric.from_raw(v) for k, v in SAMPLE_METRICS.items()}
    fig = chart_financial_metrics(preview, seed=0)
    if fig is not None:
        st.plotly_chart(fig, width="stretch")
