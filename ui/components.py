# ui/components.py
# ------------------------------------------------------------------
# Small shared Streamlit pieces: page headers, HTML metric cards and
# query-param navigation. Page modules import from here so the three
# stages look the same.
# ------------------------------------------------------------------

from typing import Optional

import streamlit as st

UP      = "#00C805"
DOWN    = "#FF3B30"
BLUE    = "#0A7CFF"
ORANGE  = "#FF9F0A"
TEAL    = "#30B0C7"
GREY    = "#6E6E73"
BORDER  = "#E5E5EA"
CARD_BG = "transparent"


def navigate(route: str) -> None:
    """Switch page by rewriting the ``page`` query parameter and rerunning."""
    st.query_params["page"] = route
    st.rerun()


def page_header(title: str, subtitle: str = "") -> None:
    st.markdown(
        f'<h1 style="font-size:32px;font-weight:800;color:#ffffff;margin-bottom:2px;">{title}</h1>',
        unsafe_allow_html=True,
    )
    if subtitle:
        st.markdown(
            f'<div style="font-size:14px;color:{GREY};margin-bottom:18px;">{subtitle}</div>',
            unsafe_allow_html=True,
        )


def metric_card(label: str, value_str: str, color: str = "#ffffff",
                footnote: Optional[str] = None) -> str:
    foot = (
        f'<div style="font-size:11px;color:#ffffff;margin-top:6px;line-height:1.4;opacity:0.7;">{footnote}</div>'
        if footnote else ""
    )
    return f"""
<div style="background:{CARD_BG};border-radius:12px;padding:16px 18px;
     border:1px solid {BORDER};height:100%;margin-bottom:12px;">
  <div style="font-size:11px;font-weight:600;letter-spacing:0.05em;color:#ffffff;
              text-transform:uppercase;margin-bottom:6px;">{label}</div>
  <div style="font-size:26px;font-weight:700;line-height:1.1;color:{color};">{value_str}</div>
  {foot}
</div>"""


def section_title(text: str) -> None:
    st.markdown(
        f'<div style="font-size:18px;font-weight:700;color:#ffffff;margin:18px 0 8px 0;">{text}</div>',
        unsafe_allow_html=True,
    )
