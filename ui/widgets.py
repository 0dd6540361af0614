from __future__ import annotations

import html
import re

import streamlit as st

from qbank.latex.normalize import normalize_delimiters
from qbank.models import FixPreview, QuestionStatus
from ui.strings import S

_STATUS_COLORS = {
    QuestionStatus.PENDING: "#b7791f",
    QuestionStatus.VERIFIED: "#2f855a",
    QuestionStatus.DISCARDED: "#9b2c2c",
}


def _render_app_title() -> None:
    title = str(S.get("title") or "").strip()
    if not title:
        return
    st.markdown(f"<h1 class='qb-title'>{html.escape(title)}</h1>", unsafe_allow_html=True)


def _normalize_math_markdown(text: str) -> str:
    """
    Make math rendering more stable in Streamlit markdown.

    - Inline math: $...$, display math: $$...$$
    - Unwrap math that was put in code spans (backticks break KaTeX).
    """
    if not text:
        return text
    s = normalize_delimiters(text)
    s = re.sub(r"`(\$\$[\s\S]+?\$\$)`", r"\1", s)
    s = re.sub(r"`(\$[^`]+?\$)`", r"\1", s)
    return s


def _render_status_badge(status: QuestionStatus) -> None:
    color = _STATUS_COLORS.get(status, "#4a5568")
    st.markdown(
        f"<span style='background:{color};color:#fff;border-radius:6px;padding:2px 8px;"
        f"font-size:0.8rem'>{html.escape(status.value)}</span>",
        unsafe_allow_html=True,
    )


def _render_fix_preview(preview: FixPreview) -> None:
    if not preview.changed:
        st.caption(S["no_change"])
        return
    cols = st.columns(2)
    with cols[0]:
        st.caption(S["before"])
        st.code(preview.before, language="latex")
    with cols[1]:
        st.caption(S["after"])
        st.code(preview.after, language="latex")
    st.markdown(_normalize_math_markdown(preview.after))

    v = preview.validation
    stats = preview.stats
    summary = (
        f"inline {stats.inline_math_count} | display {stats.display_math_count} | "
        f"commands {stats.command_count}"
    )
    if v.is_valid:
        st.success(f"{S['valid']} ({summary})")
    else:
        st.warning(f"{S['invalid']}: {'; '.join(v.errors)} ({summary})")
    for w in v.warnings:
        st.caption(w)
