# screens/analytics/widgets.py
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import pandas as pd
import streamlit as st

from screens.analytics import formatters as fmt
from screens.marks.marks_service import DropdownData, current_academic_year

DEFAULT_TERMS = [{"value": "1", "label": "Term 1"}, {"value": "2", "label": "Term 2"}, {"value": "3", "label": "Term 3"}]
DEFAULT_EXAM_TYPES = [{"value": "exam_1", "label": "Exam 1"}, {"value": "exam_2", "label": "Exam 2"},
                      {"value": "exam_3", "label": "Exam 3"}]


def exam_filter_bar(prefix: str, dropdowns: Optional[DropdownData] = None) -> Tuple[str, str, str]:
    """Term / academic year / exam type selectors. Returns (term, academic_year, exam_type)."""
    terms = {t["value"]: t["label"] for t in ((dropdowns and dropdowns.terms) or DEFAULT_TERMS)}
    exams = {e["value"]: e["label"] for e in ((dropdowns and dropdowns.exam_types) or DEFAULT_EXAM_TYPES)}
    c1, c2, c3 = st.columns(3)
    term = c1.selectbox("Term", list(terms), format_func=terms.get, key=f"{prefix}__term")
    year = c2.text_input("Academic year", value=current_academic_year(), key=f"{prefix}__year")
    exam_type = c3.selectbox("Exam type", list(exams), format_func=exams.get, key=f"{prefix}__exam")
    return term, year.strip(), exam_type


def bar(df: pd.DataFrame, x: str, y: Sequence[str] | str, title: Optional[str] = None, **kwargs) -> None:
    if title:
        st.markdown(f"**{title}**")
    if df.empty:
        st.caption("No data available.")
        return
    st.bar_chart(df.set_index(x)[y], **kwargs)


def line(df: pd.DataFrame, x: str, y: Sequence[str] | str, title: Optional[str] = None) -> None:
    if title:
        st.markdown(f"**{title}**")
    if df.empty:
        st.caption("No data available.")
        return
    st.line_chart(df.set_index(x)[y])


def level_badge(score) -> None:
    level = fmt.performance_level(score)
    render = {"Excellent": st.success, "Good": st.info, "Average": st.warning}.get(level, st.error)
    render(f"Performance level: **{level}** ({fmt.round2(score)}%)")


def people_table(rows, title: str, name_key: str = "name", score_key: str = "average") -> None:
    st.markdown(f"**{title}**")
    if not rows:
        st.caption("None.")
        return
    df = pd.DataFrame(rows)
    cols = [c for c in (name_key, "student_id", score_key) if c in df.columns]
    if score_key in df.columns:
        df[score_key] = df[score_key].map(fmt.round2)
    st.dataframe(df[cols], hide_index=True, use_container_width=True)
