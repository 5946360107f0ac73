# screens/parents/student_analytics.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.forms import handle_error, show_api_error
from core.navigation import require_segment
from core.ui import page_header, stat_cards
from screens.analytics import formatters as fmt
from screens.analytics.widgets import bar, level_badge
from screens.parents import parents_service as svc

ROUTE_KEY = "parent_student_analytics"
FILTERS_KEY = "parent_analytics__filters"
FILTER_LABELS = {
    "academic_year": ("academic_years", "Academic year"),
    "term": ("terms", "Term"),
    "exam_type": ("exam_types", "Exam type"),
    "subject": ("subjects", "Subject"),
}


def _filter_bar(options) -> dict:
    """Selectors built from the previous response's filter_options; `all` means no filter."""
    current = st.session_state.setdefault(FILTERS_KEY, {name: svc.ALL for name in FILTER_LABELS})
    chosen = {}
    cols = st.columns(len(FILTER_LABELS))
    for col, (name, (options_key, label)) in zip(cols, FILTER_LABELS.items()):
        values = {o["value"]: o["label"] for o in (options or {}).get(options_key) or []}
        choices = [svc.ALL, *[v for v in values if v != svc.ALL]]
        value = current.get(name, svc.ALL)
        chosen[name] = col.selectbox(
            label, choices,
            index=choices.index(value) if value in choices else 0,
            format_func=lambda v, values=values: "All" if v == svc.ALL else values.get(v, v),
            key=f"parent_analytics__{name}",
        )
    return chosen


def _render(data) -> None:
    info = data.get("student_info") or {}
    overall = data.get("overall_performance") or {}
    st.subheader(f"{info.get('name', 'Student')} · {info.get('class', '')}")
    position = overall.get("class_position")
    stat_cards([
        ("Average", f"{fmt.round2(overall.get('average_marks'))}%"),
        ("Subjects", overall.get("total_subjects", 0)),
        ("Class Position", f"{position} of {overall.get('class_size', 0)}" if position else "-"),
        ("Percentile", overall.get("percentile") if overall.get("percentile") is not None else "-"),
    ])
    level_badge(overall.get("average_marks"))

    subjects = pd.DataFrame(data.get("subject_performance") or [],
                            columns=["subject", "marks", "max_marks", "percentage", "grade"])
    subjects["percentage"] = subjects["percentage"].map(fmt.round2)
    bar(subjects, "subject", "percentage", "Subject performance")
    if not subjects.empty:
        st.dataframe(subjects, hide_index=True, use_container_width=True)

    comparison = fmt.subject_comparison(data.get("subject_comparison"))
    bar(comparison, "subject", ["student_marks", "class_average"], "Compared with the class average")

    c1, c2 = st.columns(2)
    for col, key, title in ((c1, "best_subject", "⭐ Best subject"), (c2, "worst_subject", "Needs attention")):
        s = data.get(key)
        if s:
            col.metric(title, s.get("subject", "-"),
                       f"{s.get('marks', 0)}/{s.get('max_marks', 0)} ({fmt.round2(s.get('percentage'))}%)",
                       delta_color="off")


def render() -> None:
    require_segment("parent", ROUTE_KEY)
    page_header("Student Analytics", "Your child's exam performance")

    filters = st.session_state.get(FILTERS_KEY, {})
    try:
        data = svc.fetch_student_analytics(filters)
    except ApiError as e:
        show_api_error(e, "Failed to load analytics")
        return

    chosen = _filter_bar(data.get("filter_options"))
    if chosen != st.session_state[FILTERS_KEY]:
        st.session_state[FILTERS_KEY] = chosen
        st.rerun()

    if not data.get("subject_performance"):
        st.info("No results found for the selected filters.")
        return
    try:
        _render(data)
    except Exception as e:
        handle_error(e, "Could not display analytics.")
