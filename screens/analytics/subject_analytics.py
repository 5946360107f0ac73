# screens/analytics/subject_analytics.py
from __future__ import annotations

import streamlit as st

from core.api import ApiError
from core.forms import handle_error, show_api_error
from core.navigation import require_segment
from core.ui import bullet_list, page_header, stat_cards
from screens.analytics import analytics_service as svc
from screens.analytics import formatters as fmt
from screens.analytics.widgets import bar, exam_filter_bar, level_badge, line
from screens.marks.marks_service import fetch_dropdown_data

ROUTE_KEY = "subject_analytics"


def _render(data) -> None:
    info = data.get("subject_info") or {}
    st.subheader(f"{info.get('name', 'Subject')} ({info.get('code', '')})")
    pass_rate = fmt.round2(data.get("pass_rate"))
    stat_cards([
        ("Overall Average", f"{fmt.round2(data.get('overall_average'))}%"),
        ("Pass Rate", f"{pass_rate}%"),
        ("Fail Rate", f"{fmt.round2(100 - pass_rate)}%"),
        ("Excellence Rate", f"{fmt.round2(data.get('excellence_rate'))}%"),
        ("Assessments", data.get("total_assessments", 0)),
    ])
    level_badge(data.get("overall_average"))

    c1, c2 = st.columns(2)
    with c1:
        bar(fmt.class_performance(data.get("class_performance")), "class", ["average", "pass_rate"],
            "Performance by class")
    with c2:
        line(fmt.performance_trends(data.get("performance_trends")), "month", "average", "Monthly trend")

    grades = fmt.grade_distribution(data.get("grade_distribution"), data.get("total_assessments"))
    bar(grades, "grade", "count", "Grade distribution")

    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Challenging topics**")
        bullet_list(data.get("challenging_topics") or ["None recorded"])
    with c2:
        st.markdown("**Success areas**")
        bullet_list(data.get("success_areas") or ["None recorded"])


def render() -> None:
    require_segment("staff", ROUTE_KEY)
    page_header("Subject Analytics", "Exam performance of one subject across classes")

    try:
        dropdowns = fetch_dropdown_data()
    except ApiError as e:
        show_api_error(e, "Failed to load subjects")
        return
    subjects = {s["id"]: s.get("subject_name") for s in dropdowns.subjects}
    if not subjects:
        st.info("No subjects available.")
        return
    subject_id = st.selectbox("Subject", list(subjects), format_func=subjects.get, key="subject_analytics__subject")
    term, year, exam_type = exam_filter_bar("subject_analytics", dropdowns)

    try:
        data = svc.fetch_subject_analytics(subject_id, term, year, exam_type)
    except ApiError as e:
        show_api_error(e, "Failed to fetch subject analytics")
        return
    if not data:
        st.info("No analytics available for this subject.")
        return
    try:
        _render(data)
    except Exception as e:
        handle_error(e, "Could not display subject analytics.")
