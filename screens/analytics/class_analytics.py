# screens/analytics/class_analytics.py
from __future__ import annotations

import streamlit as st

from core.api import ApiError
from core.forms import handle_error, show_api_error
from core.navigation import require_segment
from core.ui import page_header, stat_cards
from screens.analytics import analytics_service as svc
from screens.analytics import formatters as fmt
from screens.analytics.widgets import bar, exam_filter_bar, level_badge, people_table
from screens.marks.marks_service import fetch_dropdown_data

ROUTE_KEY = "class_analytics"


def _render(data) -> None:
    info = data.get("class_info") or {}
    st.subheader(f"{info.get('name', 'Class')} · {info.get('academic_year', '')}")
    stat_cards([
        ("Students", data.get("total_students", 0)),
        ("Class Average", f"{fmt.round2(data.get('class_average'))}%"),
        ("Median", f"{fmt.round2(data.get('class_median'))}%"),
        ("Assessments", data.get("total_assessments", 0)),
    ])
    level_badge(data.get("class_average"))

    subjects = fmt.subject_performance(data.get("subject_averages"), data.get("pass_fail_rates"))
    c1, c2 = st.columns(2)
    with c1:
        bar(subjects, "subject", "average", "Subject averages")
    with c2:
        bar(subjects, "subject", ["pass_rate", "fail_rate"], "Pass / fail rate by subject", stack=True)

    grades = fmt.grade_distribution(data.get("grade_distribution"), data.get("total_assessments"))
    c1, c2 = st.columns(2)
    with c1:
        bar(grades, "grade", "count", "Grade distribution")
        if not grades.empty:
            st.dataframe(grades.rename(columns={"percentage": "% of assessments"}),
                         hide_index=True, use_container_width=True)
    with c2:
        bar(fmt.quartiles(data.get("quartile_data"), data.get("class_average")), "name", "value",
            "Quartiles vs class average")
        highest, lowest = data.get("highest_score"), data.get("lowest_score")
        if highest is not None and lowest is not None:
            st.caption(f"Range span: {fmt.round2(fmt.round2(highest) - fmt.round2(lowest))}%")

    c1, c2, c3 = st.columns(3)
    with c1:
        people_table(data.get("top_performers"), "🏆 Top performers")
    with c2:
        people_table(data.get("bottom_performers"), "Needs support")
    with c3:
        people_table(data.get("challenging_subjects"), "⚠️ Challenging subjects")


def render() -> None:
    require_segment("staff", ROUTE_KEY)
    page_header("Class Analytics", "Exam performance of one class")

    try:
        dropdowns = fetch_dropdown_data()
    except ApiError as e:
        show_api_error(e, "Failed to load classes")
        return
    classes = {c["id"]: c.get("class_name") for c in dropdowns.classes}
    if not classes:
        st.info("No classes available.")
        return

    class_id = st.selectbox("Class", list(classes), format_func=classes.get, key="class_analytics__class")
    term, year, exam_type = exam_filter_bar("class_analytics", dropdowns)

    try:
        data = svc.fetch_class_analytics(class_id, term, year, exam_type)
    except ApiError as e:
        show_api_error(e, "Failed to fetch class analytics")
        return
    if not data:
        st.info("No analytics available for this selection.")
        return
    try:
        _render(data)
    except Exception as e:
        handle_error(e, "Could not display class analytics.")
