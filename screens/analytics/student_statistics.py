# screens/analytics/student_statistics.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.forms import handle_error, show_api_error
from core.navigation import require_segment
from core.ui import page_header, stat_cards
from screens.analytics import analytics_service as svc
from screens.analytics import formatters as fmt
from screens.analytics.widgets import bar, exam_filter_bar, level_badge, line
from screens.marks.marks_service import fetch_class_students, fetch_dropdown_data

ROUTE_KEY = "student_statistics"


def _render(data) -> None:
    st.subheader(f"{data.get('student_name', 'Student')} · {data.get('class_name', '')} ({data.get('stream', '')})")
    stat_cards([
        ("Average", f"{fmt.round2(data.get('overall_average'))}%"),
        ("Marks", f"{data.get('total_marks', 0)}/{data.get('possible_marks', 0)}"),
        ("Class Rank", data.get("class_rank")),
        ("Stream Rank", data.get("stream_rank")),
    ])
    level_badge(data.get("overall_average"))

    subjects = pd.DataFrame(data.get("subjects") or [],
                            columns=["subject_name", "marks_obtained", "total_marks", "percentage", "grade"])
    subjects["percentage"] = subjects["percentage"].map(fmt.round2)
    bar(subjects, "subject_name", "percentage", "Subject performance")
    if not subjects.empty:
        st.dataframe(subjects, hide_index=True, use_container_width=True)

    trend = pd.DataFrame(data.get("performance_trend") or [], columns=["exam_date", "average_percentage"])
    line(trend.sort_values("exam_date"), "exam_date", "average_percentage", "Performance trend")

    comparison = data.get("comparison") or {}
    if comparison:
        bar(fmt.named_values({
            "Student": data.get("overall_average"),
            "Class": comparison.get("class_average"),
            "Stream": comparison.get("stream_average"),
            "School": comparison.get("school_average"),
        }), "name", "value", "Compared with class, stream and school")


def render() -> None:
    require_segment("staff", ROUTE_KEY)
    page_header("Student Statistics", "Exam performance of one student")

    try:
        dropdowns = fetch_dropdown_data()
    except ApiError as e:
        show_api_error(e, "Failed to load classes")
        return
    classes = {c["id"]: c.get("class_name") for c in dropdowns.classes}
    class_id = st.selectbox("Class", [None, *classes], key="student_stats__class",
                            format_func=lambda i: "Select class" if i is None else classes[i])
    students = {}
    if class_id is not None:
        try:
            students = {s["id"]: f"{s.get('full_name')} ({s.get('admission_number')})"
                        for s in fetch_class_students(class_id)}
        except ApiError as e:
            show_api_error(e, "Failed to fetch students")
            return
    student_id = st.selectbox("Student", [None, *students], key="student_stats__student",
                              format_func=lambda i: "Select student" if i is None else students[i])
    term, year, exam_type = exam_filter_bar("student_stats", dropdowns)

    try:
        data = svc.fetch_student_analytics(student_id, class_id, term, year, exam_type)
    except ValueError as e:
        st.info(str(e))
        return
    except ApiError as e:
        show_api_error(e, "Failed to fetch student statistics")
        return
    if not data or (data.get("message") and not data.get("subjects")):
        st.info(data.get("message") or "No results recorded for this student yet.")
        return
    try:
        _render(data)
    except Exception as e:
        handle_error(e, "Could not display student statistics.")
