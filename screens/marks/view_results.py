# screens/marks/view_results.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.forms import show_api_error
from core.navigation import require_segment
from core.pagination import page_range, total_pages
from core.ui import page_header, stat_cards
from screens.marks import marks_service as svc

ROUTE_KEY = "view_results"
RESULTS_PER_PAGE = 10

TABLE_COLUMNS = {
    "student_name": "Student",
    "student_admission_number": "Admission No.",
    "class_name": "Class",
    "subject_name": "Subject",
    "exam_type": "Exam",
    "term": "Term",
    "academic_year": "Year",
    "marks_obtained": "Marks",
    "total_marks": "Out of",
    "percentage": "%",
    "grade": "Grade",
}


def _k(s: str) -> str:
    return f"view_results__{s}"


def _render_statistics(stats) -> None:
    if not stats:
        return
    stat_cards([
        ("Total Results", stats.get("total_results", 0)),
        ("Average", f"{float(stats.get('average_percentage') or 0):.1f}%"),
        ("Subjects", len(stats.get("subject_averages") or {})),
        ("Classes", len(stats.get("class_averages") or {})),
    ])
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Grade distribution**")
        grades = stats.get("grade_distribution") or {}
        if grades:
            ordered = [g for g in svc.GRADE_ORDER if g in grades] + [g for g in grades if g not in svc.GRADE_ORDER]
            st.bar_chart(pd.Series({g: grades[g] for g in ordered}, name="Results"))
    with c2:
        st.markdown("**Subject averages**")
        subjects = stats.get("subject_averages") or {}
        if subjects:
            df = pd.DataFrame(
                [{"Subject": k, "Average %": v.get("average"), "Results": v.get("count")} for k, v in subjects.items()]
            )
            st.dataframe(df, hide_index=True, use_container_width=True)


def render() -> None:
    require_segment("staff", ROUTE_KEY)
    page_header("View Results", "Browse recorded exam results")

    try:
        results = svc.fetch_results()
        stats = svc.fetch_results_statistics()
    except ApiError as e:
        show_api_error(e, "Failed to fetch results")
        return

    _render_statistics(stats)

    classes = sorted({r.get("class_name") for r in results if r.get("class_name")})
    subjects = sorted({r.get("subject_name") for r in results if r.get("subject_name")})
    exam_types = sorted({r.get("exam_type") for r in results if r.get("exam_type")})
    terms = sorted({r.get("term") for r in results if r.get("term")})
    years = sorted({r.get("academic_year") for r in results if r.get("academic_year")}, reverse=True)

    with st.expander("Filters", expanded=True):
        c1, c2, c3 = st.columns(3)
        class_name = c1.selectbox("Class", ["", *classes], format_func=lambda v: v or "All", key=_k("class"))
        subject_name = c2.selectbox("Subject", ["", *subjects], format_func=lambda v: v or "All", key=_k("subject"))
        exam_type = c3.selectbox("Exam type", ["", *exam_types],
                                 format_func=lambda v: svc.exam_type_label(v) if v else "All", key=_k("exam"))
        c4, c5, c6 = st.columns(3)
        term = c4.selectbox("Term", ["", *terms], format_func=lambda v: v or "All", key=_k("term"))
        year = c5.selectbox("Academic year", ["", *years], format_func=lambda v: v or "All", key=_k("year"))
        search = c6.text_input("Search student", key=_k("search"))

    filtered = svc.filter_results(results, class_name, subject_name, exam_type, term, year, search)
    filters = (class_name, subject_name, exam_type, term, year, search)
    if st.session_state.get(_k("filters")) != filters:
        st.session_state[_k("filters")] = filters
        st.session_state[_k("page")] = 1

    st.caption(f"Showing {len(filtered)} of {len(results)} results")
    if not filtered:
        st.info("No results found. Try adjusting your filters.")
        return

    pages = total_pages(len(filtered), RESULTS_PER_PAGE)
    page = st.number_input("Page", min_value=1, max_value=pages,
                           value=min(st.session_state.get(_k("page"), 1), pages))
    st.session_state[_k("page")] = page
    first, last = page_range(page, len(filtered), RESULTS_PER_PAGE)

    df = pd.DataFrame(filtered[first - 1:last])
    if "exam_type" in df.columns:
        df["exam_type"] = df["exam_type"].map(svc.exam_type_label)
    cols = [c for c in TABLE_COLUMNS if c in df.columns]
    st.dataframe(df[cols].rename(columns=TABLE_COLUMNS), hide_index=True, use_container_width=True)
    st.caption(f"Showing {first} to {last} of {len(filtered)} results")
