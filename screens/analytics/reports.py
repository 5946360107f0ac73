# screens/analytics/reports.py
# -------------------------------------------------------------------
# Reports dashboard: top three students and subject champions of each
# class, stream rankings per class level, and the per-stream totals.
# -------------------------------------------------------------------
from __future__ import annotations

import logging

import streamlit as st

from core.api import ApiError, AuthExpired
from core.forms import handle_error, show_api_error
from core.navigation import require_segment
from core.ui import page_header
from screens.analytics import analytics_service as svc
from screens.analytics import formatters as fmt
from screens.analytics.widgets import bar, exam_filter_bar
from screens.marks.marks_service import fetch_dropdown_data

log = logging.getLogger(__name__)

ROUTE_KEY = "reports"
NO_DATA_MESSAGE = "No data available for the selected filters. Try adjusting your filter criteria."


def _table(df) -> None:
    if df.empty:
        st.caption("No data available.")
    else:
        st.dataframe(df, hide_index=True, use_container_width=True)


def _render_streams(data) -> None:
    breakdown = fmt.stream_breakdown(data.get("pie_chart_data"))
    c1, c2 = st.columns(2)
    with c1:
        bar(breakdown[breakdown["top_students"] > 0], "stream", "top_students", "Top students by stream")
    with c2:
        bar(breakdown[breakdown["subject_champions"] > 0], "stream", "subject_champions",
            "Subject champions by stream")


def _render(data) -> None:
    _render_streams(data)

    st.subheader("🏆 Top 3 students per class")
    for group in data.get("top_students_per_class") or []:
        st.markdown(f"**{fmt.class_heading(group)}**")
        _table(fmt.top_students(group))

    st.subheader("🎯 Subject champions per class")
    for group in data.get("subject_champions") or []:
        st.markdown(f"**{fmt.class_heading(group)}**")
        _table(fmt.subject_champions(group))

    st.subheader("📊 Stream rankings")
    for level in data.get("stream_rankings") or []:
        st.markdown(
            f"**{level.get('class_level')}** (position #{level.get('class_position')}) · "
            f"class average {fmt.round2(level.get('class_average'))}%"
        )
        _table(fmt.stream_ranking(level))


def render() -> None:
    require_segment("staff", ROUTE_KEY)
    page_header("Reports", "Top students, subject champions and stream rankings")

    try:
        dropdowns = fetch_dropdown_data()
    except AuthExpired as e:
        show_api_error(e)
        return
    except ApiError as e:
        log.warning("Dropdown data unavailable, using default filters: %s", e.message)
        dropdowns = None
    term, year, exam_type = exam_filter_bar("reports", dropdowns)

    try:
        with st.spinner("Loading reports..."):
            data = svc.fetch_reports_data(term, year, exam_type)
    except ApiError as e:
        show_api_error(e, "Failed to fetch reports data")
        return
    if not fmt.has_reports(data):
        st.info(data.get("message") or NO_DATA_MESSAGE)
        return
    try:
        _render(data)
    except Exception as e:
        handle_error(e, "Could not display reports.")
