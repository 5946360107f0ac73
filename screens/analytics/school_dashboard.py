# screens/analytics/school_dashboard.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.auth import current_user
from core.forms import handle_error, render_flash, show_api_error
from core.navigation import require_segment
from core.ui import page_header, stat_cards
from screens.analytics import analytics_service as svc
from screens.analytics import formatters as fmt
from screens.analytics.widgets import bar, exam_filter_bar

ROUTE_KEY = "school_dashboard"


def _render(data) -> None:
    stat_cards([
        ("Students", data.get("total_students", 0)),
        ("Classes", data.get("total_classes", 0)),
        ("Subjects", data.get("total_subjects", 0)),
        ("Overall Average", f"{fmt.round2(data.get('overall_average'))}%"),
    ])

    streams = data.get("streams") or []
    selected = st.selectbox("Stream", ["all", *fmt.stream_names(streams)],
                            format_func=lambda s: "All streams" if s == "all" else s,
                            key="school_dashboard__stream")
    shown = fmt.filter_streams(streams, selected)

    for s in shown:
        st.markdown(
            f"**{s.get('stream')}** · {s.get('total_classes', 0)} classes · "
            f"{s.get('total_students', 0)} students · average {fmt.round2(s.get('average_percentage'))}%"
        )

    rankings = fmt.class_rankings(shown)
    bar(rankings, "class_name", "average_percentage", "Class rankings")
    if not rankings.empty:
        st.dataframe(rankings, hide_index=True, use_container_width=True)

    subjects = pd.DataFrame(data.get("subject_averages") or [],
                            columns=["subject_name", "average_percentage", "total_students"])
    subjects["average_percentage"] = subjects["average_percentage"].map(fmt.round2)
    bar(subjects, "subject_name", "average_percentage", "Subject averages")

    top = data.get("top_performing_classes") or []
    if top:
        st.markdown("**🏆 Top performing classes**")
        st.dataframe(pd.DataFrame(top), hide_index=True, use_container_width=True)


def render() -> None:
    require_segment("school", ROUTE_KEY)
    user = current_user("school")
    page_header(f"Welcome, {user.get('display_name', 'School')}", "School performance overview")
    render_flash()

    term, year, exam_type = exam_filter_bar("school_dashboard")
    try:
        data = svc.fetch_school_analytics(term, year, exam_type)
    except ApiError as e:
        show_api_error(e, "Failed to fetch dashboard data")
        return
    if not data:
        st.info("No dashboard data available.")
        return
    try:
        _render(data)
    except Exception as e:
        handle_error(e, "Could not display the school dashboard.")
