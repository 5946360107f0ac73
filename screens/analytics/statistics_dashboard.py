# screens/analytics/statistics_dashboard.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.forms import handle_error, show_api_error
from core.navigation import require_segment
from core.ui import page_header, stat_cards
from screens.analytics import analytics_service as svc
from screens.analytics import formatters as fmt
from screens.analytics.widgets import bar, line

ROUTE_KEY = "statistics_dashboard"


def _table(rows, columns, title: str) -> None:
    st.markdown(f"**{title}**")
    if not rows:
        st.caption("None.")
        return
    df = pd.DataFrame(rows)
    cols = [c for c in columns if c in df.columns]
    if "avg_score" in df.columns:
        df["avg_score"] = df["avg_score"].map(fmt.round2)
    st.dataframe(df[cols], hide_index=True, use_container_width=True)


def _overview(summary) -> None:
    icon, label = fmt.trend_indicator(summary.get("improvement_trend"))
    stat_cards([
        ("Students", summary.get("total_students", 0)),
        ("Assessments", summary.get("total_assessments", 0)),
        ("Overall Average", f"{fmt.round2(summary.get('overall_average'))}%"),
        ("Trend", f"{icon} {label}"),
    ])
    c1, c2 = st.columns(2)
    with c1:
        bar(fmt.named_values(summary.get("grade_distribution")), "name", "value", "Grade distribution")
    with c2:
        slices = fmt.pie_slices(summary.get("performance_categories"))
        bar(slices, "name", "value", "Performance categories")
        if not slices.empty:
            st.dataframe(slices, hide_index=True, use_container_width=True)
    line(fmt.monthly_series(summary.get("monthly_trends")), "month", "average", "Monthly trend")

    c1, c2, c3 = st.columns(3)
    with c1:
        _table(summary.get("top_students"), ("full_name", "student_id", "avg_score"), "Top students")
    with c2:
        _table(summary.get("top_classes"), ("class_name", "grade_level", "avg_score"), "Top classes")
    with c3:
        _table(summary.get("top_subjects"), ("subject_name", "subject_code", "avg_score"), "Top subjects")
    c1, c2 = st.columns(2)
    with c1:
        _table(summary.get("at_risk_students"), ("full_name", "student_id", "avg_score"), "⚠️ At-risk students")
    with c2:
        _table(summary.get("challenging_subjects"), ("subject_name", "subject_code", "avg_score"),
               "Challenging subjects")
    if summary.get("last_updated"):
        st.caption(f"Last updated {summary['last_updated']} · {summary.get('data_freshness', '')}")


def _performance(metrics) -> None:
    desc = metrics.get("descriptive_stats") or {}
    stat_cards([
        ("Assessments", desc.get("total_assessments", 0)),
        ("Average", f"{fmt.round2(desc.get('average_score'))}%"),
        ("Highest", f"{fmt.round2(desc.get('highest_score'))}%"),
        ("Lowest", f"{fmt.round2(desc.get('lowest_score'))}%"),
    ])
    line(fmt.monthly_series((metrics.get("trend_data") or {}).get("monthly")), "month", "average",
         "Monthly average")
    c1, c2 = st.columns(2)
    with c1:
        bar(fmt.named_values(metrics.get("subject_comparison")), "name", "value", "Subject averages")
    with c2:
        bar(fmt.named_values(metrics.get("class_comparison")), "name", "value", "Class averages")


def _comparison(comparative) -> None:
    c1, c2 = st.columns(2)
    with c1:
        classes = fmt.comparison(comparative.get("class_comparison"), "students")
        bar(classes, "name", "average", "Classes")
    with c2:
        subjects = fmt.comparison(comparative.get("subject_comparison"), "assessments")
        bar(subjects, "name", "average", "Subjects")

    yoy = comparative.get("year_over_year") or {}
    if yoy:
        current = yoy.get("current_year") or {}
        previous = yoy.get("previous_year") or {}
        st.markdown("**Year over year**")
        c1, c2 = st.columns(2)
        c1.metric(str(previous.get("year", "Previous")), f"{fmt.round2(previous.get('average'))}%")
        c2.metric(str(current.get("year", "Current")), f"{fmt.round2(current.get('average'))}%",
                  delta=f"{fmt.round2(yoy.get('improvement'))}%")


def render() -> None:
    require_segment("staff", ROUTE_KEY)
    page_header("Statistics Dashboard", "School-wide exam performance")

    if st.button("🔄 Refresh", key="stats_dashboard__refresh"):
        st.rerun()
    try:
        data = svc.fetch_statistics()
    except ApiError as e:
        show_api_error(e, "Failed to fetch statistics")
        return

    try:
        tab_overview, tab_performance, tab_comparison = st.tabs(["Overview", "Performance", "Comparison"])
        with tab_overview:
            _overview(data["summary"])
        with tab_performance:
            _performance(data["metrics"])
        with tab_comparison:
            _comparison(data["comparative"])
    except Exception as e:
        handle_error(e, "Could not display statistics.")
