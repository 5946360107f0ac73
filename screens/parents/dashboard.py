# screens/parents/dashboard.py
from __future__ import annotations

import streamlit as st

from core.api import ApiError
from core.forms import render_flash, show_api_error
from core.navigation import navigate_to, require_segment
from core.ui import page_header, stat_cards
from screens.parents import parents_service as svc

ROUTE_KEY = "parent_dashboard"


def render() -> None:
    require_segment("parent", ROUTE_KEY)
    render_flash()
    try:
        data = svc.fetch_dashboard()
    except ApiError as e:
        show_api_error(e, "Failed to load dashboard")
        return

    parent = data.get("parent") or {}
    student = data.get("student") or {}
    school = data.get("school") or {}
    stats = data.get("dashboard_stats") or {}

    page_header(f"Welcome, {parent.get('full_name', 'Parent')}", school.get("name"))
    stat_cards([
        ("Status", str(stats.get("student_status", "-")).title()),
        ("Current Class", stats.get("current_class") or "-"),
        ("Age", f"{stats['student_age']} years" if stats.get("student_age") is not None else "-"),
        ("Admitted", (stats.get("admission_date") or "-")[:10]),
    ])

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Student")
        st.write(f"**Name:** {student.get('full_name', '-')}")
        st.write(f"**Admission number:** {student.get('admission_number', '-')}")
        st.write(f"**Admission class:** {student.get('admission_class', '-')}")
        st.write(f"**Gender:** {str(student.get('gender') or '-').title()}")
    with c2:
        st.subheader("School")
        st.write(f"**Name:** {school.get('name', '-')}")
        st.write(f"**Principal:** {school.get('principal_name', '-')}")
        st.write(f"**Phone:** {school.get('phone_number', '-')}")
        st.write(f"**Email:** {school.get('email', '-')}")

    c1, c2 = st.columns(2)
    if c1.button("📊 View performance", use_container_width=True):
        navigate_to("parent_student_analytics")
    if c2.button("💳 Fee information", use_container_width=True):
        navigate_to("fee_information")
