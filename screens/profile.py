# screens/profile.py
# Profile page for each portal and the staff landing page. Data comes
# from the user info stored at login.
# -------------------------------------------------------------------
from __future__ import annotations

from typing import Callable, Dict, Tuple

import streamlit as st

from core.auth import current_user
from core.forms import render_flash
from core.navigation import navigate_to, navigate_to_logout, require_segment
from core.session_store import get_segment
from core.ui import page_header

# segment -> fields shown on the profile, in order
PROFILE_FIELDS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "school": (("name", "School"), ("principal_name", "Principal"), ("email", "Email"),
               ("phone_number", "Phone"), ("school_domain", "Domain"), ("id", "School ID")),
    "staff": (("full_name", "Name"), ("email", "Email"), ("phone_number", "Phone"),
              ("role", "Role"), ("school_name", "School"), ("id", "Staff ID"), ("school_id", "School ID")),
    "parent": (("full_name", "Name"), ("email", "Email"), ("phone_number", "Phone")),
}

STAFF_SHORTCUTS = (
    ("✍️ Input marks", "input_marks"),
    ("📋 View results", "view_results"),
    ("📊 Class analytics", "class_analytics"),
    ("📘 Subject analytics", "subject_analytics"),
    ("📈 Statistics dashboard", "statistics_dashboard"),
    ("📑 Reports", "reports"),
    ("👥 Students", "students"),
)


def profile_rows(segment: str, user: dict) -> Dict[str, str]:
    rows = {}
    for key, label in PROFILE_FIELDS[get_segment(segment).name]:
        value = user.get(key)
        if value not in (None, ""):
            rows[label] = str(value).replace("_", " ").title() if key == "role" else str(value)
    return rows


def _account_panel(segment: str, user: dict) -> None:
    st.markdown("### Account")
    for label, value in profile_rows(segment, user).items():
        st.write(f"**{label}:** {value}")
    if st.button("Log out", key=f"{segment}_profile__logout"):
        navigate_to_logout(segment)


def _render(segment: str, route_key: str) -> None:
    seg = get_segment(segment)
    require_segment(seg, route_key)
    user = current_user(seg)
    page_header(f"👤 {user.get('display_name', seg.label)}", f"{seg.label} profile")
    render_flash()
    _account_panel(seg.name, user)


def render_staff_dashboard() -> None:
    require_segment("staff", "staff_dashboard")
    user = current_user("staff")
    page_header(f"Welcome, {user.get('display_name', 'Staff')}", user.get("school_name"))
    render_flash()

    st.markdown("### Quick links")
    cols = st.columns(3)
    for i, (label, route) in enumerate(STAFF_SHORTCUTS):
        if cols[i % 3].button(label, key=f"staff_dash__{route}", use_container_width=True):
            navigate_to(route)

    st.markdown("---")
    _account_panel("staff", user)


def profile_page(segment: str) -> Callable[[], None]:
    route_key = f"{segment}_profile"

    def render() -> None:
        _render(segment, route_key)
    render.__name__ = route_key
    return render
