# screens/staff/page.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.forms import flash, handle_error, render_flash, show_api_error, show_field_errors
from core.navigation import require_segment
from core.ui import confirm_button, page_header, stat_cards
from core.validation import STAFF_ROLES, validate_staff_member
from screens.staff import staff_service as svc

ROUTE_KEY = "staff_management"


def _k(s: str) -> str:
    return f"staff_mgmt__{s}"


def _render_add_form() -> None:
    with st.form(_k("add"), clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            first_name = st.text_input("First name *")
            email = st.text_input("Email *")
        with c2:
            last_name = st.text_input("Last name *")
            role = st.selectbox("Role *", list(STAFF_ROLES), format_func=STAFF_ROLES.get)
        submitted = st.form_submit_button("Add staff member", type="primary")
    if not submitted:
        return

    data = {"email": email, "role": role, "first_name": first_name, "last_name": last_name}
    errors = validate_staff_member(data)
    if errors:
        show_field_errors(errors)
        return
    try:
        message = svc.add_staff(data)
    except ApiError as e:
        show_api_error(e, "Failed to add staff member")
        return
    flash("success", message)
    st.rerun()


def _render_roster(roster: svc.StaffRoster) -> None:
    if not roster.staff:
        st.info("No staff members yet. Add one above.")
        return

    df = pd.DataFrame(roster.staff)
    if "full_name" not in df.columns:
        df["full_name"] = [f"{s.get('first_name') or ''} {s.get('last_name') or ''}".strip() for s in roster.staff]
    if "role" in df.columns:
        df["role"] = df["role"].map(lambda r: STAFF_ROLES.get(r, str(r).replace("_", " ").title()))
    cols = [c for c in ("full_name", "email", "role", "is_active", "created_at") if c in df.columns]
    st.dataframe(
        df[cols].rename(columns={"full_name": "Name", "email": "Email", "role": "Role",
                                 "is_active": "Active", "created_at": "Added"}),
        use_container_width=True,
        hide_index=True,
    )

    st.markdown("#### Remove a staff member")
    by_id = {s.get("id"): s for s in roster.staff}
    chosen = st.selectbox(
        "Staff member",
        list(by_id),
        format_func=lambda i: f"{by_id[i].get('full_name') or by_id[i].get('email')} ({by_id[i].get('email')})",
        key=_k("remove_select"),
    )
    if chosen is None:
        return
    if confirm_button("Remove", key=_k(f"remove_{chosen}"),
                      prompt="Are you sure you want to remove this staff member?"):
        try:
            message = svc.remove_staff(chosen)
        except ApiError as e:
            show_api_error(e, "Failed to remove staff member")
            return
        flash("success", message)
        st.rerun()


def render() -> None:
    require_segment("school", ROUTE_KEY)
    page_header("Staff Management", "Add and manage staff accounts for your school")
    render_flash()

    try:
        roster = svc.fetch_staff()
    except ApiError as e:
        show_api_error(e, "Failed to fetch staff members")
        return

    try:
        stat_cards([
            ("Total Staff", roster.total_count),
            ("Active", roster.active_count()),
            ("Teachers", roster.role_counts().get("teacher", 0)),
        ])
        st.subheader("Add Staff Member")
        _render_add_form()
        st.subheader(f"Staff at {roster.school.get('name') or 'your school'}")
        _render_roster(roster)
    except Exception as e:
        handle_error(e, "Could not display staff members.")
