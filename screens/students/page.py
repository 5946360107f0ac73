# screens/students/page.py
# -------------------------------------------------------------------
# Students: summary cards, searchable roster, add / edit / delete,
# and bulk upload. Shared by the school and staff portals.
# -------------------------------------------------------------------
from __future__ import annotations

import datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.forms import flash, handle_error, render_flash, show_api_error, show_field_errors
from core.navigation import require_segment
from core.session_store import acting_segment
from core.ui import confirm_button, page_header, stat_cards
from core.validation import validate_student
from screens.students import students_service as svc
from screens.students.importer import render_upload_section

ROUTE_KEY = "students"
MIN_BIRTH_DATE = datetime.date(1900, 1, 1)
TABLE_COLUMNS = {
    "full_name": "Name",
    "admission_number": "Admission No.",
    "admission_class": "Admission Class",
    "current_class": "Current Class",
    "gender": "Gender",
    "parent_guardian_name": "Guardian",
    "parent_guardian_phone": "Guardian Phone",
    "status": "Status",
}


def _k(s: str) -> str:
    """Per-page key namespace to avoid collisions if rendered twice."""
    return f"students__{s}"


def _parse_date(value: Any):
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def birth_date_bounds(dob: Optional[datetime.date],
                      today: Optional[datetime.date] = None) -> Tuple[datetime.date, datetime.date]:
    """Picker range, widened so a stored date of birth is always selectable."""
    today = today or datetime.date.today()
    if dob is None:
        return MIN_BIRTH_DATE, today
    return min(MIN_BIRTH_DATE, dob), max(today, dob)


# ────────────────────────────────────────────────────────────────────────────────
# Form
# ────────────────────────────────────────────────────────────────────────────────

def _student_fields(defaults: Dict[str, Any]) -> Dict[str, Any]:
    c1, c2 = st.columns(2)
    with c1:
        full_name = st.text_input("Full name *", value=defaults.get("full_name") or "")
        admission_class = st.text_input("Admission class", value=defaults.get("admission_class") or "")
        stored_dob = _parse_date(defaults.get("date_of_birth"))
        earliest, latest = birth_date_bounds(stored_dob)
        dob = st.date_input("Date of birth", value=stored_dob, min_value=earliest, max_value=latest)
        guardian = st.text_input("Parent/guardian name", value=defaults.get("parent_guardian_name") or "")
        guardian_email = st.text_input("Parent/guardian email", value=defaults.get("parent_guardian_email") or "")
    with c2:
        admission_number = st.text_input("Admission number *", value=defaults.get("admission_number") or "")
        current_class = st.text_input("Current class", value=defaults.get("current_class") or "")
        genders = ("",) + svc.GENDERS
        gender = st.selectbox(
            "Gender", genders,
            index=genders.index(defaults.get("gender")) if defaults.get("gender") in genders else 0,
            format_func=lambda g: g.title() if g else "Select gender",
        )
        guardian_phone = st.text_input("Parent/guardian phone", value=defaults.get("parent_guardian_phone") or "")
        status = st.selectbox(
            "Status", svc.STATUSES,
            index=svc.STATUSES.index(defaults.get("status")) if defaults.get("status") in svc.STATUSES else 0,
            format_func=str.title,
        )
    address = st.text_area("Address", value=defaults.get("address") or "")
    return {
        "full_name": full_name,
        "admission_number": admission_number,
        "admission_class": admission_class,
        "current_class": current_class,
        "date_of_birth": dob.isoformat() if dob else None,
        "gender": gender,
        "parent_guardian_name": guardian,
        "parent_guardian_phone": guardian_phone,
        "parent_guardian_email": guardian_email,
        "address": address,
        "status": status,
    }


def _submit(data: Dict[str, Any], student_id=None) -> None:
    errors = validate_student(data)
    if errors:
        show_field_errors(errors)
        return
    try:
        if student_id is None:
            svc.create_student(data)
        else:
            svc.update_student(student_id, data)
    except ApiError as e:
        show_api_error(e, "Failed to save student")
        return
    flash("success", f"Student '{data['full_name'].strip()}' {'added' if student_id is None else 'updated'}")
    st.rerun()


# ────────────────────────────────────────────────────────────────────────────────
# Sections
# ────────────────────────────────────────────────────────────────────────────────

def _render_roster(students: List[Dict[str, Any]]) -> None:
    c1, c2, c3 = st.columns([2, 1, 1])
    with c1:
        search = st.text_input("Search by name, admission number or guardian", key=_k("search"))
    with c2:
        class_name = st.selectbox("Class", [""] + svc.class_options(students),
                                  format_func=lambda c: c or "All classes", key=_k("class"))
    with c3:
        status = st.selectbox("Status", ("",) + svc.STATUSES,
                              format_func=lambda s: s.title() if s else "All statuses", key=_k("status"))

    rows = svc.filter_students(students, search, class_name, status)
    if not rows:
        st.info("No students found in your school." if not students
                else "No students match your search criteria.")
        return

    df = pd.DataFrame(rows)
    cols = [c for c in TABLE_COLUMNS if c in df.columns]
    st.dataframe(df[cols].rename(columns=TABLE_COLUMNS), use_container_width=True, hide_index=True)
    if len(rows) != len(students):
        st.caption(f"Showing {len(rows)} of {len(students)} students")

    st.markdown("#### Edit or delete")
    by_id = {s.get("id"): s for s in rows}
    chosen = st.selectbox(
        "Student",
        list(by_id),
        format_func=lambda i: f"{by_id[i].get('full_name')} ({by_id[i].get('admission_number')})",
        key=_k("selected"),
    )
    if chosen is None:
        return
    with st.form(_k(f"edit_{chosen}")):
        data = _student_fields(by_id[chosen])
        submitted = st.form_submit_button("Save changes", type="primary")
    if submitted:
        _submit(data, chosen)

    if confirm_button("Delete student", key=_k(f"delete_{chosen}"),
                      prompt="Are you sure you want to delete this student?"):
        try:
            svc.delete_student(chosen)
        except ApiError as e:
            show_api_error(e, "Failed to delete student")
            return
        flash("success", "Student deleted")
        st.rerun()


def render() -> None:
    require_segment(acting_segment(), ROUTE_KEY)
    page_header("Students", "Manage student records")
    render_flash()

    try:
        students = svc.fetch_students()
    except ApiError as e:
        show_api_error(e, "Failed to fetch students")
        return

    try:
        stat_cards([
            ("Total Students", len(students)),
            ("Active", sum(1 for s in students if s.get("status") == "active")),
            ("Classes", len(svc.class_options(students))),
        ])
        tab_list, tab_add, tab_upload = st.tabs(["👥 Students", "➕ Add Student", "📤 Bulk Upload"])
        with tab_list:
            _render_roster(students)
        with tab_add:
            with st.form(_k("add"), clear_on_submit=True):
                data = _student_fields({})
                submitted = st.form_submit_button("Add student", type="primary")
            if submitted:
                _submit(data)
        with tab_upload:
            if render_upload_section(_k("upload")):
                st.button("Refresh list", key=_k("refresh"))
    except Exception as e:
        handle_error(e, "Could not display students.")
