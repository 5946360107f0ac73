# screens/parents/registration.py
# -------------------------------------------------------------------
# Two-step parent sign-up: the parent's own details, then the child
# the account is linked to. Step 1 answers are kept in the session so
# "Back" does not lose them.
# -------------------------------------------------------------------
from __future__ import annotations

import streamlit as st

from core.api import ApiError
from core.forms import flash, show_api_error, show_field_errors
from core.navigation import navigate_to_login
from core.ui import hide_sidebar, page_header
from core.validation import validate_parent_account, validate_parent_student_link
from screens.parents import parents_service as svc

ROUTE_KEY = "parent_registration"
STEP_KEY = "parent_reg__step"
DATA_KEY = "parent_reg__data"


def _show_errors(errors) -> None:
    if "form" in errors:
        st.error(errors["form"])
    else:
        show_field_errors(errors)


def _step_one(data) -> None:
    with st.form("parent_reg__account"):
        full_name = st.text_input("Full name *", value=data.get("full_name", ""))
        email = st.text_input("Email *", value=data.get("email", ""))
        phone = st.text_input("Phone number *", value=data.get("phone_number", ""))
        password = st.text_input("Password *", type="password")
        confirm = st.text_input("Confirm password *", type="password")
        submitted = st.form_submit_button("Next", type="primary")
    if not submitted:
        return
    account = {"full_name": full_name, "email": email, "phone_number": phone,
               "password": password, "confirm_password": confirm}
    errors = validate_parent_account(account)
    if errors:
        _show_errors(errors)
        return
    data.update(account)
    st.session_state[STEP_KEY] = 2
    st.rerun()


def _step_two(data) -> None:
    st.info("The student name and admission number must match exactly with the school records.")
    with st.form("parent_reg__student"):
        student_name = st.text_input("Student name *", value=data.get("student_name", ""))
        admission_number = st.text_input("Admission number *", value=data.get("admission_number", ""),
                                         placeholder="Enter your child's admission number")
        c1, c2 = st.columns(2)
        back = c1.form_submit_button("Back")
        submitted = c2.form_submit_button("Register", type="primary")
    if back:
        data.update({"student_name": student_name, "admission_number": admission_number})
        st.session_state[STEP_KEY] = 1
        st.rerun()
    if not submitted:
        return
    link = {"student_name": student_name, "admission_number": admission_number}
    errors = validate_parent_student_link(link)
    if errors:
        _show_errors(errors)
        return
    data.update(link)
    try:
        message = svc.register_parent(data)
    except ApiError as e:
        show_api_error(e, "Registration failed")
        return
    st.session_state.pop(STEP_KEY, None)
    st.session_state.pop(DATA_KEY, None)
    flash("success", message)
    navigate_to_login("parent")


def render() -> None:
    hide_sidebar()
    page_header("Parent Registration", "Create an account to follow your child's progress")
    step = st.session_state.setdefault(STEP_KEY, 1)
    data = st.session_state.setdefault(DATA_KEY, {})
    st.progress(step / 2, text=f"Step {step} of 2")
    if step == 1:
        _step_one(data)
    else:
        _step_two(data)
