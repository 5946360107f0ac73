# screens/staff_registration.py
from __future__ import annotations

import logging

import streamlit as st

from core.api import ApiClient, ApiError, success_message
from core.auth import REGISTER_ENDPOINTS
from core.forms import flash, show_api_error, show_field_errors
from core.navigation import navigate_to_login
from core.ui import hide_sidebar, page_header
from core.validation import validate_staff_registration

logger = logging.getLogger(__name__)

ROUTE_KEY = "staff_registration"


def register_staff(data, client: ApiClient = None) -> str:
    """
    Activate a staff account the school has already added. The backend
    matches on email; returns its confirmation message.
    """
    payload = {
        "full_name": " ".join((data.get("full_name") or "").split()),
        "email": (data.get("email") or "").strip().lower(),
        "phone_number": (data.get("phone_number") or "").strip(),
        "password": data.get("password") or "",
        "confirm_password": data.get("confirm_password") or "",
    }
    client = client or ApiClient("staff")
    response = client.post(REGISTER_ENDPOINTS["staff"], payload, authenticated=False)
    logger.info("Registered staff account %s", payload["email"])
    return success_message(response, "Registration successful. Please log in.")


def render() -> None:
    hide_sidebar()
    page_header("Staff Registration", "Use the email address your school registered for you")

    with st.form("staff_registration"):
        full_name = st.text_input("Full name *", placeholder="First and last name")
        email = st.text_input("Email *")
        phone = st.text_input("Phone number *")
        c1, c2 = st.columns(2)
        password = c1.text_input("Password *", type="password")
        confirm = c2.text_input("Confirm password *", type="password")
        submitted = st.form_submit_button("Register", type="primary", use_container_width=True)

    if submitted:
        data = {"full_name": full_name, "email": email, "phone_number": phone,
                "password": password, "confirm_password": confirm}
        errors = validate_staff_registration(data)
        if errors:
            show_field_errors(errors)
        else:
            try:
                message = register_staff(data)
            except ApiError as e:
                show_api_error(e, "Registration failed")
            else:
                flash("success", message)
                navigate_to_login("staff")

    if st.button("Already registered? Log in"):
        navigate_to_login("staff")
