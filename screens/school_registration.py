# screens/school_registration.py
from __future__ import annotations

import logging

import streamlit as st

from core.api import ApiClient, ApiError
from core.auth import REGISTER_ENDPOINTS
from core.forms import flash, show_api_error, show_field_errors
from core.navigation import navigate_to_login
from core.ui import hide_sidebar, page_header
from core.validation import validate_school_registration

logger = logging.getLogger(__name__)

ROUTE_KEY = "school_registration"
FIELDS = ("school_name", "principal_name", "phone_number", "email", "school_domain", "password")


def register_school(data, client: ApiClient = None) -> dict:
    """POST the registration. Raises ApiError when the backend rejects it."""
    payload = {k: (data.get(k) or "").strip() for k in FIELDS if k != "password"}
    payload["email"] = payload["email"].lower()
    payload["password"] = data.get("password") or ""
    client = client or ApiClient("school")
    response = client.post(REGISTER_ENDPOINTS["school"], payload, authenticated=False)
    logger.info("Registered school %s", payload["school_name"])
    return response if isinstance(response, dict) else {}


def render() -> None:
    hide_sidebar()
    page_header("Register Your School", "Create a school account to get started")

    with st.form("school_registration"):
        c1, c2 = st.columns(2)
        with c1:
            school_name = st.text_input("School name *")
            phone = st.text_input("Phone number *")
            domain = st.text_input("School domain *", placeholder="myschool.ac.ke")
        with c2:
            principal = st.text_input("Principal name *")
            email = st.text_input("Email *")
            password = st.text_input("Password *", type="password", help="At least 8 characters")
        submitted = st.form_submit_button("Register school", type="primary", use_container_width=True)

    if submitted:
        data = {"school_name": school_name, "principal_name": principal, "phone_number": phone,
                "email": email, "school_domain": domain, "password": password}
        errors = validate_school_registration(data)
        if errors:
            show_field_errors(errors)
        else:
            try:
                register_school(data)
            except ApiError as e:
                show_api_error(e, "Registration failed")
            else:
                flash("success", "School registered successfully. Please log in.")
                navigate_to_login("school")

    if st.button("Already registered? Log in"):
        navigate_to_login("school")
