# screens/password_reset.py
# -------------------------------------------------------------------
# Forgot-password (request a reset email) and reset-password (set a
# new password from the emailed token) for each portal. The parent
# portal only has the request step.
# -------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import Callable, Optional

import streamlit as st

from core.api import ApiClient, ApiError, success_message
from core.auth import FORGOT_PASSWORD_ENDPOINTS, RESET_PASSWORD_ENDPOINTS
from core.forms import flash, show_api_error, show_field_errors
from core.navigation import navigate_to_login
from core.session_store import get_segment
from core.ui import hide_sidebar, page_header
from core.validation import is_valid_email, validate_password_reset

logger = logging.getLogger(__name__)

FORGOT_SENT_MESSAGE = "If an account exists for that email, a password reset link has been sent."


def request_reset(segment: str, email: str, client: Optional[ApiClient] = None) -> str:
    seg = get_segment(segment)
    client = client or ApiClient(seg)
    response = client.post(FORGOT_PASSWORD_ENDPOINTS[seg.name], {"email": email.strip().lower()},
                           authenticated=False)
    logger.info("%s password reset requested", seg.name)
    return success_message(response, FORGOT_SENT_MESSAGE)


def reset_password(segment: str, token: str, new_password: str, confirm_password: str,
                   client: Optional[ApiClient] = None) -> str:
    """Raises ValueError for a form problem, ApiError when the backend refuses the token."""
    seg = get_segment(segment)
    if seg.name not in RESET_PASSWORD_ENDPOINTS:
        raise ValueError(f"{seg.label} accounts cannot reset passwords here")
    errors = validate_password_reset({"token": token, "new_password": new_password,
                                      "confirm_password": confirm_password})
    if errors:
        raise ValueError(next(iter(errors.values())))
    client = client or ApiClient(seg)
    response = client.post(
        RESET_PASSWORD_ENDPOINTS[seg.name],
        {"token": token, "new_password": new_password, "confirm_password": confirm_password},
        authenticated=False,
    )
    logger.info("%s password reset completed", seg.name)
    return success_message(response, "Password reset successfully. Please log in.")


def _render_forgot(segment: str) -> None:
    seg = get_segment(segment)
    hide_sidebar()
    page_header("Forgot Password", f"{seg.label} account")
    with st.form(f"{seg.name}_forgot"):
        email = st.text_input("Email")
        submitted = st.form_submit_button("Send reset link", type="primary")
    if submitted:
        if not is_valid_email(email):
            st.error("Enter a valid email address")
        else:
            try:
                st.success(request_reset(seg, email))
            except ApiError as e:
                show_api_error(e, "Could not send reset email")
    if seg.name in RESET_PASSWORD_ENDPOINTS:
        st.caption("Already have a reset token? Use the link in the email.")
    if st.button("Back to login", key=f"{seg.name}_forgot__back"):
        navigate_to_login(seg)


def _render_reset(segment: str) -> None:
    seg = get_segment(segment)
    hide_sidebar()
    page_header("Reset Password", f"{seg.label} account")
    token = st.query_params.get("token", "")
    with st.form(f"{seg.name}_reset"):
        token = st.text_input("Reset token", value=token)
        new_password = st.text_input("New password", type="password")
        confirm = st.text_input("Confirm new password", type="password")
        submitted = st.form_submit_button("Reset password", type="primary")
    if not submitted:
        return
    try:
        message = reset_password(seg, token.strip(), new_password, confirm)
    except ValueError as e:
        show_field_errors({"password": str(e)})
        return
    except ApiError as e:
        show_api_error(e, "Password reset failed")
        return
    flash("success", message)
    navigate_to_login(seg)


def forgot_password_page(segment: str) -> Callable[[], None]:
    def render() -> None:
        _render_forgot(segment)
    render.__name__ = f"{segment}_forgot_password"
    return render


def reset_password_page(segment: str) -> Callable[[], None]:
    def render() -> None:
        _render_reset(segment)
    render.__name__ = f"{segment}_reset_password"
    return render
