# screens/login.py
from __future__ import annotations

import logging
from typing import Callable

import streamlit as st

from core.api import ApiError
from core.auth import current_user, login
from core.forms import flash, render_flash, show_api_error
from core.navigation import navigate_to, post_login_route
from core.session_store import get_segment, is_authenticated
from core.ui import hide_sidebar, page_header

logger = logging.getLogger(__name__)

# segment -> (page title, registration route, forgot-password route)
LOGIN_SCREENS = {
    "school": ("🏫 School Login", "school_registration", "school_forgot_password"),
    "staff": ("👩‍🏫 Staff Login", "staff_registration", "staff_forgot_password"),
    "parent": ("👪 Parent Login", "parent_registration", "parent_forgot_password"),
}


def _render(segment: str) -> None:
    seg = get_segment(segment)
    title, register_route, forgot_route = LOGIN_SCREENS[seg.name]
    hide_sidebar()
    page_header(title, "Sign in to continue")
    render_flash()

    if is_authenticated(seg):
        user = current_user(seg)
        st.success(f"You are signed in as {user.get('display_name')}.")
        if st.button("Continue", type="primary", key=f"{seg.name}_login__continue"):
            navigate_to(post_login_route(seg))
        return

    with st.form(f"{seg.name}_login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", type="primary", use_container_width=True)

    if submitted:
        if not email.strip() or not password:
            st.error("Please enter your email and password.")
        else:
            with st.spinner("Signing in..."):
                try:
                    info = login(seg, email, password)
                except ApiError as e:
                    show_api_error(e, "Login failed")
                    info = None
            if info is not None:
                flash("success", f"Welcome back, {current_user(seg).get('display_name')}!")
                navigate_to(post_login_route(seg))

    c1, c2, c3 = st.columns(3)
    if c1.button("Forgot password?", key=f"{seg.name}_login__forgot"):
        navigate_to(forgot_route)
    if c2.button("Create an account", key=f"{seg.name}_login__register"):
        navigate_to(register_route)
    if c3.button("🏠 Home", key=f"{seg.name}_login__home"):
        navigate_to("home")


def login_page(segment: str) -> Callable[[], None]:
    """Page callable for st.Page."""
    def render() -> None:
        _render(segment)
    render.__name__ = f"{segment}_login"
    return render
