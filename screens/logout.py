# screens/logout.py
from __future__ import annotations

from typing import Callable

import streamlit as st

from core.auth import logout
from core.forms import flash
from core.navigation import navigate_to_login
from core.session_store import get_segment, is_authenticated
from core.ui import hide_sidebar


def _render(segment: str) -> None:
    seg = get_segment(segment)
    hide_sidebar()
    st.title("🚪 Logout")

    if is_authenticated(seg):
        logout(seg)
        flash("success", "You have been logged out successfully.")
        navigate_to_login(seg)

    st.info("You are not signed in.")
    if st.button("Go to Login Page", type="primary", key=f"{seg.name}_logout__login"):
        navigate_to_login(seg)


def logout_page(segment: str) -> Callable[[], None]:
    def render() -> None:
        _render(segment)
    render.__name__ = f"{segment}_logout"
    return render
