# screens/home.py
from __future__ import annotations

import streamlit as st

from core.navigation import navigate_to
from core.session_store import SEGMENTS, is_authenticated
from core.settings import get_settings

PORTALS = (
    ("school", "🏫 Schools", "Register your school, manage staff, classes, subjects and students.",
     "school_registration"),
    ("staff", "👩‍🏫 Staff", "Record marks and follow class and subject performance.", "staff_registration"),
    ("parent", "👪 Parents", "Follow your child's results and pay fees.", "parent_registration"),
)


def render() -> None:
    st.title(f"🎓 {get_settings().app.name}")
    st.caption("One platform for schools, staff and parents.")

    cols = st.columns(len(PORTALS))
    for col, (segment, title, blurb, register_route) in zip(cols, PORTALS):
        seg = SEGMENTS[segment]
        with col, st.container(border=True):
            st.subheader(title)
            st.write(blurb)
            if is_authenticated(seg):
                if st.button("Open portal", key=f"home__{segment}_open", type="primary"):
                    navigate_to(seg.home_route)
            else:
                if st.button("Log in", key=f"home__{segment}_login", type="primary"):
                    navigate_to(seg.login_route)
                if st.button("Register", key=f"home__{segment}_register"):
                    navigate_to(register_route)
