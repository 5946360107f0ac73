# app/core/ui.py
from __future__ import annotations
import datetime
from typing import Iterable, Optional, Sequence, Tuple

import streamlit as st

from core.settings import get_settings
from core.api import active_environment


def hide_sidebar():
    st.markdown(
        """
        <style>
            section[data-testid="stSidebar"] {
                display: none;
            }
        </style>
        """,
        unsafe_allow_html=True,
    )


def page_header(title: str, subtitle: Optional[str] = None):
    st.title(title)
    if subtitle:
        st.caption(subtitle)


def stat_cards(items: Sequence[Tuple[str, object]], columns: Optional[int] = None):
    """Row of st.metric cards from (label, value) pairs."""
    if not items:
        return
    cols = st.columns(columns or len(items))
    for i, (label, value) in enumerate(items):
        with cols[i % len(cols)]:
            st.metric(label, "—" if value is None else value)


def bullet_list(lines: Iterable[str]):
    st.markdown("\n".join(f"- {line}" for line in lines))


def confirm_button(label: str, key: str, prompt: str) -> bool:
    """Two-step destructive action: first click arms it, second click (Confirm) returns True."""
    armed_key = f"{key}__armed"
    if not st.session_state.get(armed_key):
        if st.button(label, key=key):
            st.session_state[armed_key] = True
            st.rerun()
        return False
    st.warning(prompt)
    c1, c2 = st.columns(2)
    with c1:
        if st.button("Confirm", key=f"{key}__confirm", type="primary"):
            del st.session_state[armed_key]
            return True
    with c2:
        if st.button("Cancel", key=f"{key}__cancel"):
            del st.session_state[armed_key]
            st.rerun()
    return False


def render_footer_global():
    """One footer on every page: app name, version and the API environment in use."""
    settings = get_settings()
    env = active_environment(settings)
    year = datetime.datetime.now().year
    st.markdown("---")
    st.caption(
        f"© {year} {settings.app.name} · v{settings.app.version} · "
        f"API: {env.name} ({env.base_url})"
    )
