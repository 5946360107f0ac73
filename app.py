# app.py
from __future__ import annotations
import logging

import streamlit as st

from core.settings import get_settings
from core.logging_setup import configure_logging
from core.session_store import authenticated_segments, get_info
from core.auth import display_name
from core.navigation import register_pages, pending_auth_redirect
from core.nav_registry import SECTIONS, DEFAULT_ROUTE_KEY, visible_sections
from core.api import AUTH_FAILED_MESSAGE
from core.forms import flash
from core.ui import render_footer_global
from screens.environment import render_switcher

logger = logging.getLogger(__name__)


def _build_pages() -> dict:
    """One st.Page per route, keyed by route key (url_path)."""
    pages = {}
    for section in SECTIONS:
        for route in section.routes:
            pages[route.key] = st.Page(
                route.render,
                title=route.label,
                icon=route.icon,
                url_path=route.key,
                default=(route.key == DEFAULT_ROUTE_KEY),
            )
    return pages


def _render_sidebar(pages: dict) -> None:
    with st.sidebar:
        signed_in = authenticated_segments()
        if signed_in:
            for seg in signed_in:
                st.caption(f"{seg.label}: **{display_name(seg, get_info(seg))}**")
            st.divider()

        for section in visible_sections(st.session_state):
            st.markdown(f"**{section.title}**")
            for route in section.routes:
                st.page_link(pages[route.key], label=route.label, icon=route.icon)

        st.divider()
        render_switcher()


def main():
    configure_logging()
    settings = get_settings()
    st.set_page_config(page_title=settings.app.name, page_icon="🎓", layout="wide")

    pages = _build_pages()
    register_pages(pages)

    # A 401 on the previous run cleared the tokens; land on that portal's login.
    target = pending_auth_redirect()
    if target:
        logger.info("Redirecting to %s after authentication failure", target)
        flash("error", AUTH_FAILED_MESSAGE)
        st.switch_page(pages[target])

    nav = st.navigation(list(pages.values()), position="hidden")
    _render_sidebar(pages)
    nav.run()
    render_footer_global()


if __name__ == "__main__":
    main()
