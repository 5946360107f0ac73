# app/core/navigation.py
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import streamlit as st

from core.session_store import (
    AUTH_REDIRECT_KEY,
    REDIRECT_AFTER_LOGIN_KEY,
    Segment,
    Store,
    get_segment,
    is_authenticated,
    _resolve,
)

logger = logging.getLogger(__name__)

# route key -> st.Page, refreshed by app.py on every run
_PAGES: Dict[str, Any] = {}


def register_pages(pages: Dict[str, Any]) -> None:
    _PAGES.clear()
    _PAGES.update(pages)


def access_redirect(segment: str | Segment, route_key: str, store: Optional[Store] = None) -> Optional[str]:
    """
    Login route the visitor must pass through before `route_key`, or None
    when the segment is signed in. Remembers `route_key` so login can
    send the user back to it.
    """
    seg = get_segment(segment)
    s = _resolve(store)
    if is_authenticated(seg, s):
        return None
    s[REDIRECT_AFTER_LOGIN_KEY] = {"segment": seg.name, "route": route_key}
    return seg.login_route


def pending_auth_redirect(store: Optional[Store] = None) -> Optional[str]:
    """Login route requested by a 401 earlier in the session. Consumes the flag."""
    s = _resolve(store)
    name = s.get(AUTH_REDIRECT_KEY)
    if not name:
        return None
    del s[AUTH_REDIRECT_KEY]
    return get_segment(name).login_route


def post_login_route(segment: str | Segment, store: Optional[Store] = None) -> str:
    """Where to land after a successful login: the remembered page, else the portal home."""
    seg = get_segment(segment)
    s = _resolve(store)
    target = s.get(REDIRECT_AFTER_LOGIN_KEY)
    if isinstance(target, dict) and target.get("segment") == seg.name:
        del s[REDIRECT_AFTER_LOGIN_KEY]
        return target.get("route") or seg.home_route
    return seg.home_route


def navigate_to(route_key: str):
    page = _PAGES.get(route_key)
    if page is None:
        logger.warning("No page registered for route %r", route_key)
        st.rerun()
    st.switch_page(page)


def navigate_to_login(segment: str | Segment):
    navigate_to(get_segment(segment).login_route)


def navigate_to_logout(segment: str | Segment):
    navigate_to(f"{get_segment(segment).name}_logout")


def require_segment(segment: str | Segment, route_key: str) -> None:
    """Route guard: stop rendering and go to the login page when signed out."""
    target = access_redirect(segment, route_key)
    if target:
        st.warning("Please log in to view this page.")
        navigate_to(target)
        st.stop()
