# core/session_store.py
# -------------------------------------------------------------------
# Per-session auth keys for the three portals.
# In the app the store is st.session_state; tests pass a plain dict.
# -------------------------------------------------------------------
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, MutableMapping, Optional, Tuple

logger = logging.getLogger(__name__)

Store = MutableMapping[str, Any]

USER_TYPE_KEY = "user_type"
REDIRECT_AFTER_LOGIN_KEY = "redirect_after_login"
AUTH_REDIRECT_KEY = "auth_redirect"
API_ENVIRONMENT_KEY = "api_environment"


@dataclass(frozen=True)
class Segment:
    name: str                 # "school" | "staff" | "parent"
    label: str
    token_key: str
    info_key: str
    login_route: str          # nav_registry route key
    home_route: str
    extra_keys: Tuple[str, ...] = ()


SCHOOL = Segment(
    name="school",
    label="School",
    token_key="access_token",
    info_key="school_info",
    login_route="school_login",
    home_route="school_dashboard",
    extra_keys=("refresh_token",),
)
STAFF = Segment(
    name="staff",
    label="Staff",
    token_key="staff_access_token",
    info_key="staff_info",
    login_route="staff_login",
    home_route="staff_dashboard",
)
PARENT = Segment(
    name="parent",
    label="Parent",
    token_key="parent_access_token",
    info_key="parent_info",
    login_route="parent_login",
    home_route="parent_dashboard",
)

SEGMENTS: Dict[str, Segment] = {s.name: s for s in (SCHOOL, STAFF, PARENT)}


def get_segment(segment: str | Segment) -> Segment:
    if isinstance(segment, Segment):
        return segment
    try:
        return SEGMENTS[segment]
    except KeyError:
        raise ValueError(f"Unknown user segment: {segment!r}") from None


def default_store() -> Store:
    import streamlit as st
    return st.session_state


def _resolve(store: Optional[Store]) -> Store:
    return default_store() if store is None else store


def get_token(segment: str | Segment, store: Optional[Store] = None) -> Optional[str]:
    seg = get_segment(segment)
    token = _resolve(store).get(seg.token_key)
    return token or None


def get_info(segment: str | Segment, store: Optional[Store] = None) -> Dict[str, Any]:
    seg = get_segment(segment)
    info = _resolve(store).get(seg.info_key)
    return dict(info) if isinstance(info, dict) else {}


def save_login(
    segment: str | Segment,
    token: str,
    info: Dict[str, Any],
    store: Optional[Store] = None,
) -> None:
    seg = get_segment(segment)
    s = _resolve(store)
    s[seg.token_key] = token
    s[seg.info_key] = dict(info or {})
    s[USER_TYPE_KEY] = seg.name


def clear(segment: str | Segment, store: Optional[Store] = None) -> None:
    """Remove every key the segment owns. Missing keys are ignored."""
    seg = get_segment(segment)
    s = _resolve(store)
    for key in (seg.token_key, seg.info_key, *seg.extra_keys):
        if key in s:
            del s[key]
    if s.get(USER_TYPE_KEY) == seg.name:
        del s[USER_TYPE_KEY]
    logger.info("Cleared %s session keys", seg.name)


def is_authenticated(segment: str | Segment, store: Optional[Store] = None) -> bool:
    seg = get_segment(segment)
    s = _resolve(store)
    return bool(s.get(seg.token_key)) and bool(s.get(seg.info_key))


def authenticated_segments(store: Optional[Store] = None) -> list[Segment]:
    s = _resolve(store)
    return [seg for seg in SEGMENTS.values() if is_authenticated(seg, s)]


def acting_segment(store: Optional[Store] = None) -> str:
    """
    Segment whose token the shared school-data screens (subjects,
    students) send: staff when a staff member signed in last, else school.
    """
    return STAFF.name if _resolve(store).get(USER_TYPE_KEY) == STAFF.name else SCHOOL.name
