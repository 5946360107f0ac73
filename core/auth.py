# core/auth.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from core.api import ApiClient, ApiError
from core.session_store import (
    AUTH_REDIRECT_KEY,
    Segment,
    Store,
    clear,
    get_info,
    get_segment,
    get_token,
    save_login,
)

logger = logging.getLogger(__name__)

# segment -> (endpoint, key of the user object in the login response)
LOGIN_ENDPOINTS: Dict[str, tuple[str, str]] = {
    "school": ("/api/schools/login/", "school"),
    "staff": ("/api/staff/auth/login/", "staff"),
    "parent": ("/api/parents/login/", "parent"),
}

VERIFY_ENDPOINTS: Dict[str, str] = {
    "staff": "/api/staff/auth/verify_token/",
    "parent": "/api/parents/verify_token/",
}

REGISTER_ENDPOINTS: Dict[str, str] = {
    "school": "/api/schools/",
    "staff": "/api/staff/auth/register/",
    "parent": "/api/parents/register/",
}

FORGOT_PASSWORD_ENDPOINTS: Dict[str, str] = {
    "school": "/api/schools/forgot_password/",
    "staff": "/api/staff/auth/forgot_password/",
    "parent": "/api/parents/forgot-password/",
}

RESET_PASSWORD_ENDPOINTS: Dict[str, str] = {
    "school": "/api/schools/reset_password/",
    "staff": "/api/staff/auth/reset_password/",
}


def login(
    segment: str | Segment,
    email: str,
    password: str,
    client: Optional[ApiClient] = None,
    store: Optional[Store] = None,
) -> Dict[str, Any]:
    """
    Authenticate against the segment's login endpoint and persist the
    token and user info in the session store.

    Returns the user info dict. Raises ApiError on bad credentials or
    an unusable response.
    """
    seg = get_segment(segment)
    client = client or ApiClient(seg, store=store)
    endpoint, user_key = LOGIN_ENDPOINTS[seg.name]

    payload = client.post(
        endpoint,
        {"email": (email or "").strip().lower(), "password": password},
        authenticated=False,
    )
    token = payload.get("access_token") if isinstance(payload, dict) else None
    if not token:
        raise ApiError("Login response did not include an access token", payload=payload)

    info = payload.get(user_key) or {}
    s = client.store
    save_login(seg, token, info, s)
    if "refresh_token" in seg.extra_keys and payload.get("refresh_token"):
        s["refresh_token"] = payload["refresh_token"]
    if s.get(AUTH_REDIRECT_KEY) == seg.name:
        del s[AUTH_REDIRECT_KEY]

    logger.info("%s login succeeded for %s", seg.name, info.get("email") or email)
    return info


def logout(segment: str | Segment, store: Optional[Store] = None) -> None:
    clear(segment, store)


def verify_token(segment: str | Segment, client: Optional[ApiClient] = None,
                 store: Optional[Store] = None) -> bool:
    """
    Ask the backend whether the stored token is still valid. Segments
    without a verify endpoint (school) only check that a token exists.
    An invalid token clears the segment's keys.
    """
    seg = get_segment(segment)
    client = client or ApiClient(seg, store=store)
    if not get_token(seg, client.store):
        return False
    endpoint = VERIFY_ENDPOINTS.get(seg.name)
    if endpoint is None:
        return True
    try:
        client.post(endpoint, {})
    except ApiError as e:
        logger.info("%s token verification failed: %s", seg.name, e.message)
        clear(seg, client.store)
        return False
    return True


def display_name(segment: str | Segment, info: Dict[str, Any]) -> str:
    seg = get_segment(segment)
    if seg.name == "school":
        name = info.get("name") or info.get("school_name")
    else:
        name = info.get("full_name") or " ".join(
            p for p in (info.get("first_name"), info.get("last_name")) if p
        )
    return (name or info.get("email") or seg.label).strip()


def current_user(segment: str | Segment, store: Optional[Store] = None) -> Dict[str, Any]:
    """User info for the segment plus `display_name` and `user_type`, or {} when signed out."""
    seg = get_segment(segment)
    if not get_token(seg, store):
        return {}
    info = get_info(seg, store)
    if not info:
        return {}
    return {**info, "display_name": display_name(seg, info), "user_type": seg.name}
