from __future__ import annotations
import logging
from typing import Dict, Optional

import streamlit as st

from core.api import ApiError, AuthExpired
from core.settings import get_settings

logger = logging.getLogger(__name__)

FLASH_KEY = "_flash_message"


def success(msg: str): st.success(msg)
def warn(msg: str): st.warning(msg)
def info(msg: str): st.info(msg)
def error(msg: str): st.error(msg)


def flash(kind: str, msg: str) -> None:
    """Queue a banner for the next run (survives st.rerun / st.switch_page)."""
    st.session_state[FLASH_KEY] = (kind, msg)


def render_flash() -> None:
    item = st.session_state.pop(FLASH_KEY, None)
    if not item:
        return
    kind, msg = item
    {"success": success, "warning": warn, "info": info}.get(kind, error)(msg)


def show_field_errors(errors: Dict[str, str]) -> None:
    for field, msg in errors.items():
        st.error(f"**{field.replace('_', ' ').title()}**: {msg}")


def show_api_error(e: ApiError, fallback: Optional[str] = None) -> None:
    """Inline banner for a failed request. A 401 sends the user to the right login page."""
    if isinstance(e, AuthExpired):
        from core.navigation import navigate_to, pending_auth_redirect
        flash("error", e.message)
        target = pending_auth_redirect()
        if target:
            navigate_to(target)
        st.error(e.message)
        return
    st.error(e.message or fallback or "Request failed")
    fields = e.field_messages()
    if fields:
        with st.expander("Details"):
            for field, msg in fields.items():
                st.write(f"- **{field}**: {msg}")


def handle_error(e: Exception, user_message: str = "An error occurred.") -> None:
    """
    Log the full exception server-side and show a friendly or
    detailed error in Streamlit based on the debug setting.
    """
    logger.error(f"{user_message}: {e}", exc_info=True)
    if get_settings().debug:
        st.error(f"{user_message}\n\n**Debug Info:**\n```\n{e}\n```")
    else:
        st.error(user_message)
