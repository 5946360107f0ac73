# screens/environment.py
from __future__ import annotations

import logging

import streamlit as st

from core.api import active_environment, check_health
from core.session_store import API_ENVIRONMENT_KEY
from core.settings import get_settings
from core.ui import page_header

logger = logging.getLogger(__name__)

ROUTE_KEY = "environment"
SIDEBAR_SWITCHER_KEY = "environment_switcher"
PAGE_SWITCHER_KEY = "environment__page_switcher"


def _switch_environment(key: str) -> None:
    chosen = st.session_state[key]
    st.session_state[API_ENVIRONMENT_KEY] = chosen
    env = get_settings().api.environments[chosen]
    logger.info("Environment switched to %s (%s)", chosen, env.base_url)


def render_switcher(key: str = SIDEBAR_SWITCHER_KEY) -> None:
    """Selector for the API environment used by this session.

    Several switchers may be on screen at once (sidebar and the Environment
    page), so each needs its own ``key``. The widget value is re-synced from
    the session every run so the switchers never disagree.
    """
    settings = get_settings()
    names = settings.environment_names()
    current = active_environment(settings)
    current_name = next((n for n in names if settings.api.environments[n] == current), names[0])
    st.session_state[key] = current_name
    st.selectbox(
        "API environment",
        names,
        format_func=lambda n: settings.api.environments[n].name,
        key=key,
        on_change=_switch_environment,
        args=(key,),
    )


def render() -> None:
    page_header("Environment", "Which backend this session talks to")
    settings = get_settings()
    env = active_environment(settings)

    st.json({
        "name": env.name,
        "base_url": env.base_url,
        "timeout_ms": env.timeout_ms,
        "app": settings.app.name,
        "version": settings.app.version,
    })
    render_switcher(PAGE_SWITCHER_KEY)

    if st.button("Check connection", type="primary"):
        with st.spinner(f"Contacting {env.base_url}..."):
            result = check_health(env.base_url, timeout=min(env.timeout_seconds, 5.0))
        if result["reachable"]:
            st.success(f"✅ Connected (HTTP {result['status_code']}, {result['latency_ms']} ms)")
        else:
            st.error(f"❌ Disconnected: {result['error']}")
