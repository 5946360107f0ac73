# core/logging_setup.py
from __future__ import annotations
import logging
from typing import Optional

from core.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
NOISY_HTTP_LOGGERS = ("httpx", "httpcore")

_configured = False


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging once per process. Streamlit reruns call this freely."""
    global _configured
    if _configured:
        return
    settings = settings or get_settings()
    level = getattr(logging, settings.logging.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # httpx/httpcore stay at WARNING unless http_client_debug is set.
    if not settings.logging.http_client_debug:
        for name in NOISY_HTTP_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    _configured = True
