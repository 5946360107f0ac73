# screens/parents/parents_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from core.api import ApiClient, success_message
from core.auth import REGISTER_ENDPOINTS
from core.session_store import Store

log = logging.getLogger(__name__)

DASHBOARD_ENDPOINT = "/api/parents/dashboard/"
ANALYTICS_ENDPOINT = "/api/parents/student_analytics/"

ALL = "all"
# filter name -> query parameter
ANALYTICS_FILTERS = {
    "academic_year": "academic_year",
    "term": "term",
    "exam_type": "exam_type",
    "subject": "subject",
}


def _client(client: Optional[ApiClient], store: Optional[Store]) -> ApiClient:
    return client or ApiClient("parent", store=store)


def analytics_params(filters: Dict[str, Any]) -> Dict[str, Any]:
    """Query parameters for the chosen filters; `all` and blanks are left out."""
    params = {}
    for name, param in ANALYTICS_FILTERS.items():
        value = filters.get(name)
        if value in (None, "", ALL):
            continue
        params[param] = value
    return params


def register_parent(data: Dict[str, Any], client: Optional[ApiClient] = None,
                    store: Optional[Store] = None) -> str:
    """Create a parent account linked to a student. Returns the backend's message."""
    payload = {
        "full_name": (data.get("full_name") or "").strip(),
        "email": (data.get("email") or "").strip().lower(),
        "phone_number": (data.get("phone_number") or "").strip(),
        "student_name": (data.get("student_name") or "").strip(),
        "admission_number": (data.get("admission_number") or "").strip(),
        "password": data.get("password") or "",
        "confirm_password": data.get("confirm_password") or "",
    }
    response = _client(client, store).post(REGISTER_ENDPOINTS["parent"], payload, authenticated=False)
    log.info("Registered parent account %s", payload["email"])
    return success_message(response, "Registration successful. You can now log in.")


def fetch_dashboard(client: Optional[ApiClient] = None, store: Optional[Store] = None) -> Dict[str, Any]:
    """`{parent, student, school, dashboard_stats}`."""
    data = _client(client, store).get(DASHBOARD_ENDPOINT)
    return data if isinstance(data, dict) else {}


def fetch_student_analytics(filters: Optional[Dict[str, Any]] = None, client: Optional[ApiClient] = None,
                            store: Optional[Store] = None) -> Dict[str, Any]:
    data = _client(client, store).get(ANALYTICS_ENDPOINT, params=analytics_params(filters or {}))
    return data if isinstance(data, dict) else {}
