# screens/staff/staff_service.py
"""Staff accounts of the signed-in school (school token)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.api import ApiClient, success_message
from core.session_store import Store

log = logging.getLogger(__name__)

STAFF_ENDPOINT = "/api/schools/staff/"


@dataclass
class StaffRoster:
    staff: List[Dict[str, Any]] = field(default_factory=list)
    school: Dict[str, Any] = field(default_factory=dict)
    total_count: int = 0

    def active_count(self) -> int:
        return sum(1 for s in self.staff if s.get("is_active"))

    def role_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for s in self.staff:
            role = s.get("role") or "other"
            counts[role] = counts.get(role, 0) + 1
        return counts


def _client(client: Optional[ApiClient], store: Optional[Store]) -> ApiClient:
    return client or ApiClient("school", store=store)


def fetch_staff(client: Optional[ApiClient] = None, store: Optional[Store] = None) -> StaffRoster:
    data = _client(client, store).get(STAFF_ENDPOINT)
    if not isinstance(data, dict):
        return StaffRoster()
    staff = list(data.get("staff") or [])
    return StaffRoster(
        staff=staff,
        school=data.get("school") or {},
        total_count=int(data.get("total_count") or len(staff)),
    )


def add_staff(data: Dict[str, Any], client: Optional[ApiClient] = None, store: Optional[Store] = None) -> str:
    """Create a staff account. Returns the backend's confirmation message."""
    payload = {
        "email": (data.get("email") or "").strip().lower(),
        "role": data.get("role") or "teacher",
        "first_name": (data.get("first_name") or "").strip(),
        "last_name": (data.get("last_name") or "").strip(),
    }
    response = _client(client, store).post(STAFF_ENDPOINT, payload)
    log.info("Added staff member %s as %s", payload["email"], payload["role"])
    return success_message(response, "Staff member added successfully")


def remove_staff(staff_id: Any, client: Optional[ApiClient] = None, store: Optional[Store] = None) -> str:
    response = _client(client, store).delete(f"{STAFF_ENDPOINT}{staff_id}/")
    log.info("Removed staff member %s", staff_id)
    return success_message(response, "Staff member removed successfully")
