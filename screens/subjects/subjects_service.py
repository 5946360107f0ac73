# screens/subjects/subjects_service.py
"""
REST calls for subjects. The list endpoint may answer with a DRF page
or a bare list; both come back as a core.pagination.Page.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from core.api import ApiClient
from core.pagination import DEFAULT_PAGE_SIZE, Page
from core.session_store import Store, acting_segment

log = logging.getLogger(__name__)

SUBJECTS_ENDPOINT = "/api/subjects/"
STATS_ENDPOINT = "/api/subjects/stats/"
UPLOAD_ENDPOINT = "/api/subjects/upload-csv/"
UPLOAD_FIELD = "csv_file"


def _client(client: Optional[ApiClient], store: Optional[Store]) -> ApiClient:
    return client or ApiClient(acting_segment(store), store=store)


def fetch_subjects(
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    client: Optional[ApiClient] = None,
    store: Optional[Store] = None,
) -> Page:
    data = _client(client, store).get(SUBJECTS_ENDPOINT, params={"page": page, "page_size": page_size})
    result = Page.from_response(data)
    log.debug("Loaded %d of %d subjects (page %d)", len(result.results), result.count, page)
    return result


def fetch_subject(subject_id: Any, client: Optional[ApiClient] = None, store: Optional[Store] = None) -> Dict[str, Any]:
    return _client(client, store).get(f"{SUBJECTS_ENDPOINT}{subject_id}/")


def create_subject(data: Dict[str, Any], client: Optional[ApiClient] = None, store: Optional[Store] = None) -> Dict[str, Any]:
    payload = {
        "subject_name": (data.get("subject_name") or "").strip(),
        "subject_code": (data.get("subject_code") or "").strip(),
        "description": (data.get("description") or "").strip(),
    }
    created = _client(client, store).post(SUBJECTS_ENDPOINT, payload)
    log.info("Created subject %s", payload["subject_code"])
    return created


def update_subject(
    subject_id: Any, changes: Dict[str, Any], client: Optional[ApiClient] = None, store: Optional[Store] = None
) -> Dict[str, Any]:
    return _client(client, store).patch(f"{SUBJECTS_ENDPOINT}{subject_id}/", changes)


def delete_subject(subject_id: Any, client: Optional[ApiClient] = None, store: Optional[Store] = None) -> None:
    _client(client, store).delete(f"{SUBJECTS_ENDPOINT}{subject_id}/")
    log.info("Deleted subject %s", subject_id)


def upload_csv(
    filename: str, content: bytes, client: Optional[ApiClient] = None, store: Optional[Store] = None
) -> Dict[str, Any]:
    return _client(client, store).upload(UPLOAD_ENDPOINT, UPLOAD_FIELD, filename, content)


def fetch_stats(client: Optional[ApiClient] = None, store: Optional[Store] = None) -> Dict[str, Any]:
    """`{total_subjects, active_subjects, inactive_subjects}`; {} when the call reports failure."""
    data = _client(client, store).get(STATS_ENDPOINT)
    if isinstance(data, dict) and data.get("success") and isinstance(data.get("data"), dict):
        return data["data"]
    if isinstance(data, dict) and "total_subjects" in data:
        return data
    return {}
