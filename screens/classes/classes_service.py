# screens/classes/classes_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from core.api import ApiClient
from core.pagination import DEFAULT_PAGE_SIZE, Page
from core.session_store import Store

log = logging.getLogger(__name__)

CLASSES_ENDPOINT = "/api/classes/"
STATS_ENDPOINT = "/api/classes/stats/"
UPLOAD_ENDPOINT = "/api/classes/upload-csv/"
UPLOAD_FIELD = "csv_file"
DEFAULT_CAPACITY = 30


def _client(client: Optional[ApiClient], store: Optional[Store]) -> ApiClient:
    return client or ApiClient("school", store=store)


def class_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """Trimmed create/update body; capacity is sent as an int."""
    return {
        "class_name": (data.get("class_name") or "").strip(),
        "class_code": (data.get("class_code") or "").strip(),
        "description": (data.get("description") or "").strip(),
        "capacity": int(data.get("capacity") or DEFAULT_CAPACITY),
    }


def fetch_classes(
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    client: Optional[ApiClient] = None,
    store: Optional[Store] = None,
) -> Page:
    data = _client(client, store).get(CLASSES_ENDPOINT, params={"page": page, "page_size": page_size})
    return Page.from_response(data)


def create_class(data: Dict[str, Any], client: Optional[ApiClient] = None, store: Optional[Store] = None) -> Dict[str, Any]:
    payload = class_payload(data)
    created = _client(client, store).post(CLASSES_ENDPOINT, payload)
    log.info("Created class %s", payload["class_code"])
    return created


def update_class(
    class_id: Any, changes: Dict[str, Any], client: Optional[ApiClient] = None, store: Optional[Store] = None
) -> Dict[str, Any]:
    return _client(client, store).patch(f"{CLASSES_ENDPOINT}{class_id}/", changes)


def delete_class(class_id: Any, client: Optional[ApiClient] = None, store: Optional[Store] = None) -> None:
    _client(client, store).delete(f"{CLASSES_ENDPOINT}{class_id}/")
    log.info("Deleted class %s", class_id)


def upload_csv(
    filename: str, content: bytes, client: Optional[ApiClient] = None, store: Optional[Store] = None
) -> Dict[str, Any]:
    return _client(client, store).upload(UPLOAD_ENDPOINT, UPLOAD_FIELD, filename, content)


def fetch_stats(client: Optional[ApiClient] = None, store: Optional[Store] = None) -> Dict[str, Any]:
    """`{total_classes, active_classes, inactive_classes}` from the `data` envelope."""
    data = _client(client, store).get(STATS_ENDPOINT)
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    return {}
