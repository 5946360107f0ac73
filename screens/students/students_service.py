# screens/students/students_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from core.api import ApiClient
from core.pagination import Page
from core.session_store import Store, acting_segment

log = logging.getLogger(__name__)

STUDENTS_ENDPOINT = "/api/students/"
BULK_UPLOAD_ENDPOINT = "/api/students/bulk_upload/"
UPLOAD_FIELD = "file"

GENDERS = ("male", "female", "other")
STATUSES = ("active", "inactive", "suspended", "graduated")

# Optional fields the backend wants as null rather than ""
NULLABLE_FIELDS = (
    "date_of_birth",
    "current_class",
    "parent_guardian_name",
    "parent_guardian_phone",
    "parent_guardian_email",
    "address",
    "gender",
)


def _client(client: Optional[ApiClient], store: Optional[Store]) -> ApiClient:
    return client or ApiClient(acting_segment(store), store=store)


def student_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "full_name": (data.get("full_name") or "").strip(),
        "admission_number": (data.get("admission_number") or "").strip(),
        "admission_class": (data.get("admission_class") or "").strip(),
        "status": data.get("status") or "active",
    }
    for key in NULLABLE_FIELDS:
        value = data.get(key)
        if isinstance(value, str):
            value = value.strip()
        payload[key] = value or None
    if payload["date_of_birth"] is not None:
        payload["date_of_birth"] = str(payload["date_of_birth"])
    return payload


def fetch_students(
    params: Optional[Dict[str, Any]] = None, client: Optional[ApiClient] = None, store: Optional[Store] = None
) -> List[Dict[str, Any]]:
    data = _client(client, store).get(STUDENTS_ENDPOINT, params=params)
    return Page.from_response(data, list_key="students").results


def create_student(data: Dict[str, Any], client: Optional[ApiClient] = None, store: Optional[Store] = None) -> Dict[str, Any]:
    payload = student_payload(data)
    created = _client(client, store).post(STUDENTS_ENDPOINT, payload)
    log.info("Created student %s", payload["admission_number"])
    return created


def update_student(
    student_id: Any, data: Dict[str, Any], client: Optional[ApiClient] = None, store: Optional[Store] = None
) -> Dict[str, Any]:
    return _client(client, store).put(f"{STUDENTS_ENDPOINT}{student_id}/", student_payload(data))


def delete_student(student_id: Any, client: Optional[ApiClient] = None, store: Optional[Store] = None) -> None:
    _client(client, store).delete(f"{STUDENTS_ENDPOINT}{student_id}/")
    log.info("Deleted student %s", student_id)


def bulk_upload(
    filename: str, content: bytes, client: Optional[ApiClient] = None, store: Optional[Store] = None
) -> Dict[str, Any]:
    return _client(client, store).upload(BULK_UPLOAD_ENDPOINT, UPLOAD_FIELD, filename, content)


def student_class(student: Dict[str, Any]) -> str:
    return student.get("current_class") or student.get("admission_class") or ""


def class_options(students: Iterable[Dict[str, Any]]) -> List[str]:
    return sorted({student_class(s) for s in students} - {""})


def filter_students(
    students: Iterable[Dict[str, Any]],
    search: str = "",
    class_name: str = "",
    status: str = "",
) -> List[Dict[str, Any]]:
    """Search on name / admission number / guardian name; exact class and status match."""
    q = (search or "").strip().lower()
    out = []
    for s in students:
        haystack = " ".join(
            str(s.get(f) or "") for f in ("full_name", "admission_number", "parent_guardian_name")
        ).lower()
        if q and q not in haystack:
            continue
        if class_name and student_class(s) != class_name:
            continue
        if status and s.get("status") != status:
            continue
        out.append(s)
    return out
