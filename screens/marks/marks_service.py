# screens/marks/marks_service.py
"""
Service layer for exam marks (staff token).
Handles the bulk-entry payload, results filtering and grade helpers.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.api import ApiClient
from core.pagination import Page
from core.session_store import Store
from core.validation import validate_mark

log = logging.getLogger(__name__)

DROPDOWN_ENDPOINT = "/api/input-marks/dropdown-data/"
CLASS_STUDENTS_ENDPOINT = "/api/input-marks/class-students/{class_id}/"
BULK_INPUT_ENDPOINT = "/api/input-marks/results/bulk_input/"
RESULTS_ENDPOINT = "/api/input-marks/results/"
RESULTS_STATS_ENDPOINT = "/api/input-marks/results/statistics/"

EXAM_TYPE_LABELS = {"exam_1": "Exam 1", "exam_2": "Exam 2", "exam_3": "Exam 3"}
GRADE_ORDER = ("A+", "A", "B+", "B", "C+", "C", "D", "F")


@dataclass
class DropdownData:
    classes: List[Dict[str, Any]] = field(default_factory=list)
    subjects: List[Dict[str, Any]] = field(default_factory=list)
    exam_types: List[Dict[str, str]] = field(default_factory=list)
    terms: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class BulkInputResult:
    successful_records: int = 0
    total_records: int = 0
    failed_records: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Successfully processed {self.successful_records} out of {self.total_records} records"


def _client(client: Optional[ApiClient], store: Optional[Store]) -> ApiClient:
    return client or ApiClient("staff", store=store)


def current_academic_year(today: Optional[datetime.date] = None) -> str:
    """`2024-2025` style; the school year is taken to start in September."""
    today = today or datetime.date.today()
    start = today.year if today.month >= 9 else today.year - 1
    return f"{start}-{start + 1}"


def exam_type_label(value: str) -> str:
    return EXAM_TYPE_LABELS.get(value, value)


def fetch_dropdown_data(client: Optional[ApiClient] = None, store: Optional[Store] = None) -> DropdownData:
    data = _client(client, store).get(DROPDOWN_ENDPOINT)
    if not isinstance(data, dict):
        data = {}
    return DropdownData(
        classes=list(data.get("classes") or []),
        subjects=list(data.get("subjects") or []),
        exam_types=list(data.get("exam_types") or []),
        terms=list(data.get("terms") or []),
    )


def fetch_class_students(class_id: Any, client: Optional[ApiClient] = None,
                         store: Optional[Store] = None) -> List[Dict[str, Any]]:
    data = _client(client, store).get(CLASS_STUDENTS_ENDPOINT.format(class_id=class_id))
    return Page.from_response(data, list_key="students").results


def build_bulk_payload(
    class_id: Any,
    subject_id: Any,
    exam_type: str,
    term: str,
    total_marks: float,
    academic_year: str,
    marks: Mapping[Any, Any],
) -> Dict[str, Any]:
    """
    Body for bulk_input. Students without a mark are left out.
    Raises ValueError naming the first mark outside [0, total_marks].
    """
    results = []
    for student_id, value in marks.items():
        if value is None or value == "":
            continue
        problem = validate_mark(value, total_marks)
        if problem:
            raise ValueError(f"Student {student_id}: {problem}")
        results.append({"student_id": int(student_id), "marks": float(value)})
    return {
        "class_id": class_id,
        "subject_id": subject_id,
        "exam_type": exam_type,
        "term": term,
        "total_marks": total_marks,
        "academic_year": academic_year,
        "results": results,
    }


def submit_marks(payload: Dict[str, Any], client: Optional[ApiClient] = None,
                 store: Optional[Store] = None) -> BulkInputResult:
    data = _client(client, store).post(BULK_INPUT_ENDPOINT, payload)
    if not isinstance(data, dict):
        data = {}
    result = BulkInputResult(
        successful_records=int(data.get("successful_records") or 0),
        total_records=int(data.get("total_records") or len(payload.get("results") or [])),
        failed_records=int(data.get("failed_records") or 0),
        errors=[str(e) for e in data.get("errors") or []],
    )
    log.info("Bulk marks: %d/%d saved, %d failed", result.successful_records,
             result.total_records, result.failed_records)
    return result


def fetch_results(client: Optional[ApiClient] = None, store: Optional[Store] = None) -> List[Dict[str, Any]]:
    data = _client(client, store).get(RESULTS_ENDPOINT)
    return Page.from_response(data, list_key="results").results


def fetch_results_statistics(client: Optional[ApiClient] = None, store: Optional[Store] = None) -> Dict[str, Any]:
    data = _client(client, store).get(RESULTS_STATS_ENDPOINT)
    return data if isinstance(data, dict) else {}


def filter_results(
    results: Iterable[Dict[str, Any]],
    class_name: str = "",
    subject_name: str = "",
    exam_type: str = "",
    term: str = "",
    academic_year: str = "",
    search: str = "",
) -> List[Dict[str, Any]]:
    """Class/subject match by substring, the rest exactly; search on student name or admission number."""
    q = (search or "").strip().lower()
    out = []
    for r in results:
        if class_name and class_name not in (r.get("class_name") or ""):
            continue
        if subject_name and subject_name not in (r.get("subject_name") or ""):
            continue
        if exam_type and r.get("exam_type") != exam_type:
            continue
        if term and r.get("term") != term:
            continue
        if academic_year and r.get("academic_year") != academic_year:
            continue
        if q and q not in (r.get("student_name") or "").lower() \
                and q not in (r.get("student_admission_number") or "").lower():
            continue
        out.append(r)
    return out
