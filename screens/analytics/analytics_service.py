# screens/analytics/analytics_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from core.api import ApiClient, ApiError
from core.session_store import Store

log = logging.getLogger(__name__)

CLASS_ANALYTICS_ENDPOINT = "/api/input-marks/class-analytics/"
SUBJECT_ANALYTICS_ENDPOINT = "/api/input-marks/subject-analytics/"
STUDENT_ANALYTICS_ENDPOINT = "/api/input-marks/student-analytics/"
SCHOOL_ANALYTICS_ENDPOINT = "/api/input-marks/school-analytics/"
DASHBOARD_SUMMARY_ENDPOINT = "/api/statistics/dashboard_summary/"
PERFORMANCE_METRICS_ENDPOINT = "/api/statistics/performance_metrics/"
COMPARATIVE_ANALYSIS_ENDPOINT = "/api/statistics/comparative_analysis/"
REPORTS_DATA_ENDPOINT = "/api/input-marks/reports-data/"

DEFAULT_TERM = "1"
DEFAULT_EXAM_TYPE = "exam_1"


def _get(segment: str, endpoint: str, params: Optional[Dict[str, Any]],
         client: Optional[ApiClient], store: Optional[Store]) -> Dict[str, Any]:
    data = (client or ApiClient(segment, store=store)).get(endpoint, params=params)
    return data if isinstance(data, dict) else {}


def exam_filters(term: Optional[str], academic_year: Optional[str], exam_type: Optional[str]) -> Dict[str, Any]:
    return {"term": term, "academic_year": academic_year, "exam_type": exam_type}


def fetch_class_analytics(
    class_id: Any,
    term: Optional[str] = DEFAULT_TERM,
    academic_year: Optional[str] = None,
    exam_type: Optional[str] = DEFAULT_EXAM_TYPE,
    client: Optional[ApiClient] = None,
    store: Optional[Store] = None,
) -> Dict[str, Any]:
    params = {"class_id": class_id, **exam_filters(term, academic_year, exam_type)}
    return _get("staff", CLASS_ANALYTICS_ENDPOINT, params, client, store)


def fetch_subject_analytics(
    subject_id: Any,
    term: Optional[str] = DEFAULT_TERM,
    academic_year: Optional[str] = None,
    exam_type: Optional[str] = DEFAULT_EXAM_TYPE,
    client: Optional[ApiClient] = None,
    store: Optional[Store] = None,
) -> Dict[str, Any]:
    params = {"subject_id": subject_id, **exam_filters(term, academic_year, exam_type)}
    return _get("staff", SUBJECT_ANALYTICS_ENDPOINT, params, client, store)


def fetch_student_analytics(
    student_id: Any,
    class_id: Any,
    term: Optional[str] = DEFAULT_TERM,
    academic_year: Optional[str] = None,
    exam_type: Optional[str] = DEFAULT_EXAM_TYPE,
    client: Optional[ApiClient] = None,
    store: Optional[Store] = None,
) -> Dict[str, Any]:
    """Raises ValueError unless both a student and a class are chosen."""
    if not student_id or not class_id:
        raise ValueError("Please select both a class and a student to view statistics")
    params = {"student_id": student_id, "class_id": class_id, **exam_filters(term, academic_year, exam_type)}
    return _get("staff", STUDENT_ANALYTICS_ENDPOINT, params, client, store)


def fetch_school_analytics(
    term: Optional[str] = DEFAULT_TERM,
    academic_year: Optional[str] = None,
    exam_type: Optional[str] = DEFAULT_EXAM_TYPE,
    client: Optional[ApiClient] = None,
    store: Optional[Store] = None,
) -> Dict[str, Any]:
    """School-wide overview: streams, class rankings, subject averages (school token)."""
    return _get("school", SCHOOL_ANALYTICS_ENDPOINT, exam_filters(term, academic_year, exam_type), client, store)


def fetch_statistics(client: Optional[ApiClient] = None, store: Optional[Store] = None) -> Dict[str, Dict[str, Any]]:
    """The three statistics-dashboard payloads, keyed summary / metrics / comparative."""
    client = client or ApiClient("staff", store=store)
    out = {
        "summary": _get("staff", DASHBOARD_SUMMARY_ENDPOINT, None, client, store),
        "metrics": _get("staff", PERFORMANCE_METRICS_ENDPOINT, None, client, store),
        "comparative": _get("staff", COMPARATIVE_ANALYSIS_ENDPOINT, None, client, store),
    }
    log.debug("Loaded statistics dashboard (%s)", out["summary"].get("data_freshness", "unknown freshness"))
    return out


def fetch_reports_data(
    term: Optional[str] = DEFAULT_TERM,
    academic_year: Optional[str] = None,
    exam_type: Optional[str] = DEFAULT_EXAM_TYPE,
    client: Optional[ApiClient] = None,
    store: Optional[Store] = None,
) -> Dict[str, Any]:
    """
    Reports dashboard payload: top students and subject champions per
    class, stream rankings and the per-stream counts. A reply with only a
    `message` means nothing matched the filters; an `error` key in a 200
    reply is raised as ApiError.
    """
    data = _get("staff", REPORTS_DATA_ENDPOINT, exam_filters(term, academic_year, exam_type), client, store)
    if data.get("error"):
        raise ApiError(str(data["error"]), payload=data)
    log.debug("Loaded reports data for term=%s year=%s exam=%s", term, academic_year, exam_type)
    return data
