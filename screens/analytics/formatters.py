# screens/analytics/formatters.py
# -------------------------------------------------------------------
# Reshape analytics payloads into DataFrames for st.bar_chart /
# st.line_chart / st.dataframe. No statistics are computed here
# beyond rounding and percentages of a total.
# -------------------------------------------------------------------
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

PERFORMANCE_LEVELS: Tuple[Tuple[float, str], ...] = (
    (90, "Excellent"),
    (75, "Good"),
    (60, "Average"),
)
LOWEST_LEVEL = "Needs Improvement"

TREND_INDICATORS = {
    "improving": ("📈", "Improving"),
    "declining": ("📉", "Declining"),
}
STABLE_INDICATOR = ("⏺", "Stable")


def _num(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def round2(value: Any) -> float:
    """Two decimals, halves rounded up."""
    return math.floor(_num(value) * 100 + 0.5) / 100


def percent_of(count: Any, total: Any) -> int:
    """Whole-number share of `total`; 0 when the total is 0 or missing."""
    total = _num(total)
    if total <= 0:
        return 0
    return int(math.floor(_num(count) / total * 100 + 0.5))


def performance_level(score: Any) -> str:
    score = _num(score)
    for threshold, label in PERFORMANCE_LEVELS:
        if score >= threshold:
            return label
    return LOWEST_LEVEL


def trend_indicator(trend: Optional[str]) -> Tuple[str, str]:
    return TREND_INDICATORS.get((trend or "").lower(), STABLE_INDICATOR)


def subject_performance(
    subject_averages: Mapping[str, Any], pass_fail_rates: Optional[Mapping[str, Mapping[str, Any]]] = None
) -> pd.DataFrame:
    """Class view: one row per subject. A subject without rates counts as 0% pass / 100% fail."""
    rates = pass_fail_rates or {}
    rows = []
    for subject, average in (subject_averages or {}).items():
        r = rates.get(subject) or {}
        rows.append({
            "subject": subject,
            "average": round2(average),
            "pass_rate": _num(r.get("pass_rate", 0)),
            "fail_rate": _num(r.get("fail_rate", 100)),
        })
    return pd.DataFrame(rows, columns=["subject", "average", "pass_rate", "fail_rate"])


def grade_distribution(distribution: Mapping[str, Any], total_assessments: Any) -> pd.DataFrame:
    rows = [
        {"grade": grade, "count": int(_num(count)), "percentage": percent_of(count, total_assessments)}
        for grade, count in (distribution or {}).items()
    ]
    return pd.DataFrame(rows, columns=["grade", "count", "percentage"])


def quartiles(quartile_data: Mapping[str, Any], class_average: Any) -> pd.DataFrame:
    q = quartile_data or {}
    rows = [
        {"name": "Q1", "value": _num(q.get("q1")), "label": "25th Percentile"},
        {"name": "Q2 (Median)", "value": _num(q.get("q2")), "label": "50th Percentile"},
        {"name": "Q3", "value": _num(q.get("q3")), "label": "75th Percentile"},
        {"name": "Average", "value": _num(class_average), "label": "Class Average"},
    ]
    return pd.DataFrame(rows)


def class_performance(performance: Mapping[str, Mapping[str, Any]]) -> pd.DataFrame:
    """Subject view: one row per class."""
    rows = [
        {
            "class": name,
            "average": round2(data.get("average")),
            "assessments": int(_num(data.get("assessments"))),
            "pass_rate": round2(data.get("pass_rate")),
        }
        for name, data in (performance or {}).items()
    ]
    return pd.DataFrame(rows, columns=["class", "average", "assessments", "pass_rate"])


def performance_trends(trends: Mapping[str, Mapping[str, Any]]) -> pd.DataFrame:
    """Monthly averages sorted by month key (`YYYY-MM` sorts chronologically)."""
    rows = [
        {"month": month, "average": round2(data.get("average")), "assessments": int(_num(data.get("count")))}
        for month, data in (trends or {}).items()
    ]
    df = pd.DataFrame(rows, columns=["month", "average", "assessments"])
    return df.sort_values("month", kind="stable").reset_index(drop=True)


def monthly_series(points: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """`[{month, average, count?}]` lists from the statistics endpoints."""
    rows = [
        {"month": p.get("month"), "average": round2(p.get("average")), "count": int(_num(p.get("count")))}
        for p in points or []
    ]
    df = pd.DataFrame(rows, columns=["month", "average", "count"])
    return df.sort_values("month", kind="stable").reset_index(drop=True)


def named_values(data: Mapping[str, Any]) -> pd.DataFrame:
    rows = [{"name": name, "value": round2(value)} for name, value in (data or {}).items()]
    return pd.DataFrame(rows, columns=["name", "value"])


def pie_slices(data: Mapping[str, Any]) -> pd.DataFrame:
    """Each value with its share of the sum of all values."""
    total = sum(_num(v) for v in (data or {}).values())
    rows = [
        {"name": name, "value": _num(value), "percentage": percent_of(value, total)}
        for name, value in (data or {}).items()
    ]
    return pd.DataFrame(rows, columns=["name", "value", "percentage"])


def comparison(data: Mapping[str, Mapping[str, Any]], count_key: str) -> pd.DataFrame:
    """`{name: {average, <count_key>}}` from comparative_analysis, best first."""
    rows = [
        {"name": name, "average": round2(v.get("average")), count_key: int(_num(v.get(count_key)))}
        for name, v in (data or {}).items()
    ]
    df = pd.DataFrame(rows, columns=["name", "average", count_key])
    return df.sort_values("average", ascending=False, kind="stable").reset_index(drop=True)


def stream_names(streams: Iterable[Mapping[str, Any]]) -> List[str]:
    return [s.get("stream") for s in streams or [] if s.get("stream")]


def filter_streams(streams: Iterable[Mapping[str, Any]], selected: str = "all") -> List[Dict[str, Any]]:
    streams = [dict(s) for s in streams or []]
    if not selected or selected == "all":
        return streams
    return [s for s in streams if s.get("stream") == selected]


def class_rankings(streams: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Flatten the classes of the given streams, ranked by average."""
    rows = []
    for s in streams or []:
        for c in s.get("classes") or []:
            rows.append({
                "rank": c.get("rank"),
                "class_name": c.get("class_name"),
                "stream": c.get("stream") or s.get("stream"),
                "average_percentage": round2(c.get("average_percentage")),
                "total_students": int(_num(c.get("total_students"))),
            })
    df = pd.DataFrame(rows, columns=["rank", "class_name", "stream", "average_percentage", "total_students"])
    return df.sort_values("average_percentage", ascending=False, kind="stable").reset_index(drop=True)


def subject_comparison(rows: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Parent view: the student's marks against the class average per subject."""
    out = []
    for r in rows or []:
        student = _num(r.get("student_marks"))
        average = _num(r.get("class_average"))
        difference = r.get("difference")
        difference = round2(student - average if difference is None else difference)
        out.append({
            "subject": r.get("subject"),
            "student_marks": round2(student),
            "class_average": round2(average),
            "difference": difference,
            "above_average": bool(r.get("above_average", difference > 0)),
        })
    return pd.DataFrame(out, columns=["subject", "student_marks", "class_average", "difference", "above_average"])


# ─── Reports ────────────────────────────────────────────────────────

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}

LETTER_GRADES: Tuple[Tuple[float, str], ...] = (
    (90, "A+"), (80, "A"), (70, "B+"), (60, "B"), (50, "C+"), (40, "C"), (30, "D+"), (20, "D"),
)


def letter_grade(average: Any) -> str:
    average = _num(average)
    for threshold, grade in LETTER_GRADES:
        if average >= threshold:
            return grade
    return "F"


def ranked(position: Any) -> str:
    """`🥇 1` for the podium, plain number below it."""
    try:
        position = int(position)
    except (TypeError, ValueError):
        return ""
    medal = MEDALS.get(position)
    return f"{medal} {position}" if medal else str(position)


def class_heading(group: Mapping[str, Any]) -> str:
    stream = group.get("stream")
    return f"{group.get('class_name')} ({stream} Stream)" if stream else str(group.get("class_name"))


def top_students(group: Mapping[str, Any]) -> pd.DataFrame:
    """One class of `top_students_per_class`, in the server's order."""
    rows = [
        {
            "position": ranked(s.get("position")),
            "student_name": s.get("student_name"),
            "average": round2(s.get("average")),
            "total": _num(s.get("total")),
            "stream": s.get("stream"),
        }
        for s in group.get("students") or []
    ]
    return pd.DataFrame(rows, columns=["position", "student_name", "average", "total", "stream"])


def subject_champions(group: Mapping[str, Any]) -> pd.DataFrame:
    """One class of `subject_champions`: the best mark per subject."""
    rows = [
        {
            "subject": c.get("subject"),
            "student_name": c.get("student_name"),
            "stream": c.get("stream"),
            "marks": _num(c.get("marks")),
        }
        for c in group.get("champions") or []
    ]
    return pd.DataFrame(rows, columns=["subject", "student_name", "stream", "marks"])


def stream_ranking(level: Mapping[str, Any]) -> pd.DataFrame:
    """Streams of one class level, best position first, with a letter grade per average."""
    rows = [
        {
            "position": int(_num(s.get("position"))),
            "class_name": s.get("class_name"),
            "stream": s.get("stream"),
            "average": round2(s.get("average")),
            "total_students": int(_num(s.get("total_students"))),
            "grade": letter_grade(s.get("average")),
        }
        for s in level.get("streams") or []
    ]
    df = pd.DataFrame(rows, columns=["position", "class_name", "stream", "average", "total_students", "grade"])
    df = df.sort_values("position", kind="stable").reset_index(drop=True)
    df["position"] = df["position"].map(ranked)
    return df


def stream_breakdown(pie_chart_data: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Per-stream counts of top students, subject champions and classes."""
    rows = [
        {
            "stream": p.get("stream"),
            "top_students": int(_num(p.get("top_students"))),
            "subject_champions": int(_num(p.get("subject_champions"))),
            "total_classes": int(_num(p.get("total_classes"))),
        }
        for p in pie_chart_data or []
    ]
    return pd.DataFrame(rows, columns=["stream", "top_students", "subject_champions", "total_classes"])


REPORT_SECTIONS = ("top_students_per_class", "subject_champions", "stream_rankings", "pie_chart_data")


def has_reports(data: Optional[Mapping[str, Any]]) -> bool:
    return any((data or {}).get(k) for k in REPORT_SECTIONS)
