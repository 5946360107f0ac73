# core/csv_import.py
# -------------------------------------------------------------------
# Bulk-create by CSV: sample templates, a local preview/column check,
# and the upload panel shared by Subjects, Classes and Students.
# The backend parses and validates the file; the checks here only
# catch files that are obviously wrong before they are sent.
# -------------------------------------------------------------------
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.validation import validate_csv_upload

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CsvSpec:
    resource: str
    required_columns: Tuple[str, ...]
    optional_columns: Tuple[str, ...] = ()
    sample_rows: Tuple[Dict[str, Any], ...] = ()
    max_rows: int = 1000

    @property
    def columns(self) -> List[str]:
        return [*self.required_columns, *self.optional_columns]

    @property
    def sample_filename(self) -> str:
        return f"{self.resource}_sample.csv"


@dataclass
class UploadSummary:
    ok: bool
    message: str
    created_count: int = 0
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def sample_csv(spec: CsvSpec) -> bytes:
    df = pd.DataFrame(list(spec.sample_rows), columns=spec.columns)
    return df.to_csv(index=False).encode("utf-8")


def read_preview(content: bytes) -> pd.DataFrame:
    """Parse the upload as text columns. Raises ValueError when it is not readable CSV."""
    try:
        df = pd.read_csv(io.BytesIO(content), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ValueError(f"Could not read CSV: {e}") from e
    df.columns = [str(c).strip() for c in df.columns]
    return df


def check_columns(spec: CsvSpec, df: pd.DataFrame) -> List[str]:
    problems: List[str] = []
    missing = [c for c in spec.required_columns if c not in df.columns]
    if missing:
        problems.append(f"Missing required columns: {', '.join(missing)}")
    if df.empty:
        problems.append("The file has no data rows")
    elif len(df) > spec.max_rows:
        problems.append(f"Too many rows ({len(df)}); the limit is {spec.max_rows}")
    return problems


def _flatten(errors: Any) -> List[str]:
    if not errors:
        return []
    if isinstance(errors, dict):
        out = []
        for key, value in errors.items():
            values = value if isinstance(value, (list, tuple)) else [value]
            out.extend(f"{key}: {v}" for v in values)
        return out
    if isinstance(errors, (list, tuple)):
        return [str(e) for e in errors]
    return [str(errors)]


def summarize_upload(response: Any, resource: str) -> UploadSummary:
    """
    Normalize an upload reply. Subjects/classes answer
    `{success, message, data: {created_count}, warnings, errors}`;
    students answer `{created_count, error_count, errors}`.
    """
    if not isinstance(response, dict):
        return UploadSummary(ok=False, message="Unexpected response from server")
    data = response.get("data")
    counts = data if isinstance(data, dict) else response
    created = int(counts.get("created_count") or 0)
    errors = _flatten(response.get("errors"))
    error_count = int(response.get("error_count") or len(errors))
    ok = bool(response.get("success", True))
    message = response.get("message") or (
        f"Successfully uploaded {created} {resource}. {error_count} errors."
        if ok else "Upload failed. Please try again."
    )
    return UploadSummary(
        ok=ok,
        message=message,
        created_count=created,
        warnings=_flatten(response.get("warnings")),
        errors=errors,
    )


def render_csv_upload(
    spec: CsvSpec,
    upload: Callable[[str, bytes], Any],
    max_bytes: int,
    key: str,
) -> Optional[UploadSummary]:
    """
    File picker + template download + preview + upload button.
    Returns the UploadSummary after an upload attempt, else None.
    """
    st.markdown("**CSV format**")
    st.markdown(
        f"- Required columns: {', '.join(spec.required_columns)}\n"
        + (f"- Optional columns: {', '.join(spec.optional_columns)}\n" if spec.optional_columns else "")
        + f"- Maximum {spec.max_rows} rows\n"
        + f"- File size limit: {max_bytes // (1024 * 1024)}MB"
    )
    st.download_button(
        "Download sample CSV",
        sample_csv(spec),
        file_name=spec.sample_filename,
        mime="text/csv",
        key=f"{key}_sample",
    )

    uploaded = st.file_uploader("Choose CSV file", type=["csv"], key=f"{key}_file")
    if uploaded is None:
        return None

    content = uploaded.getvalue()
    problems = validate_csv_upload(uploaded.name, len(content), max_bytes)
    if problems:
        st.error(problems["csv_file"])
        return None

    try:
        df = read_preview(content)
    except ValueError as e:
        st.error(str(e))
        return None

    issues = check_columns(spec, df)
    st.caption(f"{len(df)} row(s) found")
    st.dataframe(df.head(20), use_container_width=True, hide_index=True)
    for issue in issues:
        st.error(issue)
    if issues:
        return None

    if not st.button(f"Upload {spec.resource}", type="primary", key=f"{key}_submit"):
        return None

    with st.spinner("Uploading..."):
        try:
            response = upload(uploaded.name, content)
        except ApiError as e:
            log.error("%s CSV upload failed: %s", spec.resource, e.message)
            return UploadSummary(ok=False, message=e.message, errors=_flatten(e.errors))
    return summarize_upload(response, spec.resource)


def show_upload_summary(summary: UploadSummary) -> None:
    (st.success if summary.ok else st.error)(summary.message)
    for w in summary.warnings:
        st.warning(w)
    if summary.errors:
        with st.expander(f"{len(summary.errors)} error(s)", expanded=not summary.ok):
            for e in summary.errors:
                st.write(f"- {e}")
