# screens/subjects/importer.py
from __future__ import annotations

import streamlit as st

from core.csv_import import CsvSpec, render_csv_upload, show_upload_summary
from core.settings import get_settings
from screens.subjects import subjects_service as svc

SUBJECTS_CSV = CsvSpec(
    resource="subjects",
    required_columns=("subject_name", "subject_code"),
    optional_columns=("description",),
    sample_rows=(
        {"subject_name": "Mathematics", "subject_code": "MATH101", "description": "Basic mathematics and algebra"},
        {"subject_name": "English Language", "subject_code": "ENG101", "description": "English language and literature"},
        {"subject_name": "Physics", "subject_code": "PHY101", "description": "Introduction to physics"},
        {"subject_name": "Chemistry", "subject_code": "CHEM101", "description": "General chemistry"},
        {"subject_name": "Biology", "subject_code": "BIO101", "description": "Introduction to biology"},
    ),
)


def render_upload_section(key: str) -> bool:
    """CSV upload tab. Returns True when subjects were created (the list should reload)."""
    st.subheader("Upload Subjects from CSV")
    summary = render_csv_upload(
        SUBJECTS_CSV,
        lambda filename, content: svc.upload_csv(filename, content),
        get_settings().uploads.max_csv_bytes,
        key=key,
    )
    if summary is None:
        return False
    show_upload_summary(summary)
    return summary.ok and summary.created_count > 0
