# screens/classes/importer.py
from __future__ import annotations

import streamlit as st

from core.csv_import import CsvSpec, render_csv_upload, show_upload_summary
from core.settings import get_settings
from screens.classes import classes_service as svc

CLASSES_CSV = CsvSpec(
    resource="classes",
    required_columns=("class_name", "class_code"),
    optional_columns=("description", "capacity"),
    sample_rows=(
        {"class_name": "Form 1A", "class_code": "F1A", "description": "First year students section A", "capacity": 30},
        {"class_name": "Form 1B", "class_code": "F1B", "description": "First year students section B", "capacity": 25},
        {"class_name": "Form 2A", "class_code": "F2A", "description": "Second year students section A", "capacity": 28},
        {"class_name": "Grade 5", "class_code": "G5", "description": "Elementary grade 5", "capacity": 35},
    ),
)


def render_upload_section(key: str) -> bool:
    st.subheader("Upload Classes from CSV")
    st.caption(f"Capacity defaults to {svc.DEFAULT_CAPACITY} when left empty.")
    summary = render_csv_upload(
        CLASSES_CSV,
        lambda filename, content: svc.upload_csv(filename, content),
        get_settings().uploads.max_csv_bytes,
        key=key,
    )
    if summary is None:
        return False
    show_upload_summary(summary)
    return summary.ok and summary.created_count > 0
