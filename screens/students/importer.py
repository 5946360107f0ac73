# screens/students/importer.py
from __future__ import annotations

import streamlit as st

from core.csv_import import CsvSpec, render_csv_upload, show_upload_summary
from core.settings import get_settings
from screens.students import students_service as svc

STUDENTS_CSV = CsvSpec(
    resource="students",
    required_columns=("full_name", "admission_number", "admission_class"),
    optional_columns=(
        "current_class",
        "date_of_birth",
        "gender",
        "parent_guardian_name",
        "parent_guardian_phone",
        "parent_guardian_email",
        "address",
    ),
    sample_rows=(
        {
            "full_name": "Jane Wanjiku",
            "admission_number": "ADM001",
            "admission_class": "Form 1A",
            "current_class": "Form 2A",
            "date_of_birth": "2010-04-12",
            "gender": "female",
            "parent_guardian_name": "Mary Wanjiku",
            "parent_guardian_phone": "+254700000001",
            "parent_guardian_email": "mary.wanjiku@example.com",
            "address": "Nairobi",
        },
        {
            "full_name": "Brian Otieno",
            "admission_number": "ADM002",
            "admission_class": "Form 1B",
            "gender": "male",
            "parent_guardian_name": "Paul Otieno",
            "parent_guardian_phone": "+254700000002",
        },
    ),
)


def render_upload_section(key: str) -> bool:
    st.subheader("Bulk Upload Students")
    summary = render_csv_upload(
        STUDENTS_CSV,
        lambda filename, content: svc.bulk_upload(filename, content),
        get_settings().uploads.max_csv_bytes,
        key=key,
    )
    if summary is None:
        return False
    show_upload_summary(summary)
    return summary.created_count > 0
