# screens/marks/input_marks.py
from __future__ import annotations

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.forms import handle_error, show_api_error, show_field_errors
from core.navigation import require_segment
from core.ui import page_header
from core.validation import validate_marks_form
from screens.marks import marks_service as svc

ROUTE_KEY = "input_marks"


def _k(s: str) -> str:
    return f"input_marks__{s}"


def _option_index(options, value) -> int:
    return options.index(value) if value in options else 0


def render() -> None:
    require_segment("staff", ROUTE_KEY)
    page_header("Input Marks", "Record exam marks for a whole class")

    try:
        dropdowns = svc.fetch_dropdown_data()
    except ApiError as e:
        show_api_error(e, "Failed to fetch dropdown data")
        return

    classes = {c["id"]: c for c in dropdowns.classes}
    subjects = {s["id"]: s for s in dropdowns.subjects}
    exam_types = {e["value"]: e["label"] for e in dropdowns.exam_types}
    terms = {t["value"]: t["label"] for t in dropdowns.terms}

    c1, c2, c3 = st.columns(3)
    with c1:
        class_id = st.selectbox("Class *", [None, *classes], key=_k("class"),
                                format_func=lambda i: "Select class" if i is None else classes[i]["class_name"])
        exam_type = st.selectbox("Exam type *", ["", *exam_types], key=_k("exam_type"),
                                 format_func=lambda v: exam_types.get(v, "Select exam type"))
    with c2:
        subject_id = st.selectbox("Subject *", [None, *subjects], key=_k("subject"),
                                  format_func=lambda i: "Select subject" if i is None else subjects[i]["subject_name"])
        term = st.selectbox("Term *", ["", *terms], key=_k("term"),
                            format_func=lambda v: terms.get(v, "Select term"))
    with c3:
        total_marks = st.number_input("Total marks *", min_value=0.0, value=100.0, step=1.0, key=_k("total"))
        academic_year = st.text_input("Academic year", value=svc.current_academic_year(), key=_k("year"))

    if class_id is None:
        st.info("Select a class to load its students.")
        return

    try:
        students = svc.fetch_class_students(class_id)
    except ApiError as e:
        show_api_error(e, "Failed to fetch students")
        return
    if not students:
        st.warning("No students found in this class.")
        return

    try:
        grid = pd.DataFrame(
            [{"student_id": s["id"], "Admission No.": s.get("admission_number"),
              "Name": s.get("full_name"), "Marks": None} for s in students]
        )
        edited = st.data_editor(
            grid,
            hide_index=True,
            use_container_width=True,
            disabled=["student_id", "Admission No.", "Name"],
            column_config={
                "student_id": None,
                "Marks": st.column_config.NumberColumn("Marks", min_value=0.0, max_value=float(total_marks or 0)),
            },
            key=_k(f"grid_{class_id}"),
        )

        if not st.button("Submit marks", type="primary", key=_k("submit")):
            return

        errors = validate_marks_form(class_id, subject_id, exam_type, term, total_marks)
        if errors:
            show_field_errors(errors)
            return

        marks = {
            row["student_id"]: row["Marks"]
            for row in edited.to_dict("records")
            if not pd.isna(row["Marks"])
        }
        try:
            payload = svc.build_bulk_payload(class_id, subject_id, exam_type, term,
                                             float(total_marks), academic_year.strip(), marks)
        except ValueError as e:
            st.error(str(e))
            return
        if not payload["results"]:
            st.warning("Enter marks for at least one student.")
            return

        with st.spinner("Submitting marks..."):
            try:
                result = svc.submit_marks(payload)
            except ApiError as e:
                show_api_error(e, "Failed to submit marks")
                return
        st.success(result.message)
        if result.failed_records:
            st.error(f"{result.failed_records} records failed: {', '.join(result.errors)}")
    except Exception as e:
        handle_error(e, "Could not record marks.")
