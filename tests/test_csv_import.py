import io

import pandas as pd
import pytest

from core.csv_import import check_columns, read_preview, sample_csv, summarize_upload
from screens.classes.importer import CLASSES_CSV
from screens.students.importer import STUDENTS_CSV
from screens.subjects.importer import SUBJECTS_CSV


def test_sample_csv_has_all_columns():
    df = pd.read_csv(io.BytesIO(sample_csv(SUBJECTS_CSV)))
    assert list(df.columns) == ["subject_name", "subject_code", "description"]
    assert len(df) == 5
    assert SUBJECTS_CSV.sample_filename == "subjects_sample.csv"


@pytest.mark.parametrize("spec", [SUBJECTS_CSV, CLASSES_CSV, STUDENTS_CSV])
def test_samples_pass_their_own_column_check(spec):
    assert check_columns(spec, read_preview(sample_csv(spec))) == []


def test_preview_keeps_text_and_strips_headers():
    df = read_preview(b" class_name ,class_code,capacity\nForm 1A,F1A,030\n")
    assert list(df.columns) == ["class_name", "class_code", "capacity"]
    assert df.loc[0, "capacity"] == "030"


def test_column_problems():
    df = read_preview(b"subject_name,description\nMaths,x\n")
    assert check_columns(SUBJECTS_CSV, df) == ["Missing required columns: subject_code"]

    empty = read_preview(b"subject_name,subject_code\n")
    assert check_columns(SUBJECTS_CSV, empty) == ["The file has no data rows"]


def test_row_limit():
    rows = "\n".join(f"S{i},C{i}" for i in range(1001))
    df = read_preview(f"subject_name,subject_code\n{rows}\n".encode())
    assert check_columns(SUBJECTS_CSV, df) == ["Too many rows (1001); the limit is 1000"]


def test_unreadable_file():
    with pytest.raises(ValueError):
        read_preview(b"")


def test_summary_of_subject_upload():
    summary = summarize_upload({
        "success": True,
        "message": "Uploaded 3 subjects",
        "data": {"created_count": 3},
        "warnings": ["Row 4: duplicate code skipped"],
        "errors": {"row_5": ["subject_name is required"]},
    }, "subjects")
    assert summary.ok
    assert summary.created_count == 3
    assert summary.message == "Uploaded 3 subjects"
    assert summary.warnings == ["Row 4: duplicate code skipped"]
    assert summary.errors == ["row_5: subject_name is required"]


def test_summary_of_student_upload():
    summary = summarize_upload({"created_count": 12, "error_count": 2, "errors": ["Row 3: bad", "Row 9: bad"]}, "students")
    assert summary.ok
    assert summary.created_count == 12
    assert summary.message == "Successfully uploaded 12 students. 2 errors."


def test_summary_of_failed_or_odd_reply():
    failed = summarize_upload({"success": False, "errors": ["Invalid header"]}, "classes")
    assert not failed.ok
    assert failed.message == "Upload failed. Please try again."
    assert not summarize_upload("oops", "classes").ok
