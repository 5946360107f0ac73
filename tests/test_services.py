import datetime

import pytest

from core.api import ApiError
from core.session_store import save_login
from screens.analytics import analytics_service
from screens.classes import classes_service
from screens.marks import marks_service
from screens.parents import parents_service
from screens.staff import staff_service
from screens.students import students_service
from screens.subjects import subjects_service


@pytest.fixture
def school(store, backend):
    save_login("school", "tok-school", {"name": "Green Hills"}, store)
    return backend.client("school", store)


@pytest.fixture
def staff(store, backend):
    save_login("staff", "tok-staff", {"full_name": "Jane Doe"}, store)
    return backend.client("staff", store)


# ─── Subjects ───────────────────────────────────────────────────────

def test_fetch_subjects_page(school, backend):
    backend.reply("GET", "/api/subjects/", {"count": 21, "next": "n", "previous": None,
                                            "results": [{"id": 1, "subject_code": "MATH"}]})
    page = subjects_service.fetch_subjects(page=2, page_size=20, client=school)
    assert page.count == 21
    assert dict(backend.last.url.params) == {"page": "2", "page_size": "20"}


def test_create_subject_trims(school, backend):
    backend.reply("POST", "/api/subjects/", {"id": 7})
    subjects_service.create_subject({"subject_name": " Physics ", "subject_code": "PHY101 "}, client=school)
    assert backend.last_json() == {"subject_name": "Physics", "subject_code": "PHY101", "description": ""}


def test_update_and_delete_subject(school, backend):
    backend.reply("PATCH", "/api/subjects/7/", {"id": 7, "is_active": False})
    backend.reply("DELETE", "/api/subjects/7/", None, status=204)
    subjects_service.update_subject(7, {"is_active": False}, client=school)
    assert backend.last_json() == {"is_active": False}
    subjects_service.delete_subject(7, client=school)
    assert backend.last.method == "DELETE"


def test_subject_stats_envelopes(school, backend):
    backend.reply("GET", "/api/subjects/stats/", {"success": True, "data": {"total_subjects": 4}})
    assert subjects_service.fetch_stats(client=school) == {"total_subjects": 4}
    backend.reply("GET", "/api/subjects/stats/", {"total_subjects": 2, "active_subjects": 1})
    assert subjects_service.fetch_stats(client=school)["active_subjects"] == 1
    backend.reply("GET", "/api/subjects/stats/", {"success": False})
    assert subjects_service.fetch_stats(client=school) == {}


def test_subjects_use_staff_token_for_staff(store, backend):
    save_login("school", "tok-school", {"name": "S"}, store)
    save_login("staff", "tok-staff", {"full_name": "T"}, store)
    backend.reply("GET", "/api/subjects/", [])
    client = subjects_service._client(None, store)
    assert client.segment.name == "staff"


# ─── Classes ────────────────────────────────────────────────────────

def test_class_payload_defaults_capacity():
    assert classes_service.class_payload({"class_name": "Form 1A ", "class_code": "F1A"})["capacity"] == 30
    assert classes_service.class_payload({"class_name": "x", "class_code": "y", "capacity": "45"})["capacity"] == 45


def test_class_upload_and_stats(school, backend):
    backend.reply("POST", "/api/classes/upload-csv/", {"success": True, "data": {"created_count": 2}})
    backend.reply("GET", "/api/classes/stats/", {"data": {"total_classes": 2}})
    classes_service.upload_csv("classes.csv", b"class_name,class_code\nA,B\n", client=school)
    assert b'name="csv_file"' in backend.last.content
    assert classes_service.fetch_stats(client=school) == {"total_classes": 2}


# ─── Staff ──────────────────────────────────────────────────────────

def test_staff_roster(school, backend):
    backend.reply("GET", "/api/schools/staff/", {
        "school": {"name": "Green Hills"},
        "staff": [
            {"id": 1, "role": "teacher", "is_active": True},
            {"id": 2, "role": "teacher", "is_active": False},
            {"id": 3, "role": "nurse", "is_active": True},
        ],
    })
    roster = staff_service.fetch_staff(client=school)
    assert roster.total_count == 3
    assert roster.active_count() == 2
    assert roster.role_counts() == {"teacher": 2, "nurse": 1}


def test_add_and_remove_staff(school, backend):
    backend.reply("POST", "/api/schools/staff/", {"message": "Staff member added. They can now register."})
    backend.reply("DELETE", "/api/schools/staff/3/", {})
    message = staff_service.add_staff({"email": " Jane@School.org ", "first_name": "Jane", "last_name": "Doe",
                                       "role": ""}, client=school)
    assert message == "Staff member added. They can now register."
    assert backend.last_json()["email"] == "jane@school.org"
    assert backend.last_json()["role"] == "teacher"
    assert staff_service.remove_staff(3, client=school) == "Staff member removed successfully"


def test_staff_changes_with_plain_text_replies(school, backend):
    backend.reply("POST", "/api/schools/staff/", text="Created", status=201)
    backend.reply("DELETE", "/api/schools/staff/3/", text="Deleted")
    assert staff_service.add_staff({"email": "jane@school.org"}, client=school) == "Staff member added successfully"
    assert staff_service.remove_staff(3, client=school) == "Staff member removed successfully"


# ─── Students ───────────────────────────────────────────────────────

def test_student_payload_nulls_blanks():
    payload = students_service.student_payload({
        "full_name": " Amy Achieng ", "admission_number": "ADM9", "admission_class": "Form 1A",
        "date_of_birth": datetime.date(2011, 5, 1), "gender": "", "address": "  ",
    })
    assert payload["full_name"] == "Amy Achieng"
    assert payload["date_of_birth"] == "2011-05-01"
    assert payload["gender"] is None
    assert payload["address"] is None
    assert payload["status"] == "active"


def test_student_crud_calls(school, backend):
    backend.reply("GET", "/api/students/", {"students": [{"id": 1}]})
    backend.reply("PUT", "/api/students/1/", {"id": 1})
    backend.reply("POST", "/api/students/bulk_upload/", {"created_count": 1, "error_count": 0})
    assert students_service.fetch_students(client=school) == [{"id": 1}]
    students_service.update_student(1, {"full_name": "A", "admission_number": "B"}, client=school)
    assert backend.last.method == "PUT"
    students_service.bulk_upload("students.csv", b"x", client=school)
    assert b'name="file"' in backend.last.content


def test_filter_students():
    students = [
        {"full_name": "Amy Achieng", "admission_number": "ADM1", "current_class": "Form 1A", "status": "active"},
        {"full_name": "Brian Otieno", "admission_number": "ADM2", "admission_class": "Form 1B",
         "parent_guardian_name": "Paul", "status": "graduated"},
    ]
    assert students_service.class_options(students) == ["Form 1A", "Form 1B"]
    assert [s["admission_number"] for s in students_service.filter_students(students, "paul")] == ["ADM2"]
    assert students_service.filter_students(students, class_name="Form 1A", status="graduated") == []
    assert len(students_service.filter_students(students)) == 2


# ─── Marks ──────────────────────────────────────────────────────────

def test_academic_year_starts_in_september():
    assert marks_service.current_academic_year(datetime.date(2024, 8, 31)) == "2023-2024"
    assert marks_service.current_academic_year(datetime.date(2024, 9, 1)) == "2024-2025"


def test_bulk_payload_skips_blank_marks():
    payload = marks_service.build_bulk_payload(3, 5, "exam_1", "1", 100, "2024-2025",
                                               {"11": 78, "12": None, "13": "", "14": "64.5"})
    assert payload["results"] == [{"student_id": 11, "marks": 78.0}, {"student_id": 14, "marks": 64.5}]
    assert payload["class_id"] == 3


def test_bulk_payload_rejects_out_of_range():
    with pytest.raises(ValueError, match="Student 12: Marks cannot exceed total marks"):
        marks_service.build_bulk_payload(3, 5, "exam_1", "1", 50, "2024-2025", {"11": 40, "12": 51})


def test_submit_marks(staff, backend):
    backend.reply("POST", "/api/input-marks/results/bulk_input/",
                  {"successful_records": 2, "total_records": 3, "failed_records": 1, "errors": ["Student 9 not found"]})
    result = marks_service.submit_marks({"results": [{}, {}, {}]}, client=staff)
    assert result.message == "Successfully processed 2 out of 3 records"
    assert result.errors == ["Student 9 not found"]
    assert backend.last.headers["Authorization"] == "Bearer tok-staff"


def test_dropdowns_and_results(staff, backend):
    backend.reply("GET", "/api/input-marks/dropdown-data/", {"classes": [{"id": 1}], "subjects": [],
                                                              "exam_types": [{"value": "exam_1", "label": "Exam 1"}]})
    backend.reply("GET", "/api/input-marks/class-students/1/", {"students": [{"id": 11}]})
    dropdowns = marks_service.fetch_dropdown_data(client=staff)
    assert dropdowns.classes == [{"id": 1}]
    assert dropdowns.terms == []
    assert marks_service.fetch_class_students(1, client=staff) == [{"id": 11}]


def test_marks_calls_tolerate_plain_text_replies(staff, backend):
    backend.reply("GET", "/api/input-marks/dropdown-data/", text="maintenance")
    backend.reply("POST", "/api/input-marks/results/bulk_input/", text="queued")
    assert marks_service.fetch_dropdown_data(client=staff).classes == []
    result = marks_service.submit_marks({"results": [{}, {}]}, client=staff)
    assert result.total_records == 2
    assert result.successful_records == 0


def test_filter_results():
    results = [
        {"class_name": "Form 1A", "subject_name": "Mathematics", "exam_type": "exam_1", "term": "1",
         "academic_year": "2024-2025", "student_name": "Amy", "student_admission_number": "ADM1"},
        {"class_name": "Form 2A", "subject_name": "English", "exam_type": "exam_2", "term": "2",
         "academic_year": "2024-2025", "student_name": "Brian", "student_admission_number": "ADM2"},
    ]
    assert len(marks_service.filter_results(results, academic_year="2024-2025")) == 2
    assert [r["student_name"] for r in marks_service.filter_results(results, class_name="Form 1")] == ["Amy"]
    assert [r["student_name"] for r in marks_service.filter_results(results, search="adm2")] == ["Brian"]
    assert marks_service.filter_results(results, exam_type="exam_1", term="2") == []
    assert marks_service.exam_type_label("exam_3") == "Exam 3"


# ─── Analytics ──────────────────────────────────────────────────────

def test_class_analytics_params(staff, backend):
    backend.reply("GET", "/api/input-marks/class-analytics/", {"class_average": 64.2})
    data = analytics_service.fetch_class_analytics(4, academic_year="2024-2025", client=staff)
    assert data == {"class_average": 64.2}
    assert dict(backend.last.url.params) == {"class_id": "4", "term": "1", "academic_year": "2024-2025",
                                             "exam_type": "exam_1"}


def test_subject_analytics_sends_exam_filters(staff, backend):
    backend.reply("GET", "/api/input-marks/subject-analytics/", {"overall_average": 71})
    analytics_service.fetch_subject_analytics(7, client=staff)
    assert dict(backend.last.url.params) == {"subject_id": "7", "term": "1", "exam_type": "exam_1"}
    analytics_service.fetch_subject_analytics(7, "2", "2024-2025", "exam_3", client=staff)
    assert dict(backend.last.url.params) == {"subject_id": "7", "term": "2", "academic_year": "2024-2025",
                                             "exam_type": "exam_3"}


def test_reports_data_params(staff, backend):
    backend.reply("GET", "/api/input-marks/reports-data/", {"top_students_per_class": [], "pie_chart_data": []})
    data = analytics_service.fetch_reports_data(academic_year="2024-2025", client=staff)
    assert data["top_students_per_class"] == []
    assert dict(backend.last.url.params) == {"term": "1", "academic_year": "2024-2025", "exam_type": "exam_1"}
    assert backend.last.headers["Authorization"] == "Bearer tok-staff"


def test_reports_data_error_and_empty_replies(staff, backend):
    backend.reply("GET", "/api/input-marks/reports-data/", {"error": "No class assigned"})
    with pytest.raises(ApiError, match="No class assigned"):
        analytics_service.fetch_reports_data(client=staff)
    backend.reply("GET", "/api/input-marks/reports-data/", {"message": "No results recorded yet"})
    assert analytics_service.fetch_reports_data(client=staff) == {"message": "No results recorded yet"}
    backend.reply("GET", "/api/input-marks/reports-data/", text="maintenance")
    assert analytics_service.fetch_reports_data(client=staff) == {}


def test_student_analytics_needs_selection(staff):
    with pytest.raises(ValueError):
        analytics_service.fetch_student_analytics(None, 4, client=staff)


def test_statistics_bundle(staff, backend):
    backend.reply("GET", "/api/statistics/dashboard_summary/", {"overview": {"total_students": 120}})
    backend.reply("GET", "/api/statistics/performance_metrics/", {"top_performers": []})
    backend.reply("GET", "/api/statistics/comparative_analysis/", ["not", "a", "dict"])
    out = analytics_service.fetch_statistics(client=staff)
    assert out["summary"]["overview"]["total_students"] == 120
    assert out["metrics"] == {"top_performers": []}
    assert out["comparative"] == {}


def test_school_analytics_uses_school_token(store, backend):
    save_login("school", "tok-school", {"name": "S"}, store)
    save_login("staff", "tok-staff", {"full_name": "T"}, store)
    backend.reply("GET", "/api/input-marks/school-analytics/", {"streams": []})
    analytics_service.fetch_school_analytics(client=backend.client("school", store))
    assert backend.last.headers["Authorization"] == "Bearer tok-school"


# ─── Parents ────────────────────────────────────────────────────────

def test_analytics_params_drop_all():
    assert parents_service.analytics_params(
        {"academic_year": "2024-2025", "term": "all", "exam_type": "", "subject": None}
    ) == {"academic_year": "2024-2025"}


def test_register_parent_is_unauthenticated(store, backend):
    backend.reply("POST", "/api/parents/register/", {})
    message = parents_service.register_parent(
        {"full_name": "Paul", "email": "PAUL@x.org", "phone_number": "1", "student_name": "Amy",
         "admission_number": "ADM1", "password": "password1", "confirm_password": "password1"},
        client=backend.client("parent", store),
    )
    assert message == "Registration successful. You can now log in."
    assert "Authorization" not in backend.last.headers
    assert backend.last_json()["email"] == "paul@x.org"


def test_register_parent_plain_text_reply(store, backend):
    backend.reply("POST", "/api/parents/register/", text="<html>Created</html>", status=201)
    message = parents_service.register_parent({"full_name": "Paul", "email": "paul@x.org"},
                                              client=backend.client("parent", store))
    assert message == "Registration successful. You can now log in."


def test_parent_dashboard(store, backend):
    save_login("parent", "tok-parent", {"full_name": "Paul"}, store)
    backend.reply("GET", "/api/parents/dashboard/", {"student": {"full_name": "Amy"}})
    backend.reply("GET", "/api/parents/student_analytics/", {"subjects": []})
    client = backend.client("parent", store)
    assert parents_service.fetch_dashboard(client=client)["student"]["full_name"] == "Amy"
    parents_service.fetch_student_analytics({"term": "2", "subject": "all"}, client=client)
    assert dict(backend.last.url.params) == {"term": "2"}
