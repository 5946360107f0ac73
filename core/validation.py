# core/validation.py
# -------------------------------------------------------------------
# Client-side form checks. They mirror the backend's constraints so
# obvious mistakes are caught before a request is sent; the backend
# stays authoritative.
#
# Every validator returns {field: message}. An empty dict means valid.
# -------------------------------------------------------------------
from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

SUBJECT_NAME_MAX = 100
CODE_MAX = 20
CLASS_CAPACITY_MIN = 1
CLASS_CAPACITY_MAX = 200
PASSWORD_MIN = 8

STAFF_ROLES: Dict[str, str] = {
    "teacher": "Teacher",
    "admin_staff": "Administrative Staff",
    "accountant": "Accountant",
    "librarian": "Librarian",
    "nurse": "Nurse",
    "security": "Security",
    "other": "Other",
}

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value).strip()


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_PATTERN.match(email.strip()))


def is_full_name(name: str) -> bool:
    """At least a first and a last name."""
    return len((name or "").split()) >= 2


def validate_subject(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    name = _text(data, "subject_name")
    code = _text(data, "subject_code")

    if not name:
        errors["subject_name"] = "Subject name is required"
    elif len(name) > SUBJECT_NAME_MAX:
        errors["subject_name"] = f"Subject name must be {SUBJECT_NAME_MAX} characters or less"

    if not code:
        errors["subject_code"] = "Subject code is required"
    elif len(code) > CODE_MAX:
        errors["subject_code"] = f"Subject code must be {CODE_MAX} characters or less"
    return errors


def validate_class(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not _text(data, "class_name"):
        errors["class_name"] = "Class name is required"

    code = _text(data, "class_code")
    if not code:
        errors["class_code"] = "Class code is required"
    elif len(code) > CODE_MAX:
        errors["class_code"] = f"Class code must be {CODE_MAX} characters or less"

    try:
        capacity = int(data.get("capacity") or 0)
    except (TypeError, ValueError):
        capacity = 0
    if capacity < CLASS_CAPACITY_MIN:
        errors["capacity"] = f"Capacity must be at least {CLASS_CAPACITY_MIN}"
    elif capacity > CLASS_CAPACITY_MAX:
        errors["capacity"] = f"Capacity cannot exceed {CLASS_CAPACITY_MAX}"
    return errors


def validate_password_pair(password: str, confirm: Optional[str], field: str = "password") -> Dict[str, str]:
    if confirm is not None and password != confirm:
        return {field: "Passwords do not match."}
    if len(password or "") < PASSWORD_MIN:
        return {field: f"Password must be at least {PASSWORD_MIN} characters long."}
    return {}


def validate_school_registration(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    labels = {
        "school_name": "School name",
        "principal_name": "Principal name",
        "phone_number": "Phone number",
        "email": "Email",
        "school_domain": "School domain",
    }
    for key, label in labels.items():
        if not _text(data, key):
            errors[key] = f"{label} is required"
    if "email" not in errors and not is_valid_email(_text(data, "email")):
        errors["email"] = "Enter a valid email address"
    errors.update(validate_password_pair(data.get("password") or "", None))
    return errors


def validate_staff_registration(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not is_full_name(_text(data, "full_name")):
        errors["full_name"] = "Please provide your full name (first and last name)."
    if not is_valid_email(_text(data, "email")):
        errors["email"] = "Enter a valid email address"
    if not _text(data, "phone_number"):
        errors["phone_number"] = "Phone number is required"
    errors.update(validate_password_pair(data.get("password") or "", data.get("confirm_password") or ""))
    return errors


def validate_parent_account(data: Mapping[str, Any]) -> Dict[str, str]:
    """First step of parent registration: the parent's own details."""
    required = ("full_name", "email", "phone_number", "password", "confirm_password")
    if any(not _text(data, key) for key in required):
        return {"form": "Please fill in all required fields"}
    errors: Dict[str, str] = {}
    if not is_valid_email(_text(data, "email")):
        errors["email"] = "Enter a valid email address"
    errors.update(validate_password_pair(data.get("password") or "", data.get("confirm_password") or ""))
    return errors


def validate_parent_student_link(data: Mapping[str, Any]) -> Dict[str, str]:
    """Second step of parent registration: which child the account is for."""
    if not _text(data, "student_name") or not _text(data, "admission_number"):
        return {"form": "Please provide your child's information"}
    return {}


def validate_password_reset(data: Mapping[str, Any]) -> Dict[str, str]:
    if not _text(data, "token"):
        return {"token": "Invalid or missing reset token. Please request a new password reset."}
    return validate_password_pair(data.get("new_password") or "", data.get("confirm_password") or "",
                                  field="new_password")


def validate_staff_member(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not is_valid_email(_text(data, "email")):
        errors["email"] = "Enter a valid email address"
    if not _text(data, "first_name"):
        errors["first_name"] = "First name is required"
    if not _text(data, "last_name"):
        errors["last_name"] = "Last name is required"
    if _text(data, "role") not in STAFF_ROLES:
        errors["role"] = "Choose a role from the list"
    return errors


def validate_student(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not _text(data, "full_name"):
        errors["full_name"] = "Full name is required"
    if not _text(data, "admission_number"):
        errors["admission_number"] = "Admission number is required"
    email = _text(data, "parent_guardian_email")
    if email and not is_valid_email(email):
        errors["parent_guardian_email"] = "Enter a valid email address"
    return errors


def validate_marks_form(
    class_id: Any, subject_id: Any, exam_type: str, term: str, total_marks: Any
) -> Dict[str, str]:
    if not class_id or not subject_id or not exam_type or not term or not total_marks:
        return {"form": "Please fill in all required fields"}
    try:
        if float(total_marks) < 1:
            return {"total_marks": "Total marks must be at least 1"}
    except (TypeError, ValueError):
        return {"total_marks": "Total marks must be a number"}
    return {}


def validate_mark(marks: Any, total_marks: Any) -> Optional[str]:
    """Message for an out-of-range mark, or None."""
    try:
        value = float(marks)
    except (TypeError, ValueError):
        return "Marks must be a number"
    if value < 0:
        return "Marks cannot be negative"
    if total_marks and value > float(total_marks):
        return f"Marks cannot exceed total marks ({total_marks})"
    return None


def validate_csv_upload(filename: str, size: int, max_bytes: int) -> Dict[str, str]:
    if not filename:
        return {"csv_file": "Please select a CSV file"}
    if not filename.lower().endswith(".csv"):
        return {"csv_file": "Please select a valid CSV file"}
    if size > max_bytes:
        return {"csv_file": f"File is too large (max {max_bytes // (1024 * 1024)}MB)"}
    if size == 0:
        return {"csv_file": "The selected file is empty"}
    return {}
