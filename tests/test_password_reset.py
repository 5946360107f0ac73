import pytest

from core.api import ApiError
from screens.password_reset import FORGOT_SENT_MESSAGE, request_reset, reset_password
from screens.profile import profile_rows
from screens.school_registration import register_school
from screens.staff_registration import register_staff


def test_request_reset(store, backend):
    backend.reply("POST", "/api/parents/forgot-password/", {})
    assert request_reset("parent", " P@X.org ", client=backend.client("parent", store)) == FORGOT_SENT_MESSAGE
    assert backend.last_json() == {"email": "p@x.org"}


def test_reset_password(store, backend):
    backend.reply("POST", "/api/staff/auth/reset_password/", {"message": "Password updated"})
    message = reset_password("staff", "tok123", "password1", "password1", client=backend.client("staff", store))
    assert message == "Password updated"
    assert backend.last_json() == {"token": "tok123", "new_password": "password1", "confirm_password": "password1"}


def test_reset_password_form_problems(store, backend):
    client = backend.client("school", store)
    with pytest.raises(ValueError, match="Passwords do not match"):
        reset_password("school", "tok", "password1", "password2", client=client)
    with pytest.raises(ValueError, match="reset token"):
        reset_password("school", "", "password1", "password1", client=client)
    with pytest.raises(ValueError):
        reset_password("parent", "tok", "password1", "password1", client=client)
    assert backend.requests == []


def test_expired_reset_token(store, backend):
    backend.reply("POST", "/api/schools/reset_password/", {"error": "Invalid or expired token"}, status=400)
    with pytest.raises(ApiError, match="expired"):
        reset_password("school", "old", "password1", "password1", client=backend.client("school", store))


def test_register_school(store, backend):
    backend.reply("POST", "/api/schools/", {"id": 1, "name": "Green Hills"}, status=201)
    created = register_school(
        {"school_name": " Green Hills ", "principal_name": "Mary", "phone_number": "0700",
         "email": "Admin@GreenHills.ac.ke", "school_domain": "greenhills", "password": "password1"},
        client=backend.client("school", store),
    )
    assert created["id"] == 1
    body = backend.last_json()
    assert body["school_name"] == "Green Hills"
    assert body["email"] == "admin@greenhills.ac.ke"
    assert "Authorization" not in backend.last.headers


def test_register_staff(store, backend):
    backend.reply("POST", "/api/staff/auth/register/", {"message": "Account activated"})
    message = register_staff(
        {"full_name": "Jane   Doe", "email": "jane@x.org", "phone_number": "1",
         "password": "password1", "confirm_password": "password1"},
        client=backend.client("staff", store),
    )
    assert message == "Account activated"
    assert backend.last_json()["full_name"] == "Jane Doe"


def test_profile_rows():
    rows = profile_rows("staff", {"full_name": "Jane Doe", "email": "jane@x.org", "role": "admin_staff",
                                  "phone_number": ""})
    assert rows == {"Name": "Jane Doe", "Email": "jane@x.org", "Role": "Admin Staff"}


def test_plain_text_replies_fall_back_to_default_messages(store, backend):
    backend.reply("POST", "/api/parents/forgot-password/", text="OK")
    backend.reply("POST", "/api/staff/auth/reset_password/", text="Password changed")
    backend.reply("POST", "/api/staff/auth/register/", text="created")
    assert request_reset("parent", "p@x.org", client=backend.client("parent", store)) == FORGOT_SENT_MESSAGE
    client = backend.client("staff", store)
    assert reset_password("staff", "tok", "password1", "password1", client=client) == \
        "Password reset successfully. Please log in."
    assert register_staff(
        {"full_name": "Jane Doe", "email": "jane@x.org", "phone_number": "1",
         "password": "password1", "confirm_password": "password1"},
        client=client,
    ) == "Registration successful. Please log in."
