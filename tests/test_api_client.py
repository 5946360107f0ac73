import httpx
import pytest

from core.api import (
    AUTH_FAILED_MESSAGE,
    NETWORK_MESSAGE,
    TIMEOUT_MESSAGE,
    ApiClient,
    ApiError,
    AuthExpired,
    check_health,
    error_message,
    field_errors,
)
from core.session_store import AUTH_REDIRECT_KEY, save_login


def test_bearer_token_of_the_client_segment(store, backend):
    save_login("school", "tok-school", {"name": "S"}, store)
    save_login("staff", "tok-staff", {"full_name": "T"}, store)
    backend.reply("GET", "/api/subjects/", [])

    backend.client("staff", store).get("/api/subjects/")

    assert backend.last.headers["Authorization"] == "Bearer tok-staff"
    assert backend.last.url == "http://api.test/api/subjects/"


def test_unauthenticated_call_sends_no_token(store, backend):
    save_login("parent", "tok", {"full_name": "P"}, store)
    backend.reply("POST", "/api/parents/login/", {"access_token": "x"})

    backend.client("parent", store).post("/api/parents/login/", {"email": "a@b.c"}, authenticated=False)

    assert "Authorization" not in backend.last.headers
    assert backend.last_json() == {"email": "a@b.c"}


def test_blank_params_are_dropped(store, backend):
    backend.reply("GET", "/api/students/", [])
    backend.client("school", store).get("/api/students/", params={"class": "", "status": None, "page": 2})
    assert dict(backend.last.url.params) == {"page": "2"}


def test_401_clears_only_that_segment(store, backend):
    save_login("school", "tok-school", {"name": "S"}, store)
    save_login("staff", "tok-staff", {"full_name": "T"}, store)
    backend.reply("GET", "/api/input-marks/results/", {"detail": "Token expired"}, status=401)

    with pytest.raises(AuthExpired) as exc:
        backend.client("staff", store).get("/api/input-marks/results/")

    assert exc.value.message == AUTH_FAILED_MESSAGE
    assert exc.value.status_code == 401
    assert "staff_access_token" not in store
    assert "staff_info" not in store
    assert store["access_token"] == "tok-school"
    assert store[AUTH_REDIRECT_KEY] == "staff"


def test_401_on_login_is_a_plain_error(store, backend):
    backend.reply("POST", "/api/schools/login/", {"error": "Invalid credentials"}, status=401)
    with pytest.raises(ApiError) as exc:
        backend.client("school", store).post("/api/schools/login/", {}, authenticated=False)
    assert not isinstance(exc.value, AuthExpired)
    assert exc.value.message == "Invalid credentials"
    assert AUTH_REDIRECT_KEY not in store


def test_validation_error_carries_field_errors(store, backend):
    backend.reply("POST", "/api/subjects/", {"subject_code": ["Subject with this code already exists."]}, status=400)
    with pytest.raises(ApiError) as exc:
        backend.client("school", store).post("/api/subjects/", {"subject_code": "MATH"})
    assert exc.value.status_code == 400
    assert exc.value.message == "subject_code: Subject with this code already exists."
    assert exc.value.field_messages() == {"subject_code": "Subject with this code already exists."}


def test_empty_success_body(store, backend):
    backend.reply("DELETE", "/api/classes/3/", None, status=204)
    assert backend.client("school", store).delete("/api/classes/3/") == {}


def test_upload_is_multipart(store, backend):
    backend.reply("POST", "/api/subjects/upload-csv/", {"success": True})
    backend.client("school", store).upload("/api/subjects/upload-csv/", "csv_file", "s.csv", b"a,b\n1,2\n")
    assert backend.last.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="csv_file"; filename="s.csv"' in backend.last.content


def _raising_client(store, exc):
    def handler(request):
        raise exc
    return ApiClient("school", store=store, base_url="http://api.test", timeout=1.0,
                     transport=httpx.MockTransport(handler))


def test_timeout_and_network_errors(store):
    with pytest.raises(ApiError) as exc:
        _raising_client(store, httpx.ReadTimeout("slow")).get("/api/classes/")
    assert exc.value.message == TIMEOUT_MESSAGE
    assert exc.value.status_code is None

    with pytest.raises(ApiError) as exc:
        _raising_client(store, httpx.ConnectError("refused")).get("/api/classes/")
    assert exc.value.message == NETWORK_MESSAGE


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"non_field_errors": ["Passwords do not match."], "error": "x"}, "Passwords do not match."),
        ({"error": "Bad"}, "Bad"),
        ({"message": "Nope"}, "Nope"),
        ({"detail": "Not found."}, "Not found."),
        ({"email": ["Enter a valid email address."]}, "email: Enter a valid email address."),
        ("<html>", "HTTP 500"),
    ],
)
def test_error_message(payload, expected):
    assert error_message(payload, 500) == expected


def test_field_errors_prefers_nested_errors():
    assert field_errors({"errors": {"name": ["required"]}, "code": ["x"]}) == {"name": ["required"]}
    assert field_errors({"code": ["x"], "message": "m"}) == {"code": ["x"]}
    assert field_errors([1, 2]) == {}


def test_check_health():
    ok = check_health("http://api.test/", transport=httpx.MockTransport(lambda r: httpx.Response(405)))
    assert ok["reachable"] is True
    assert ok["status_code"] == 405

    def refuse(request):
        raise httpx.ConnectError("refused")

    down = check_health("http://api.test", transport=httpx.MockTransport(refuse))
    assert down["reachable"] is False
    assert down["error"] == "refused"
