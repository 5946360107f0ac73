from core.nav_registry import DEFAULT_ROUTE_KEY, ROUTE_INDEX, SECTIONS, visible_sections
from core.navigation import access_redirect, pending_auth_redirect, post_login_route
from core.session_store import AUTH_REDIRECT_KEY, REDIRECT_AFTER_LOGIN_KEY, SEGMENTS, save_login


def test_guard_remembers_target(store):
    assert access_redirect("staff", "input_marks", store) == "staff_login"
    assert store[REDIRECT_AFTER_LOGIN_KEY] == {"segment": "staff", "route": "input_marks"}
    assert post_login_route("staff", store) == "input_marks"
    assert REDIRECT_AFTER_LOGIN_KEY not in store


def test_guard_passes_signed_in_segment(store):
    save_login("parent", "tok", {"full_name": "P"}, store)
    assert access_redirect("parent", "fee_information", store) is None
    assert REDIRECT_AFTER_LOGIN_KEY not in store


def test_remembered_route_of_another_segment_is_ignored(store):
    access_redirect("school", "classes", store)
    assert post_login_route("parent", store) == "parent_dashboard"
    assert store[REDIRECT_AFTER_LOGIN_KEY]["route"] == "classes"


def test_pending_auth_redirect_is_consumed(store):
    assert pending_auth_redirect(store) is None
    store[AUTH_REDIRECT_KEY] = "school"
    assert pending_auth_redirect(store) == "school_login"
    assert pending_auth_redirect(store) is None


def test_every_segment_route_is_registered():
    assert DEFAULT_ROUTE_KEY in ROUTE_INDEX
    for seg in SEGMENTS.values():
        assert seg.login_route in ROUTE_INDEX
        assert seg.home_route in ROUTE_INDEX
        assert f"{seg.name}_logout" in ROUTE_INDEX
        assert f"{seg.name}_profile" in ROUTE_INDEX
    keys = [r.key for s in SECTIONS for r in s.routes]
    assert len(keys) == len(set(keys))


def _menu(store):
    return {r.key for s in visible_sections(store) for r in s.routes}


def test_menu_for_visitor(store):
    menu = _menu(store)
    assert {"home", "school_login", "staff_login", "parent_login", "fee_payment"} <= menu
    assert "subjects" not in menu
    assert "school_reset_password" not in menu


def test_menu_for_staff(store):
    save_login("staff", "tok", {"full_name": "Jane"}, store)
    menu = _menu(store)
    assert {"input_marks", "reports", "subjects", "students", "staff_logout"} <= menu
    assert "staff_login" not in menu
    assert "classes" not in menu
    assert "parent_dashboard" not in menu


def test_staff_shortcuts_point_at_staff_routes():
    from screens.profile import STAFF_SHORTCUTS

    for _, route in STAFF_SHORTCUTS:
        assert route in ROUTE_INDEX
        assert "staff" in ROUTE_INDEX[route].segments
