import pytest

from core.pagination import (
    ListState,
    Page,
    clamp_page,
    filter_records,
    list_state,
    page_range,
    total_pages,
)


def test_page_from_drf_response():
    page = Page.from_response({"count": 45, "next": "http://x/?page=3", "previous": None,
                               "results": [{"id": 1}, {"id": 2}]})
    assert page.count == 45
    assert page.next == "http://x/?page=3"
    assert page.previous is None
    assert [r["id"] for r in page.results] == [1, 2]


def test_page_from_other_shapes():
    assert Page.from_response([{"id": 1}]).count == 1
    assert Page.from_response({"students": [{"id": 1}, {"id": 2}]}, list_key="students").count == 2
    assert Page.from_response({"id": 9}).results == [{"id": 9}]
    assert Page.from_response({}).count == 0
    assert Page.from_response(None).results == []


def test_page_math():
    assert total_pages(0) == 1
    assert total_pages(45, 20) == 3
    assert clamp_page(9, 45, 20) == 3
    assert clamp_page(0, 45, 20) == 1
    assert page_range(3, 45, 20) == (41, 45)
    assert page_range(1, 0, 20) == (0, 0)
    with pytest.raises(ValueError):
        total_pages(10, 0)


def test_filter_records():
    records = [
        {"subject_name": "Mathematics", "subject_code": "MATH", "is_active": True},
        {"subject_name": "History", "subject_code": "HIST", "is_active": False},
    ]
    fields = ("subject_name", "subject_code")
    assert len(filter_records(records, "", "all", fields)) == 2
    assert [r["subject_code"] for r in filter_records(records, "math", "all", fields)] == ["MATH"]
    assert [r["subject_code"] for r in filter_records(records, "", "inactive", fields)] == ["HIST"]
    assert filter_records(records, "hist", "active", fields) == []


def test_filter_change_resets_page(store):
    state = list_state(store, "subjects__list")
    state.go_to(3, 100)
    assert state.page == 3
    assert state.set_filters("math", "active") is True
    assert state.page == 1
    assert state.set_filters("math", "active") is False
    assert state.set_filters("math", "bogus") is True
    assert state.status == "all"
    assert list_state(store, "subjects__list") is state


def test_next_and_previous_stay_in_range():
    state = ListState(page_size=20)
    assert state.previous_page(45) == 1
    assert state.next_page(45) == 2
    assert state.next_page(45) == 3
    assert state.next_page(45) == 3
