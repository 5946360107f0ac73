# screens/classes/page.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.forms import flash, handle_error, render_flash, show_api_error, show_field_errors
from core.navigation import require_segment
from core.pagination import STATUS_FILTERS, filter_records, list_state, page_range, total_pages
from core.settings import get_settings
from core.ui import confirm_button, page_header, stat_cards
from core.validation import CLASS_CAPACITY_MAX, CLASS_CAPACITY_MIN, validate_class
from screens.classes import classes_service as svc
from screens.classes.importer import render_upload_section

log = logging.getLogger(__name__)

ROUTE_KEY = "classes"
SEARCH_FIELDS = ("class_name", "class_code", "description")
TABLE_COLUMNS = {
    "class_name": "Name",
    "class_code": "Code",
    "capacity": "Capacity",
    "description": "Description",
    "is_active": "Active",
}


def _k(s: str) -> str:
    return f"classes__{s}"


def _render_stats() -> None:
    try:
        stats = svc.fetch_stats()
    except ApiError as e:
        log.warning("Class stats unavailable: %s", e.message)
        return
    stat_cards([
        ("Total Classes", stats.get("total_classes", 0)),
        ("Active", stats.get("active_classes", 0)),
        ("Inactive", stats.get("inactive_classes", 0)),
    ])


def _class_fields(defaults: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "class_name": st.text_input("Class name *", value=defaults.get("class_name") or ""),
        "class_code": st.text_input("Class code *", value=defaults.get("class_code") or ""),
        "capacity": st.number_input(
            "Capacity *",
            min_value=CLASS_CAPACITY_MIN,
            max_value=CLASS_CAPACITY_MAX,
            value=int(defaults.get("capacity") or svc.DEFAULT_CAPACITY),
            step=1,
        ),
        "description": st.text_area("Description", value=defaults.get("description") or ""),
    }


def _render_edit(klass: Dict[str, Any]) -> None:
    cid = klass.get("id")
    with st.form(_k(f"edit_{cid}")):
        data = _class_fields(klass)
        active = st.checkbox("Active", value=bool(klass.get("is_active", True)))
        submitted = st.form_submit_button("Save changes", type="primary")

    if submitted:
        errors = validate_class(data)
        if errors:
            show_field_errors(errors)
        else:
            changes = {**svc.class_payload(data), "is_active": active}
            try:
                svc.update_class(cid, changes)
            except ApiError as e:
                show_api_error(e, "Failed to update class")
            else:
                flash("success", f"Class '{changes['class_name']}' updated")
                st.rerun()

    if confirm_button("Delete class", key=_k(f"delete_{cid}"),
                      prompt=f"Delete '{klass.get('class_name')}'? This cannot be undone."):
        try:
            svc.delete_class(cid)
        except ApiError as e:
            show_api_error(e, "Failed to delete class")
        else:
            flash("success", "Class deleted")
            st.rerun()


def _render_list() -> None:
    state = list_state(st.session_state, _k("list"), get_settings().app.page_size)

    c1, c2 = st.columns([3, 1])
    with c1:
        search = st.text_input("Search by name or code", value=state.search, key=_k("search"))
    with c2:
        status = st.selectbox("Status", STATUS_FILTERS, index=STATUS_FILTERS.index(state.status),
                              format_func=str.title, key=_k("status"))
    if state.set_filters(search, status):
        st.rerun()

    try:
        page = svc.fetch_classes(state.page, state.page_size)
    except ApiError as e:
        show_api_error(e, "Failed to load classes")
        return

    rows: List[Dict[str, Any]] = filter_records(page.results, state.search, state.status, SEARCH_FIELDS)
    if rows:
        df = pd.DataFrame(rows)
        cols = [c for c in TABLE_COLUMNS if c in df.columns]
        st.dataframe(df[cols].rename(columns=TABLE_COLUMNS), use_container_width=True, hide_index=True)
    else:
        st.info("No classes match the current filters.")

    first, last = page_range(state.page, page.count, state.page_size)
    pages = total_pages(page.count, state.page_size)
    c1, c2, c3 = st.columns([1, 2, 1])
    with c1:
        if st.button("◀ Previous", key=_k("prev"), disabled=state.page <= 1):
            state.previous_page(page.count)
            st.rerun()
    with c2:
        st.caption(f"Showing {first}-{last} of {page.count} · Page {state.page} of {pages}")
    with c3:
        if st.button("Next ▶", key=_k("next"), disabled=state.page >= pages):
            state.next_page(page.count)
            st.rerun()

    if rows:
        st.markdown("#### Edit or delete")
        by_id = {r.get("id"): r for r in rows}
        chosen = st.selectbox(
            "Class",
            list(by_id.keys()),
            format_func=lambda i: f"{by_id[i].get('class_name')} ({by_id[i].get('class_code')})",
            key=_k("selected"),
        )
        if chosen is not None:
            _render_edit(by_id[chosen])


def _render_add() -> None:
    with st.form(_k("add"), clear_on_submit=True):
        data = _class_fields({})
        submitted = st.form_submit_button("Add class", type="primary")
    if not submitted:
        return
    errors = validate_class(data)
    if errors:
        show_field_errors(errors)
        return
    try:
        svc.create_class(data)
    except ApiError as e:
        show_api_error(e, "Failed to create class")
        return
    flash("success", f"Class '{data['class_name'].strip()}' created")
    st.rerun()


def render() -> None:
    require_segment("school", ROUTE_KEY)
    page_header("Classes", "Manage classes and their capacity")
    render_flash()

    try:
        _render_stats()
        tab_list, tab_add, tab_upload = st.tabs(["🏫 Classes", "➕ Add Class", "📤 Upload CSV"])
        with tab_list:
            _render_list()
        with tab_add:
            _render_add()
        with tab_upload:
            if render_upload_section(_k("upload")):
                list_state(st.session_state, _k("list")).page = 1
    except Exception as e:
        handle_error(e, "Could not display classes.")
