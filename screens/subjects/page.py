# screens/subjects/page.py
# -------------------------------------------------------------------
# Subjects: stats, paginated list with search/status filter,
# add / edit / delete, and CSV upload.
# -------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

from core.api import ApiError
from core.forms import flash, handle_error, render_flash, show_api_error, show_field_errors
from core.navigation import require_segment
from core.pagination import Page, STATUS_FILTERS, filter_records, list_state, page_range, total_pages
from core.session_store import acting_segment
from core.settings import get_settings
from core.ui import confirm_button, page_header, stat_cards
from core.validation import validate_subject
from screens.subjects import subjects_service as svc
from screens.subjects.importer import render_upload_section

log = logging.getLogger(__name__)

ROUTE_KEY = "subjects"
SEARCH_FIELDS = ("subject_name", "subject_code", "description")
TABLE_COLUMNS = {
    "subject_name": "Name",
    "subject_code": "Code",
    "description": "Description",
    "is_active": "Active",
    "updated_at": "Updated",
}


def _k(s: str) -> str:
    return f"subjects__{s}"


# ────────────────────────────────────────────────────────────────────────────────
# Sections
# ────────────────────────────────────────────────────────────────────────────────

def _render_stats() -> None:
    try:
        stats = svc.fetch_stats()
    except ApiError as e:
        log.warning("Subject stats unavailable: %s", e.message)
        return
    stat_cards([
        ("Total Subjects", stats.get("total_subjects", 0)),
        ("Active", stats.get("active_subjects", 0)),
        ("Inactive", stats.get("inactive_subjects", 0)),
    ])


def _render_table(rows: List[Dict[str, Any]]) -> None:
    if not rows:
        st.info("No subjects match the current filters.")
        return
    df = pd.DataFrame(rows)
    cols = [c for c in TABLE_COLUMNS if c in df.columns]
    st.dataframe(df[cols].rename(columns=TABLE_COLUMNS), use_container_width=True, hide_index=True)


def _render_pager(state, page: Page) -> None:
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


def _render_edit(subject: Dict[str, Any]) -> None:
    sid = subject.get("id")
    with st.form(_k(f"edit_{sid}")):
        name = st.text_input("Subject name", value=subject.get("subject_name") or "")
        code = st.text_input("Subject code", value=subject.get("subject_code") or "")
        description = st.text_area("Description", value=subject.get("description") or "")
        active = st.checkbox("Active", value=bool(subject.get("is_active", True)))
        submitted = st.form_submit_button("Save changes", type="primary")

    if submitted:
        data = {"subject_name": name, "subject_code": code, "description": description}
        errors = validate_subject(data)
        if errors:
            show_field_errors(errors)
        else:
            changes = {k: v.strip() for k, v in data.items()}
            changes["is_active"] = active
            try:
                svc.update_subject(sid, changes)
            except ApiError as e:
                show_api_error(e, "Failed to update subject")
            else:
                flash("success", f"Subject '{changes['subject_name']}' updated")
                st.rerun()

    if confirm_button("Delete subject", key=_k(f"delete_{sid}"),
                      prompt=f"Delete '{subject.get('subject_name')}'? This cannot be undone."):
        try:
            svc.delete_subject(sid)
        except ApiError as e:
            show_api_error(e, "Failed to delete subject")
        else:
            flash("success", "Subject deleted")
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
        page = svc.fetch_subjects(state.page, state.page_size)
    except ApiError as e:
        show_api_error(e, "Failed to load subjects")
        return

    rows = filter_records(page.results, state.search, state.status, SEARCH_FIELDS)
    _render_table(rows)
    _render_pager(state, page)

    if not rows:
        return
    st.markdown("#### Edit or delete")
    by_id = {r.get("id"): r for r in rows}
    chosen = st.selectbox(
        "Subject",
        list(by_id.keys()),
        format_func=lambda i: f"{by_id[i].get('subject_name')} ({by_id[i].get('subject_code')})",
        key=_k("selected"),
    )
    if chosen is not None:
        _render_edit(by_id[chosen])


def _render_add() -> None:
    with st.form(_k("add"), clear_on_submit=True):
        name = st.text_input("Subject name *")
        code = st.text_input("Subject code *")
        description = st.text_area("Description")
        submitted = st.form_submit_button("Add subject", type="primary")
    if not submitted:
        return
    data = {"subject_name": name, "subject_code": code, "description": description}
    errors = validate_subject(data)
    if errors:
        show_field_errors(errors)
        return
    try:
        svc.create_subject(data)
    except ApiError as e:
        show_api_error(e, "Failed to create subject")
        return
    flash("success", f"Subject '{name.strip()}' created")
    st.rerun()


# ────────────────────────────────────────────────────────────────────────────────
# Entry point
# ────────────────────────────────────────────────────────────────────────────────

def render() -> None:
    require_segment(acting_segment(), ROUTE_KEY)
    page_header("Subjects", "Manage the subjects offered by your school")
    render_flash()

    try:
        _render_stats()
        tab_list, tab_add, tab_upload = st.tabs(["📚 Subjects", "➕ Add Subject", "📤 Upload CSV"])
        with tab_list:
            _render_list()
        with tab_add:
            _render_add()
        with tab_upload:
            if render_upload_section(_k("upload")):
                list_state(st.session_state, _k("list")).page = 1
    except Exception as e:
        handle_error(e, "Could not display subjects.")
