# screens/finance/payment_methods.py
# -------------------------------------------------------------------
# Fee payment methods a school offers. The backend has no endpoint
# for them yet, so the registry lives in the session.
# -------------------------------------------------------------------
from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

import streamlit as st

from core.forms import flash, render_flash, show_field_errors
from core.navigation import require_segment
from core.session_store import Store, _resolve
from core.ui import page_header
from screens.finance.constants import PAYMENT_DETAIL_FIELDS, PAYMENT_TYPES

log = logging.getLogger(__name__)

ROUTE_KEY = "payment_methods"
REGISTRY_KEY = "finance__payment_methods"


@dataclass
class PaymentMethod:
    type: str
    details: Dict[str, str] = field(default_factory=dict)
    active: bool = True
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:7])


def validate_method(method_type: str, details: Dict[str, str]) -> Dict[str, str]:
    if method_type not in PAYMENT_TYPES:
        return {"type": "Please select a type"}
    missing = [f for f in PAYMENT_DETAIL_FIELDS[method_type] if not (details.get(f) or "").strip()]
    if missing:
        return {"details": f"Please fill in: {', '.join(missing)}"}
    return {}


def list_methods(store: Optional[Store] = None) -> List[PaymentMethod]:
    return _resolve(store).setdefault(REGISTRY_KEY, [])


def add_method(method_type: str, details: Dict[str, str], active: bool = True,
               store: Optional[Store] = None) -> PaymentMethod:
    """Newest first. Unknown detail keys are dropped. Raises ValueError on invalid input."""
    errors = validate_method(method_type, details)
    if errors:
        raise ValueError(next(iter(errors.values())))
    allowed = PAYMENT_DETAIL_FIELDS[method_type]
    method = PaymentMethod(
        type=method_type,
        details={k: details[k].strip() for k in allowed if k in details},
        active=active,
    )
    list_methods(store).insert(0, method)
    log.info("Added %s payment method", method_type)
    return method


def set_active(method_id: str, active: bool, store: Optional[Store] = None) -> bool:
    for m in list_methods(store):
        if m.id == method_id:
            m.active = active
            return True
    return False


def remove_method(method_id: str, store: Optional[Store] = None) -> bool:
    methods = list_methods(store)
    for i, m in enumerate(methods):
        if m.id == method_id:
            del methods[i]
            return True
    return False


def filter_methods(methods: List[PaymentMethod], query: str) -> List[PaymentMethod]:
    q = (query or "").strip().lower()
    return [m for m in methods if not q or q in m.type.lower()]


def render() -> None:
    require_segment("school", ROUTE_KEY)
    page_header("School Finance: Payment Methods", "Manage fee payment methods")
    render_flash()

    with st.expander("➕ Add fee payment method"):
        method_type = st.selectbox("Payment type", PAYMENT_TYPES, key="finance__new_type")
        with st.form("finance__add_method", clear_on_submit=True):
            details = {f: st.text_input(f) for f in PAYMENT_DETAIL_FIELDS[method_type]}
            active = st.checkbox("Active", value=True)
            submitted = st.form_submit_button("Save", type="primary")
        if submitted:
            errors = validate_method(method_type, details)
            if errors:
                show_field_errors(errors)
            else:
                add_method(method_type, details, active)
                flash("success", f"{method_type} payment method added")
                st.rerun()

    query = st.text_input("Filter by type", key="finance__filter")
    methods = filter_methods(list_methods(), query)
    if not methods:
        st.caption("No payment methods found.")
        return

    for m in methods:
        with st.container(border=True):
            c1, c2, c3 = st.columns([3, 1, 1])
            with c1:
                st.markdown(f"**{m.type}**" + ("" if m.active else " · _inactive_"))
                for k, v in m.details.items():
                    st.write(f"**{k}:** {v}")
            with c2:
                toggled = st.toggle("Active", value=m.active, key=f"finance__active_{m.id}")
                if toggled != m.active:
                    set_active(m.id, toggled)
                    st.rerun()
            with c3:
                if st.button("Remove", key=f"finance__remove_{m.id}"):
                    remove_method(m.id)
                    st.rerun()

    with st.expander("Export"):
        st.json([asdict(m) for m in methods])
