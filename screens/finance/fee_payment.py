# screens/finance/fee_payment.py
from __future__ import annotations

from typing import List, Optional

import streamlit as st

from core.navigation import navigate_to, require_segment
from core.session_store import PARENT, get_info, is_authenticated
from core.ui import page_header
from screens.finance.constants import FEE_SERVICE, PAYMENT_INSTRUCTIONS, PAYMENT_NOTES

ROUTE_KEY = "fee_payment"
FEE_INFO_ROUTE = "fee_information"


def payment_modes() -> List[str]:
    return list(PAYMENT_INSTRUCTIONS)


def instructions_for(mode: str) -> List[str]:
    """Numbered steps for a payment mode. Raises KeyError for an unknown mode."""
    return [f"{i}. {step}" for i, step in enumerate(PAYMENT_INSTRUCTIONS[mode], start=1)]


def _reference() -> Optional[str]:
    if not is_authenticated(PARENT):
        return None
    student = get_info(PARENT).get("student") or {}
    return student.get("admission_number")


def render() -> None:
    page_header("Fee Payment", "Select a payment mode to see how to pay")

    modes = payment_modes()
    cols = st.columns(3)
    for i, mode in enumerate(modes):
        with cols[i % 3]:
            if st.button(mode, key=f"fee_mode_{i}", use_container_width=True):
                st.session_state["fee_payment__mode"] = mode

    mode = st.session_state.get("fee_payment__mode")
    if not mode:
        return

    st.markdown("---")
    st.subheader(f"{mode.upper()} PAYMENT INSTRUCTIONS")
    st.markdown(f"**Service:** {FEE_SERVICE}")
    reference = _reference()
    if reference:
        st.markdown(f"**Application Number:** {reference}")
    st.markdown("\n".join(instructions_for(mode)))
    if mode in PAYMENT_NOTES:
        st.info(PAYMENT_NOTES[mode])
    if st.button("Close", key="fee_payment__close"):
        del st.session_state["fee_payment__mode"]
        st.rerun()


def render_fee_information() -> None:
    """Parent-portal entry point to fee payment."""
    require_segment(PARENT, FEE_INFO_ROUTE)
    page_header("Fee Information")
    student = get_info(PARENT).get("student") or {}
    if student:
        st.write(f"Fees for **{student.get('full_name', 'your child')}**"
                 f" ({student.get('admission_number', '')})")
    if st.button("Pay Fees", type="primary"):
        navigate_to(ROUTE_KEY)
