"""quick_convert.py

Streamlit page for the manual flow: type an amount, pick two currencies,
press **Convert**. The provider's answer is shown with the implied rate
and the quote time.
"""

from __future__ import annotations

import streamlit as st

from forex_converter.services import QuickConvertForm, RateFetcher
from forex_converter.services.model import CURRENCY_CODES

from ._helpers import (
    convert_to_local_time,
    currency_label,
    format_currency,
    session_object,
    sync_widgets,
)


def _form() -> QuickConvertForm:
    return session_object("quick_form", lambda: QuickConvertForm(RateFetcher()))

def _on_amount() -> None:
    form = _form()
    form.amount = st.session_state.quick_amount

def _on_currency() -> None:
    form = _form()
    form.source_currency = st.session_state.quick_source_currency
    form.target_currency = st.session_state.quick_target_currency

def _on_swap() -> None:
    _form().swap()


def render() -> None:
    form = _form()
    sync_widgets({
        "quick_source_currency": form.source_currency,
        "quick_target_currency": form.target_currency,
        "quick_amount": form.amount,
    })

    st.subheader("Quick convert")
    st.text_input("Amount", key="quick_amount", placeholder="Enter amount", on_change=_on_amount)

    left, right = st.columns(2)
    with left:
        st.selectbox("From", CURRENCY_CODES, format_func=currency_label,
                     key="quick_source_currency", on_change=_on_currency)
    with right:
        st.selectbox("To", CURRENCY_CODES, format_func=currency_label,
                     key="quick_target_currency", on_change=_on_currency)

    st.button("⇅ Swap currencies", key="quick_swap", on_click=_on_swap)

    if st.button("Convert", key="quick_convert", type="primary",
                 disabled=not form.can_convert, use_container_width=True):
        with st.spinner("Converting..."):
            form.convert()

    if form.error:
        st.error(form.error)

    result = form.result
    if result is None:
        return

    # ── Result card -----------------------------------------------------------
    with st.container(border=True):
        st.caption("Conversion Result")
        st.markdown(
            f"### {format_currency(result.amount, result.from_currency)}"
            f" = {format_currency(result.value, result.to_currency)}"
        )
        st.caption(f"Exchange Rate: 1 {result.from_currency} = {result.rate:.4f} {result.to_currency}")
        st.caption(f"Last Updated: {convert_to_local_time(result.timestamp)}")
