"""live_converter.py

Streamlit page with two linked amount fields that convert each other.

Widget callbacks only forward events to the session's
`BidirectionalController`; the controller decides what to recompute.
While a debounced recomputation is waiting, an autorefresh timer keeps
rerunning the script so `tick()` can fire it once the quiet window ends.
"""

from __future__ import annotations

import streamlit as st
from streamlit_autorefresh import st_autorefresh

from forex_converter.config import settings
from forex_converter.services import (
    BidirectionalController,
    ConversionEngine,
    RateCache,
    RateFetcher,
)
from forex_converter.services.model import CURRENCY_CODES

from ._helpers import currency_label, rates_frame, session_object, sync_widgets

_KEY = "live_controller"


def _new_controller() -> BidirectionalController:
    engine = ConversionEngine(RateCache(), RateFetcher())
    return BidirectionalController(engine)


def _controller() -> BidirectionalController:
    return session_object(_KEY, _new_controller)

# -----------------------------------------------------------------------------
# Widget callbacks (run before the script reruns)
# -----------------------------------------------------------------------------

def _on_source_amount() -> None:
    _controller().edit_source(st.session_state.live_source_amount)

def _on_target_amount() -> None:
    _controller().edit_target(st.session_state.live_target_amount)

def _on_source_currency() -> None:
    _controller().select_source_currency(st.session_state.live_source_currency)

def _on_target_currency() -> None:
    _controller().select_target_currency(st.session_state.live_target_currency)

def _on_swap() -> None:
    _controller().swap()

# -----------------------------------------------------------------------------
# Page renderer
# -----------------------------------------------------------------------------

def render() -> None:
    ctl = _controller()

    # ── 1 · Fire due recomputations ------------------------------------------
    with st.spinner("Converting..."):
        ctl.tick()

    # ── 2 · Push controller state into the widgets -----------------------------
    sync_widgets({
        "live_source_currency": ctl.source_currency,
        "live_target_currency": ctl.target_currency,
        "live_source_amount": ctl.source_amount,
        "live_target_amount": ctl.target_amount,
    })

    st.subheader("Live converter")
    st.caption("Type in either field; the other one follows.")

    left, middle, right = st.columns([5, 1, 5], vertical_alignment="bottom")
    with left:
        st.selectbox("From", CURRENCY_CODES, format_func=currency_label,
                     key="live_source_currency", on_change=_on_source_currency)
        st.text_input("Amount", key="live_source_amount", placeholder="Enter amount",
                      on_change=_on_source_amount)
    with middle:
        st.button("⇄", key="live_swap", help="Swap currencies", on_click=_on_swap)
    with right:
        st.selectbox("To", CURRENCY_CODES, format_func=currency_label,
                     key="live_target_currency", on_change=_on_target_currency)
        st.text_input("Converted", key="live_target_amount", placeholder="Enter amount",
                      on_change=_on_target_amount)

    # ── 3 · Status -------------------------------------------------------------
    if ctl.error:
        st.error(ctl.error)
    elif ctl.pending:
        st.caption("Converting...")

    with st.expander("Cached rates", expanded=False):
        st.dataframe(rates_frame(ctl.engine.cache), hide_index=True)

    # ── 4 · Keep rerunning until the pending recomputation has fired ------------
    if ctl.pending:
        st_autorefresh(interval=settings()["DEBOUNCE_MS"], key="live_debounce")
