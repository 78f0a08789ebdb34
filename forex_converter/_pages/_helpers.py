"""_helpers.py

Utility helpers shared by the Streamlit pages.

The module groups three kinds of helpers:

1. **Session helpers** – `session_object` keeps one instance of the
   converter state per browser session, `sync_widgets` pushes that state
   into widget keys before the widgets are drawn.
2. **Formatting helpers** – `format_currency`, `currency_label` and
   `convert_to_local_time` for amounts, selector options and quote times.
3. **Cache display** – `rates_frame` turns the session's rate cache into
   a DataFrame for the inspector table.
"""

from __future__ import annotations

# Third-party -----------------------------------------------------------------
from datetime import datetime, timezone
from typing import Any, Callable
from zoneinfo import ZoneInfo  # Python 3.9+
import pandas as pd
import streamlit as st

# Project ---------------------------------------------------------------------
from forex_converter.config import settings
from forex_converter.services import RateCache
from forex_converter.services.model import currency_symbol, get_currency

# -----------------------------------------------------------------------------
# 0) Navigation & session helpers
# -----------------------------------------------------------------------------
def update_page(page: None | str = None) -> None:
    """Update the ?page=... query-parameter in the URL.
    Parameters
    ----------
    page : None | str
        The new page value to set or None to use the sidebar selection.
    """
    if page is None:
        st.query_params.update(page=st.session_state.sidebar_page)
    else:
        st.query_params.update(page=page)

def session_object(key: str, factory: Callable[[], Any]) -> Any:
    """Return ``st.session_state[key]``, creating it with *factory* on first use.

    Streamlit keeps ``session_state`` per browser tab, which is exactly the
    lifetime of the rate cache and the converter state.
    """
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]

def sync_widgets(values: dict[str, Any]) -> None:
    """Write *values* into widget keys.

    Must run before the widgets are instantiated in the current rerun,
    otherwise Streamlit refuses to modify their state.
    """
    for key, value in values.items():
        st.session_state[key] = value

# -----------------------------------------------------------------------------
# 1) Formatting helpers
# -----------------------------------------------------------------------------

TS_FMT = "%Y-%m-%d %H:%M:%S"  # Timestamp format for human-readable dates
ZERO_DISPLAY = "--"  # Default display for missing values

def currency_label(code: str) -> str:
    """Selector option text, e.g. ``"GBP - British Pound"``."""
    return f"{code} - {get_currency(code).name}"

def format_currency(value: float, currency_code: str) -> str:
    """Format *value* with thousands separators, 2 to 4 decimals and a symbol.

    Examples
    --------
    >>> format_currency(1234.5, "USD")
    '1,234.50 $'
    >>> format_currency(0.78740157, "GBP")
    '0.7874 £'
    """
    whole, frac = f"{value:,.4f}".split(".")
    frac = frac.rstrip("0").ljust(2, "0")
    return f"{whole}.{frac} {currency_symbol(currency_code)}"

def convert_to_local_time(ts: int | float | datetime, fmt: str = TS_FMT) -> str:
    """
    Convert a UTC timestamp (seconds or ms) or datetime to the user's local time zone.

    Parameters
    ----------
    ts : int | float | datetime
        The UTC timestamp to convert. Numbers too large to be seconds are
        treated as milliseconds.
    fmt : str
        The format string to use for formatting the local time.

    Returns
    -------
    str
        The formatted local time, or ``ZERO_DISPLAY`` for unsupported input.
    """
    if isinstance(ts, bool):
        return ZERO_DISPLAY
    if isinstance(ts, (int, float)):
        if ts > 1e11:
            ts = ts / 1000.0
        ts = datetime.fromtimestamp(ts, tz=timezone.utc)
    elif isinstance(ts, datetime):
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
    else:
        return ZERO_DISPLAY

    return ts.astimezone(ZoneInfo(settings()["LOCAL_TZ"])).strftime(fmt)

# -----------------------------------------------------------------------------
# 2) Cache display
# -----------------------------------------------------------------------------

def rates_frame(cache: RateCache) -> pd.DataFrame:
    """One row per cached direction: ``From``, ``To``, ``Rate``."""
    rows = [{"From": s, "To": t, "Rate": rate} for (s, t), rate in cache.items()]
    return pd.DataFrame(rows, columns=["From", "To", "Rate"])
