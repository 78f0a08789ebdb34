"""main.py

Streamlit **entry-point** for the forex converter.

Responsibilities
----------------
* Define global page layout (centred view, title, sidebar).
* Configure logging once per server process.
* Implement a simple **navigation radio** – "Live converter" vs
  "Quick convert" – kept in sync with the ``?page=`` query-parameter so a
  direct link opens the right form.

Run with ``streamlit run forex_converter/main.py``.
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
import logging
import sys

# Third-party
import streamlit as st

from forex_converter import APP_ICON, APP_NAME, VERSION
from forex_converter.config import API_KEY_PLACEHOLDER, settings

# -----------------------------------------------------------------------------
# 0) Global page configuration – must run before any Streamlit call
# -----------------------------------------------------------------------------
st.set_page_config(
    page_title="Forex Converter",
    page_icon=APP_ICON,
    layout="centered",
    initial_sidebar_state="expanded",
)

# -----------------------------------------------------------------------------
# Logging (basicConfig is a no-op on reruns once handlers exist)
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=settings()["LOG_LEVEL"],
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(APP_NAME)


@st.cache_resource
def _warn_missing_key() -> None:
    # once per server process, not once per rerun
    if settings()["API_KEY"] == API_KEY_PLACEHOLDER:
        logger.warning("FINAGE_API_KEY is not set; conversions will fail until it is configured.")


_warn_missing_key()

# -----------------------------------------------------------------------------
# Local imports (after Streamlit initialisation)
# -----------------------------------------------------------------------------
from forex_converter._pages import registry
from forex_converter._pages._helpers import update_page

# -----------------------------------------------------------------------------
# 1) Sidebar – navigation radio
# -----------------------------------------------------------------------------
st.sidebar.title("Forex Converter")
st.sidebar.caption("Convert currencies with real-time exchange rates")

pages = list(registry)
initial_page = st.query_params.get("page", pages[0])
if initial_page not in registry:
    initial_page = pages[0]

page = st.sidebar.radio(
    "Navigate",
    pages,
    index=pages.index(initial_page),
    key="sidebar_page",
    on_change=update_page,  # Update URL query-params when page changes
)

# -----------------------------------------------------------------------------
# 2) Routing
# -----------------------------------------------------------------------------
st.title("Forex Converter")
registry[page]()

st.sidebar.markdown("---")
st.sidebar.caption(f"{APP_NAME} v{VERSION}")
