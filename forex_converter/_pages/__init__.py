"""Registry of Streamlit pages so main.py can route dynamically."""
from typing import Callable

from . import live_converter, quick_convert

Page = Callable[[], None]

registry: dict[str, Page] = {
    "Live converter": live_converter.render,
    "Quick convert": quick_convert.render,
}

__all__ = ["registry"]
