"""Package init: shares app-wide constants."""
from __future__ import annotations

APP_NAME = "forex-converter"
APP_ICON = "💱"
VERSION = "0.1.0"
