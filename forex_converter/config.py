# config.py
from functools import lru_cache
from pathlib import Path
from dotenv import load_dotenv
import os

load_dotenv(Path(__file__).parent.parent / ".env")

# Shipped in templates; the provider rejects it, so conversions fail until a
# real key is configured.
API_KEY_PLACEHOLDER = "{{FINAGE_API_KEY}}"

@lru_cache
def settings():
    return {
        "API_KEY": os.getenv("FINAGE_API_KEY", API_KEY_PLACEHOLDER) or API_KEY_PLACEHOLDER,
        "RELAY_URL": os.getenv("RELAY_URL", "https://proxy.corsfix.com/"),
        "PROVIDER_URL": os.getenv("PROVIDER_URL", "https://api.finage.co.uk"),
        # quiet window before an edited field triggers a conversion
        "DEBOUNCE_MS": int(os.getenv("DEBOUNCE_MS", "300")),
        "DEFAULT_SOURCE": os.getenv("DEFAULT_SOURCE", "GBP").upper(),
        "DEFAULT_TARGET": os.getenv("DEFAULT_TARGET", "USD").upper(),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        "LOCAL_TZ": os.getenv("LOCAL_TZ", "UTC"),
    }
