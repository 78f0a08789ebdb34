"""api.py

Thin synchronous REST wrapper around the forex provider.

* Centralises **relay URL**, **provider URL** and **API-key** handling so
  the engine can simply call `fetch_rate("GBP", "USD")`.
* Every request goes through the public CORS relay: the provider URL is
  appended verbatim after ``?`` (``https://relay/?https://provider/...``).
* Maps every failure onto the two error kinds the rest of the app knows:
  `NetworkError` (transport / status) and `ParseError` (payload shape).

No retries are attempted; the caller decides what a failure means.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal

# -----------------------------------------------------------------------------
# Third-party imports
# -----------------------------------------------------------------------------
import requests
from pydantic import ValidationError

# Project settings helper – returns a dict of env-based config values
from forex_converter.config import settings

from .errors import NetworkError, ParseError
from .model import ConversionResult

logger = logging.getLogger(__name__)

TIMEOUT = 10  # seconds, per request


def _amount_path(amount: float) -> str:
    """Render *amount* for the URL path in plain notation, without rounding.

    ``str(float)`` is the shortest text that round-trips, so the provider
    gets the amount the user typed; `Decimal` only expands exponents.
    """
    return format(Decimal(str(amount)), "f")


class RateFetcher:
    """Fetches spot conversions for a currency pair through the relay.

    Parameters
    ----------
    api_key, relay_url, provider_url : str | None
        Override the values from `settings()`; mostly useful in tests.
    session : requests.Session | None
        Injected HTTP session; a private one is created when omitted.
    """

    def __init__(
        self,
        api_key: str | None = None,
        relay_url: str | None = None,
        provider_url: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        cfg = settings()
        self.api_key = api_key if api_key is not None else cfg["API_KEY"]
        self.relay_url = relay_url if relay_url is not None else cfg["RELAY_URL"]
        self.provider_url = (provider_url if provider_url is not None else cfg["PROVIDER_URL"]).rstrip("/")
        self._session = session or requests.Session()

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def build_url(self, source: str, target: str, amount: float) -> str:
        """Full relayed URL for converting *amount* of *source* into *target*."""
        upstream = (
            f"{self.provider_url}/convert/forex/"
            f"{source.upper()}/{target.upper()}/{_amount_path(amount)}"
            f"?apikey={self.api_key}"
        )
        return f"{self.relay_url}?{upstream}"

    def _get(self, url: str):
        """Perform a **GET** request and return the decoded JSON body.

        Raises `NetworkError` for transport failures and non-2xx statuses,
        `ParseError` when the body is not JSON.
        """
        try:
            r = self._session.get(url, timeout=TIMEOUT)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to fetch conversion data: {exc}") from exc
        try:
            return r.json()
        except ValueError as exc:
            raise ParseError("Response body is not valid JSON") from exc

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def fetch_conversion(self, source: str, target: str, amount: float) -> ConversionResult:
        """Ask the provider to convert *amount* and return its full answer."""
        payload = self._get(self.build_url(source, target, amount))
        try:
            result = ConversionResult.model_validate(payload)
        except ValidationError as exc:
            raise ParseError(f"Unexpected conversion payload: {exc.error_count()} error(s)") from exc
        if not math.isfinite(result.value):
            raise ParseError(f"Non-finite converted value {result.value!r}")
        return result

    def fetch_rate(self, source: str, target: str) -> float:
        """Spot rate for converting exactly one unit of *source* into *target*."""
        result = self.fetch_conversion(source, target, 1)
        if result.value <= 0:
            raise ParseError(f"Non-positive rate {result.value!r} for {source}/{target}")
        logger.debug("Fetched %s/%s rate %s", source, target, result.value)
        return result.value
