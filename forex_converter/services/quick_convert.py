"""quick_convert.py

State of the manual *Convert* form: one amount, two currencies, a button.
The provider converts the exact amount and its full answer is kept as
the last result until the next conversion or a currency swap.
"""

from __future__ import annotations

import logging

from forex_converter.config import settings

from .api import RateFetcher
from .errors import InvalidAmount, NetworkError, ParseError
from .engine import parse_amount
from .model import ConversionResult, LoadState, get_currency

logger = logging.getLogger(__name__)

INVALID_MESSAGE = "Please enter a valid amount"
FAILED_MESSAGE = "Failed to convert currency. Please try again."


class QuickConvertForm:
    def __init__(
        self,
        fetcher: RateFetcher,
        source_currency: str | None = None,
        target_currency: str | None = None,
    ) -> None:
        cfg = settings()
        self.fetcher = fetcher
        self.source_currency = get_currency(source_currency or cfg["DEFAULT_SOURCE"]).code
        self.target_currency = get_currency(target_currency or cfg["DEFAULT_TARGET"]).code
        self.amount = ""
        self.result: ConversionResult | None = None
        self.error = ""
        self.load_state = LoadState.IDLE

    @property
    def can_convert(self) -> bool:
        """Mirror of the button's enabled state."""
        return self.load_state is LoadState.IDLE and self.amount.strip() != ""

    def convert(self) -> ConversionResult | None:
        """Fetch a conversion for the current amount.

        Returns the new result, or ``None`` when the amount was rejected or
        the request failed (``error`` then holds the message to show).
        """
        try:
            amount = parse_amount(self.amount)
        except InvalidAmount:
            self.error = INVALID_MESSAGE
            return None

        self.load_state = LoadState.BUSY
        self.error = ""
        try:
            self.result = self.fetcher.fetch_conversion(self.source_currency, self.target_currency, amount)
        except (NetworkError, ParseError):
            logger.exception("Conversion error")
            self.error = FAILED_MESSAGE
            return None
        finally:
            self.load_state = LoadState.IDLE
        return self.result

    def swap(self) -> None:
        self.source_currency, self.target_currency = self.target_currency, self.source_currency
        self.result = None
