"""engine.py

Amount validation, rate resolution (cache first, provider second) and the
conversion arithmetic. Cached rates keep full float precision; only the
display string is rounded to two decimals.
"""

from __future__ import annotations

import logging
import math
from typing import Protocol

from .cache import RateCache
from .errors import ConversionFailed, InvalidAmount, NetworkError, ParseError

logger = logging.getLogger(__name__)


class RateSource(Protocol):
    def fetch_rate(self, source: str, target: str) -> float: ...


def parse_amount(raw) -> float:
    """Return *raw* as a finite float > 0 or raise `InvalidAmount`."""
    if raw is None or isinstance(raw, bool):
        raise InvalidAmount(f"Not an amount: {raw!r}")
    text = raw.strip() if isinstance(raw, str) else raw
    if text == "":
        raise InvalidAmount("Amount is empty")
    # float() accepts digit separators ("1_000"), typed input must not
    if isinstance(text, str) and "_" in text:
        raise InvalidAmount(f"Not a number: {raw!r}")
    try:
        value = float(text)
    except (TypeError, ValueError):
        raise InvalidAmount(f"Not a number: {raw!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidAmount(f"Amount must be a positive number, got {raw!r}")
    return value


def format_amount(value: float) -> str:
    """Two-decimal display string, e.g. ``127.0 -> "127.00"``."""
    return f"{value:.2f}"


class ConversionEngine:
    """Converts amounts using a `RateCache` backed by a remote `RateSource`."""

    def __init__(self, cache: RateCache, fetcher: RateSource) -> None:
        self.cache = cache
        self.fetcher = fetcher

    def resolve_rate(self, source: str, target: str) -> float:
        """Rate for ``source -> target``.

        Identity pairs short-circuit to 1.0 without touching cache or network.
        On a cache miss the rate is fetched and written (with its inverse)
        only once the fetch has succeeded.
        """
        source, target = source.upper(), target.upper()
        if source == target:
            return 1.0

        rate = self.cache.get_rate(source, target)
        if rate is not None:
            return rate

        try:
            rate = self.fetcher.fetch_rate(source, target)
        except (NetworkError, ParseError) as exc:
            raise ConversionFailed(source, target, str(exc)) from exc
        try:
            self.cache.put_rate(source, target, rate)
        except ValueError as exc:
            raise ConversionFailed(source, target, str(exc)) from exc
        return rate

    def convert(self, amount, source: str, target: str) -> float:
        """Convert *amount* (raw text or number) at full precision.

        Raises `InvalidAmount` before any cache or network access, and
        `ConversionFailed` if no rate could be obtained.
        """
        value = parse_amount(amount)
        return value * self.resolve_rate(source, target)

    def convert_display(self, amount, source: str, target: str) -> str:
        return format_amount(self.convert(amount, source, target))
