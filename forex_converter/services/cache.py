"""cache.py

Session-scoped store of spot rates keyed by an ordered currency pair.

Every write stores the direct rate *and* its inverse in a single
``dict.update`` so a reader never sees one direction without the other.
Entries never expire: the cache lives exactly as long as the browser
session that owns it.
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

Pair = tuple[str, str]


class RateCache:
    """In-memory ``(source, target) -> rate`` map with inverse bookkeeping."""

    def __init__(self) -> None:
        self._rates: dict[Pair, float] = {}

    @staticmethod
    def _key(source: str, target: str) -> Pair:
        return source.upper(), target.upper()

    def get_rate(self, source: str, target: str) -> float | None:
        """Return the cached rate or ``None``. Never fetches.

        Identity pairs are never cached, so ``get_rate("EUR", "EUR")`` is
        always ``None``; callers handle identity (rate 1) themselves.
        """
        return self._rates.get(self._key(source, target))

    def put_rate(self, source: str, target: str, rate: float) -> None:
        """Store *rate* for ``source -> target`` and ``1/rate`` for the inverse.

        Raises
        ------
        ValueError
            If the pair is an identity pair or *rate* is not a finite
            positive number. Nothing is written in that case.
        """
        s, t = self._key(source, target)
        if s == t:
            raise ValueError(f"Identity pair {s}/{t} is never cached")
        rate = float(rate)
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"Rate for {s}/{t} must be a positive number, got {rate!r}")

        self._rates.update({(s, t): rate, (t, s): 1.0 / rate})
        logger.debug("Cached %s/%s=%s and %s/%s=%s", s, t, rate, t, s, 1.0 / rate)

    def items(self) -> list[tuple[Pair, float]]:
        """Snapshot of all entries, sorted by pair."""
        return sorted(self._rates.items())

    def clear(self) -> None:
        self._rates.clear()

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        return self._key(*pair) in self._rates

    def __len__(self) -> int:
        return len(self._rates)
