"""model.py

Pydantic **domain models** shared by the conversion core and the pages.

`ConversionResult` mirrors the JSON body returned by the forex provider's
``/convert/forex`` endpoint, so a malformed payload is rejected by
validation instead of leaking ``KeyError`` into the UI.
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from enum import Enum

# Third-party
from pydantic import BaseModel, ConfigDict, Field

# -----------------------------------------------------------------------------
# Currencies
# -----------------------------------------------------------------------------

class Currency(BaseModel):
    """Static reference entry for one selectable currency."""

    model_config = ConfigDict(frozen=True)

    code: str                      # ISO 4217-like, e.g. "GBP"
    name: str                      # e.g. "British Pound"
    symbol: str                    # e.g. "£"


CURRENCIES: tuple[Currency, ...] = (
    Currency(code="USD", name="US Dollar", symbol="$"),
    Currency(code="EUR", name="Euro", symbol="€"),
    Currency(code="GBP", name="British Pound", symbol="£"),
    Currency(code="JPY", name="Japanese Yen", symbol="¥"),
    Currency(code="CAD", name="Canadian Dollar", symbol="C$"),
    Currency(code="AUD", name="Australian Dollar", symbol="A$"),
    Currency(code="CHF", name="Swiss Franc", symbol="CHF"),
    Currency(code="CNY", name="Chinese Yuan", symbol="¥"),
)

_BY_CODE = {c.code: c for c in CURRENCIES}

CURRENCY_CODES: tuple[str, ...] = tuple(_BY_CODE)


def get_currency(code: str) -> Currency:
    """Return the `Currency` for *code* (case-insensitive); ``KeyError`` if unknown."""
    return _BY_CODE[code.upper()]


def currency_symbol(code: str) -> str:
    """Display symbol for *code*, falling back to the code itself."""
    cur = _BY_CODE.get(code.upper())
    return cur.symbol if cur else code


# -----------------------------------------------------------------------------
# Provider payload
# -----------------------------------------------------------------------------

class ConversionResult(BaseModel):
    """Body of ``GET /convert/forex/{from}/{to}/{amount}``.

    ``from`` is a Python keyword, hence the aliases. Both the alias and the
    field name are accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    from_currency: str = Field(..., alias="from")
    to_currency: str = Field(..., alias="to")
    amount: float
    value: float
    timestamp: int                 # epoch ms of the quote

    @property
    def rate(self) -> float:
        """Implied rate: one unit of *from_currency* in *to_currency*."""
        return self.value / self.amount if self.amount else 0.0


# -----------------------------------------------------------------------------
# Controller state
# -----------------------------------------------------------------------------

class Provenance(str, Enum):
    """Which amount field the user typed into last."""

    SOURCE = "source"
    TARGET = "target"

    @property
    def other(self) -> "Provenance":
        return Provenance.TARGET if self is Provenance.SOURCE else Provenance.SOURCE


class Direction(str, Enum):
    FORWARD = "forward"            # source field edited → write target
    REVERSE = "reverse"            # target field edited → write source

    @classmethod
    def from_provenance(cls, provenance: Provenance) -> "Direction":
        return cls.FORWARD if provenance is Provenance.SOURCE else cls.REVERSE


class LoadState(str, Enum):
    IDLE = "idle"
    BUSY = "busy"


class ConversionRequest(BaseModel):
    """One conversion attempt; lives only while it is being resolved."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    amount: str                    # raw text, validated by the engine
    direction: Direction

    @property
    def from_code(self) -> str:
        return self.source if self.direction is Direction.FORWARD else self.target

    @property
    def to_code(self) -> str:
        return self.target if self.direction is Direction.FORWARD else self.source
