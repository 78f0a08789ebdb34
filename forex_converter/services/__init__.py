"""Public service API."""
from .api import RateFetcher
from .cache import RateCache
from .controller import BidirectionalController
from .engine import ConversionEngine, format_amount, parse_amount
from .errors import ConversionFailed, ConverterError, InvalidAmount, NetworkError, ParseError
from .model import CURRENCIES, ConversionResult, Currency, Provenance
from .quick_convert import QuickConvertForm
from .scheduler import Debouncer, Scheduler

__all__ = [
    "RateFetcher",
    "RateCache",
    "BidirectionalController",
    "ConversionEngine",
    "format_amount",
    "parse_amount",
    "ConversionFailed",
    "ConverterError",
    "InvalidAmount",
    "NetworkError",
    "ParseError",
    "CURRENCIES",
    "ConversionResult",
    "Currency",
    "Provenance",
    "QuickConvertForm",
    "Debouncer",
    "Scheduler",
]
