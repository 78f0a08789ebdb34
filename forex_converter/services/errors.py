"""errors.py

Exception taxonomy for the conversion core.

* ``InvalidAmount``    – user typed something that is not a positive number.
* ``NetworkError``     – transport failure or non-2xx answer from the relay.
* ``ParseError``       – the body does not look like a conversion result.
* ``ConversionFailed`` – raised by the engine when a rate could not be
  obtained; the original ``NetworkError`` / ``ParseError`` is chained.
"""

from __future__ import annotations


class ConverterError(Exception):
    """Base class for every error raised by ``forex_converter.services``."""


class InvalidAmount(ConverterError, ValueError):
    """The amount is blank, non-numeric, non-finite or not strictly positive."""


class NetworkError(ConverterError):
    """The rate provider could not be reached or answered with an error status."""


class ParseError(ConverterError):
    """The provider answered but the payload has an unexpected shape."""


class ConversionFailed(ConverterError):
    """No rate could be obtained for a currency pair."""

    def __init__(self, source: str, target: str, reason: str = "") -> None:
        self.source = source
        self.target = target
        msg = f"Conversion {source} -> {target} failed"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
