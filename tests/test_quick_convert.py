"""Tests for the manual Convert form."""

from unittest.mock import MagicMock

import pytest

from forex_converter.services import ConversionResult, NetworkError, ParseError, QuickConvertForm
from forex_converter.services.model import LoadState
from forex_converter.services.quick_convert import FAILED_MESSAGE, INVALID_MESSAGE


@pytest.fixture
def api():
    mock = MagicMock()
    mock.fetch_conversion.return_value = ConversionResult.model_validate(
        {"from": "GBP", "to": "USD", "amount": 100, "value": 127.0, "timestamp": 1718000000000}
    )
    return mock


@pytest.fixture
def form(api):
    return QuickConvertForm(api, source_currency="GBP", target_currency="USD")


def test_convert_stores_result(form, api):
    form.amount = "100"
    result = form.convert()

    api.fetch_conversion.assert_called_once_with("GBP", "USD", 100.0)
    assert result is form.result
    assert form.result.value == 127.0
    assert form.error == ""
    assert form.load_state is LoadState.IDLE


@pytest.mark.parametrize("amount", ["", "abc", "-1"])
def test_invalid_amount_shows_message(form, api, amount):
    form.amount = amount
    assert form.convert() is None
    assert form.error == INVALID_MESSAGE
    api.fetch_conversion.assert_not_called()


@pytest.mark.parametrize("error", [NetworkError("down"), ParseError("bad body")])
def test_failure_shows_generic_message(form, api, error):
    api.fetch_conversion.side_effect = error
    form.amount = "100"

    assert form.convert() is None
    assert form.error == FAILED_MESSAGE
    assert form.load_state is LoadState.IDLE


def test_new_conversion_replaces_result(form, api):
    form.amount = "100"
    first = form.convert()
    api.fetch_conversion.return_value = ConversionResult(
        from_currency="GBP", to_currency="USD", amount=5, value=6.35, timestamp=1
    )
    form.amount = "5"
    second = form.convert()

    assert second is not first
    assert form.result.amount == 5


def test_swap_clears_result(form):
    form.amount = "100"
    form.convert()
    form.swap()

    assert (form.source_currency, form.target_currency) == ("USD", "GBP")
    assert form.result is None
    assert form.amount == "100"


def test_can_convert(form):
    assert form.can_convert is False
    form.amount = "10"
    assert form.can_convert is True
    form.load_state = LoadState.BUSY
    assert form.can_convert is False


def test_result_rate():
    result = ConversionResult.model_validate(
        {"from": "EUR", "to": "JPY", "amount": 2, "value": 330.0, "timestamp": 0}
    )
    assert result.rate == 165.0
