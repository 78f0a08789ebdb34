"""Tests for RateFetcher (HTTP layer mocked)."""

from unittest.mock import MagicMock

import pytest
import requests

from forex_converter.services import NetworkError, ParseError, RateFetcher, parse_amount


def _response(payload=None, status=200, json_error=False):
    resp = MagicMock()
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    if json_error:
        resp.json.side_effect = requests.JSONDecodeError("Expecting value", "", 0)
    else:
        resp.json.return_value = payload
    return resp


def _payload(value=1.27, amount=1):
    return {"from": "GBP", "to": "USD", "amount": amount, "value": value, "timestamp": 1718000000000}


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return RateFetcher(
        api_key="KEY",
        relay_url="https://relay.example/",
        provider_url="https://api.example.com/",
        session=session,
    )


def test_build_url_goes_through_relay(api):
    assert api.build_url("gbp", "usd", 100) == (
        "https://relay.example/?https://api.example.com/convert/forex/GBP/USD/100?apikey=KEY"
    )


def test_build_url_keeps_fractional_amount(api):
    assert api.build_url("EUR", "JPY", 12.5).endswith("/EUR/JPY/12.5?apikey=KEY")


@pytest.mark.parametrize("raw, path", [
    ("0.0000001", "/GBP/USD/0.0000001?"),
    ("1.23456789", "/GBP/USD/1.23456789?"),
    ("100", "/GBP/USD/100.0?"),
])
def test_build_url_sends_amount_unrounded(api, raw, path):
    """Tiny and high-precision amounts reach the provider unchanged."""
    assert path in api.build_url("GBP", "USD", parse_amount(raw))


def test_fetch_conversion_uses_exact_amount(api, session):
    session.get.return_value = _response(_payload(value=1.27e-7, amount=1e-7))

    api.fetch_conversion("GBP", "USD", 1e-7)

    assert "/convert/forex/GBP/USD/0.0000001?apikey=KEY" in session.get.call_args.args[0]


def test_fetch_rate_requests_one_unit(api, session):
    session.get.return_value = _response(_payload())

    assert api.fetch_rate("GBP", "USD") == 1.27

    url = session.get.call_args.args[0]
    assert "/convert/forex/GBP/USD/1?apikey=KEY" in url
    assert session.get.call_args.kwargs["timeout"] > 0


def test_fetch_conversion_returns_model(api, session):
    session.get.return_value = _response(_payload(value=127.0, amount=100))

    result = api.fetch_conversion("GBP", "USD", 100)

    assert result.from_currency == "GBP"
    assert result.to_currency == "USD"
    assert result.value == 127.0
    assert result.rate == pytest.approx(1.27)


def test_transport_failure_is_network_error(api, session):
    session.get.side_effect = requests.ConnectionError("boom")
    with pytest.raises(NetworkError):
        api.fetch_rate("GBP", "USD")


def test_error_status_is_network_error(api, session):
    session.get.return_value = _response(status=403)
    with pytest.raises(NetworkError):
        api.fetch_rate("GBP", "USD")


def test_non_json_body_is_parse_error(api, session):
    session.get.return_value = _response(json_error=True)
    with pytest.raises(ParseError):
        api.fetch_rate("GBP", "USD")


@pytest.mark.parametrize("payload", [
    {"message": "Invalid API key"},
    {"from": "GBP", "to": "USD", "amount": 1, "value": "n/a", "timestamp": 1},
    ["not", "a", "dict"],
])
def test_unexpected_shape_is_parse_error(api, session, payload):
    session.get.return_value = _response(payload)
    with pytest.raises(ParseError):
        api.fetch_rate("GBP", "USD")


def test_non_positive_rate_is_parse_error(api, session):
    session.get.return_value = _response(_payload(value=0))
    with pytest.raises(ParseError):
        api.fetch_rate("GBP", "USD")


def test_defaults_come_from_settings(monkeypatch):
    from forex_converter.config import settings

    monkeypatch.setenv("FINAGE_API_KEY", "from-env")
    settings.cache_clear()
    try:
        assert RateFetcher().api_key == "from-env"
    finally:
        settings.cache_clear()
