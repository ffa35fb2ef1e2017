"""Tests for token_price.py."""

import pytest
import requests

from errors import PriceUnavailable
from token_price import fetch_token_price

from .fixtures.subscan_responses import make_response


class TestFetchTokenPrice:
    def test_polkadot_price(self, mock_session):
        mock_session.get.return_value = make_response({"polkadot": {"eur": 6.42}})

        assert fetch_token_price("polkadot", session=mock_session) == 6.42

        _, kwargs = mock_session.get.call_args
        assert kwargs["params"] == {"ids": "polkadot", "vs_currencies": "eur"}

    def test_kusama_price_in_usd(self, mock_session):
        mock_session.get.return_value = make_response({"kusama": {"usd": 31}})

        price = fetch_token_price("kusama", currency="USD", session=mock_session)

        assert price == 31.0
        assert isinstance(price, float)

    def test_missing_currency(self, mock_session):
        mock_session.get.return_value = make_response({"polkadot": {"usd": 6.9}})

        with pytest.raises(PriceUnavailable):
            fetch_token_price("polkadot", session=mock_session)

    def test_empty_response(self, mock_session):
        mock_session.get.return_value = make_response({})
        with pytest.raises(PriceUnavailable):
            fetch_token_price("polkadot", session=mock_session)

    def test_http_error(self, mock_session):
        mock_session.get.return_value = make_response(
            {"status": {"error_code": 429, "error_message": "Throttled"}}, 429
        )
        with pytest.raises(PriceUnavailable):
            fetch_token_price("polkadot", session=mock_session)

    def test_network_error(self, mock_session):
        mock_session.get.side_effect = requests.Timeout("timed out")

        with pytest.raises(PriceUnavailable) as exc_info:
            fetch_token_price("polkadot", session=mock_session)
        assert isinstance(exc_info.value.__cause__, requests.Timeout)

    def test_unknown_network(self, mock_session):
        with pytest.raises(ValueError):
            fetch_token_price("solana", session=mock_session)
        mock_session.get.assert_not_called()
