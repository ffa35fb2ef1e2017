"""Fetch the current spot price of a network's token from CoinGecko."""

import requests

from config import (
    COINGECKO_API_KEY,
    COINGECKO_PRICE_ENDPOINT,
    REQUEST_TIMEOUT,
    get_network,
)
from errors import PriceUnavailable


def fetch_token_price(
    network: str, currency: str = "EUR", session: requests.Session = None
) -> float:
    """Fetch the current price of a network's token using the CoinGecko API.

    Args:
        network: The network name (e.g., "polkadot", "kusama").
        currency: The target currency symbol (default: "EUR").
        session: Optional HTTP session to send the request with.

    Returns:
        The price of one token in the target currency.

    Raises:
        PriceUnavailable: If the request fails or the response holds no price.
    """
    token_id = get_network(network)["coingecko_id"]
    vs_currency = currency.lower()
    params = {"ids": token_id, "vs_currencies": vs_currency}
    headers = {"x-cg-demo-api-key": COINGECKO_API_KEY} if COINGECKO_API_KEY else {}

    try:
        response = (session or requests).get(
            COINGECKO_PRICE_ENDPOINT,
            params=params,
            headers=headers,
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise PriceUnavailable(f"Error fetching token price from CoinGecko: {e}") from e

    try:
        return float(data[token_id][vs_currency])
    except (KeyError, TypeError, ValueError) as e:
        raise PriceUnavailable(
            f"CoinGecko returned no {currency.upper()} price for {token_id}: {data}"
        ) from e
