"""Environment driven settings and network metadata for the staking reports."""

import os

SUBSCAN_API_KEY = os.getenv("SUBSCAN_API_KEY", "")
COINGECKO_API_KEY = os.getenv("COINGECKO_API_KEY", "")

SUBSCAN_REWARD_PATH = "/api/v2/scan/account/reward_slash"
COINGECKO_PRICE_ENDPOINT = "https://api.coingecko.com/api/v3/simple/price"

# Subscan application error code returned when the API rate limit is exceeded.
RATE_LIMIT_ERROR_CODE = 20008

PAGE_ROWS = 100
PAGE_DELAY = float(os.getenv("SUBSCAN_PAGE_DELAY", "1"))
# 0 disables the cap and retries rate limited pages indefinitely.
MAX_RATE_LIMIT_RETRIES = int(os.getenv("SUBSCAN_MAX_RETRIES", "8")) or None
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

NETWORKS = {
    "polkadot": {
        "api_url": os.getenv(
            "SUBSCAN_API_URL_POLKADOT", "https://polkadot.api.subscan.io"
        ),
        "decimals": 10,
        "coingecko_id": "polkadot",
        "symbol": "DOT",
    },
    "kusama": {
        "api_url": os.getenv("SUBSCAN_API_URL_KUSAMA", "https://kusama.api.subscan.io"),
        "decimals": 12,
        "coingecko_id": "kusama",
        "symbol": "KSM",
    },
}


def get_network(network: str) -> dict:
    """Return the metadata for a supported network.

    Args:
        network: The network name (e.g., "polkadot", "kusama").

    Returns:
        A dictionary with the API URL, token decimals, CoinGecko id and symbol.

    Raises:
        ValueError: If the network is not supported.
    """
    try:
        return NETWORKS[network.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported network '{network}', expected one of: "
            f"{', '.join(NETWORKS)}"
        )
