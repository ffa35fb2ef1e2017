"""Client for the Subscan reward/slash API of Substrate networks."""

from dataclasses import dataclass

import requests

from config import (
    PAGE_ROWS,
    RATE_LIMIT_ERROR_CODE,
    REQUEST_TIMEOUT,
    SUBSCAN_API_KEY,
    SUBSCAN_REWARD_PATH,
    get_network,
)
from errors import RateLimited, RequestFailed


@dataclass(frozen=True)
class RewardRecord:
    """A single staking reward as reported by Subscan."""

    era: int
    block_timestamp: int
    event_index: str
    extrinsic_index: str
    amount: int

    @classmethod
    def from_api(cls, item: dict) -> "RewardRecord":
        """Parse a reward entry from a Subscan ``reward_slash`` response.

        Args:
            item: A single element of the ``data.list`` array.

        Returns:
            The parsed reward record.

        Raises:
            ValueError: If a field is missing or not an integer where one is
                expected.
        """
        try:
            return cls(
                era=int(item["era"]),
                block_timestamp=int(item["block_timestamp"]),
                event_index=str(item["event_index"]),
                extrinsic_index=str(item["extrinsic_index"]),
                amount=int(item["amount"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed reward entry {item!r}: {e}")


class SubscanClient:
    """Fetch pages of staking rewards for an account from Subscan.

    The client issues exactly one request per call and never retries; rate
    limiting is reported through ``RateLimited`` so the caller decides how to
    back off.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        session: requests.Session = None,
        timeout: float = REQUEST_TIMEOUT,
        rows: int = PAGE_ROWS,
    ):
        self.endpoint = api_url.rstrip("/") + SUBSCAN_REWARD_PATH
        self.timeout = timeout
        self.rows = rows
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if api_key:
            self.session.headers.update({"X-API-Key": api_key})

    @classmethod
    def for_network(
        cls, network: str, api_key: str = SUBSCAN_API_KEY, **kwargs
    ) -> "SubscanClient":
        """Create a client for one of the supported networks.

        Args:
            network: The network name (e.g., "polkadot", "kusama").
            api_key: The Subscan API key (default: ``SUBSCAN_API_KEY``).

        Returns:
            A client pointed at the network's Subscan API.
        """
        return cls(get_network(network)["api_url"], api_key=api_key, **kwargs)

    def fetch_page(self, address: str, page_index: int) -> list:
        """Fetch one page of rewards, newest first.

        Args:
            address: The account address to fetch rewards for.
            page_index: The zero-based page number.

        Returns:
            A list of ``RewardRecord`` ordered by descending block timestamp.
            An empty list means there is no more data.

        Raises:
            RateLimited: If Subscan reports that the rate limit was exceeded.
            RequestFailed: On network errors, HTTP errors, API errors or
                malformed responses.
        """
        if not address:
            raise ValueError("Address is required.")
        if page_index < 0:
            raise ValueError(f"Page index must be non-negative, got {page_index}.")

        payload = {
            "address": address,
            "category": "Reward",
            "page": page_index,
            "row": self.rows,
        }
        try:
            response = self.session.post(
                self.endpoint, json=payload, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise RequestFailed(f"Error fetching rewards page {page_index}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None
        code = data.get("code") if isinstance(data, dict) else None

        if code == RATE_LIMIT_ERROR_CODE or response.status_code == 429:
            raise RateLimited(code=code)
        if response.status_code >= 400:
            raise RequestFailed(
                f"Subscan request failed with status code {response.status_code}: "
                f"{response.text}"
            )
        if not isinstance(data, dict):
            raise RequestFailed("Subscan returned a non-JSON response.")
        if code not in (0, None):
            raise RequestFailed(f"Subscan API error {code}: {data.get('message')}")

        reward_list = (data.get("data") or {}).get("list") or []
        try:
            return [RewardRecord.from_api(item) for item in reward_list]
        except ValueError as e:
            raise RequestFailed(f"Unexpected response structure: {e}") from e
