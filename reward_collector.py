"""Collect the staking rewards of an account that fall inside a time window."""

import time
from typing import Callable

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    stop_never,
    wait_exponential,
)
from tqdm import tqdm

from config import MAX_RATE_LIMIT_RETRIES, PAGE_DELAY
from errors import RateLimited
from reward_window import TimeWindow, filter_reward_page
from subscan import SubscanClient


class RewardCollector:
    """Page through an account's rewards, newest first, until the window is covered.

    Pages are fetched strictly one after another with a fixed delay between
    them. A rate limited page is retried after waiting 2, 4, 8, ... seconds;
    the attempt counter starts over for every page.

    Args:
        client: The client used to fetch reward pages.
        page_delay: Seconds to wait before requesting the next page.
        max_retries: Maximum number of rate limit retries for a single page, or
            None to retry indefinitely.
        sleep: Function used to wait (default: ``time.sleep``).
        log_fn: Function used to report progress (default: ``print``).
        show_progress: Whether to display a progress bar of fetched pages.
    """

    def __init__(
        self,
        client: SubscanClient,
        page_delay: float = PAGE_DELAY,
        max_retries: int | None = MAX_RATE_LIMIT_RETRIES,
        sleep: Callable[[float], None] = time.sleep,
        log_fn: Callable[[str], None] = print,
        show_progress: bool = True,
    ):
        if max_retries is not None and max_retries < 0:
            raise ValueError("max_retries must be non-negative or None.")
        self.client = client
        self.page_delay = page_delay
        self.max_retries = max_retries
        self.sleep = sleep
        self.log = log_fn
        self.show_progress = show_progress

    def _log_rate_limit(self, retry_state: RetryCallState) -> None:
        wait_time = retry_state.next_action.sleep
        self.log(f"API rate limit exceeded. Retrying in {wait_time:g} seconds...")

    def _retrying(self) -> Retrying:
        stop = (
            stop_never
            if self.max_retries is None
            else stop_after_attempt(self.max_retries + 1)
        )
        return Retrying(
            retry=retry_if_exception_type(RateLimited),
            wait=wait_exponential(multiplier=2, exp_base=2),
            stop=stop,
            sleep=self.sleep,
            before_sleep=self._log_rate_limit,
            reraise=True,
        )

    def fetch_page(self, address: str, page_index: int) -> list:
        """Fetch a single page, backing off while the API is rate limiting.

        Raises:
            RateLimited: If the page is still rate limited after ``max_retries``
                retries.
            RequestFailed: On any other request failure.
        """
        return self._retrying()(self.client.fetch_page, address, page_index)

    def collect(self, address: str, window: TimeWindow) -> list:
        """Collect all rewards of an address inside a time window.

        Args:
            address: The account address.
            window: The inclusive time window.

        Returns:
            The matching ``RewardRecord`` list in descending timestamp order,
            possibly empty.

        Raises:
            RateLimited: If a page stays rate limited beyond the retry cap.
            RequestFailed: If any page cannot be fetched.
        """
        rewards = []
        page_index = 0
        with tqdm(
            desc="Fetching reward pages", unit="page", disable=not self.show_progress
        ) as progress:
            while True:
                self.log(f"Fetching rewards from page {page_index + 1}...")
                page = self.fetch_page(address, page_index)
                progress.update(1)

                if not page:
                    self.log("No more rewards found.")
                    break

                matches, continue_paging = filter_reward_page(page, window)
                rewards.extend(matches)
                if not continue_paging:
                    break

                self.sleep(self.page_delay)
                page_index += 1
        return rewards
