"""Time windows for reward reports and filtering of newest-first reward pages."""

from dataclasses import dataclass
from datetime import datetime, timezone

from errors import InvalidWindow

QUARTER_MONTHS = {
    "Q1": ((1, 1), (3, 31)),
    "Q2": ((4, 1), (6, 30)),
    "Q3": ((7, 1), (9, 30)),
    "Q4": ((10, 1), (12, 31)),
}


@dataclass(frozen=True)
class TimeWindow:
    """An inclusive ``[start_ts, end_ts]`` range of Unix timestamps."""

    start_ts: int
    end_ts: int

    def __post_init__(self):
        if self.start_ts > self.end_ts:
            raise InvalidWindow(
                f"Window start {self.start_ts} is after window end {self.end_ts}."
            )

    def contains(self, timestamp: int) -> bool:
        return self.start_ts <= timestamp <= self.end_ts

    def describe(self, time_format: str = "%Y-%m-%d %H:%M:%S") -> str:
        """Return the window as a human-readable UTC range."""
        start = datetime.fromtimestamp(self.start_ts, tz=timezone.utc)
        end = datetime.fromtimestamp(self.end_ts, tz=timezone.utc)
        return f"{start.strftime(time_format)} - {end.strftime(time_format)} UTC"


def normalize_quarter(quarter: str) -> str:
    """Normalize a quarter label such as "q2" or "2" to "Q2".

    Raises:
        InvalidWindow: If the label is not one of Q1-Q4.
    """
    label = str(quarter).strip().upper()
    if not label.startswith("Q"):
        label = f"Q{label}"
    if label not in QUARTER_MONTHS:
        raise InvalidWindow(f"Invalid quarter '{quarter}', expected Q1, Q2, Q3 or Q4.")
    return label


def quarter_window(year: int | str, quarter: str) -> TimeWindow:
    """Map a year and calendar quarter to a UTC time window.

    Args:
        year: The four-digit year.
        quarter: The quarter label (Q1-Q4, case insensitive).

    Returns:
        The window from the first second of the quarter's first day to the last
        second of its last day.

    Raises:
        InvalidWindow: If the year or quarter is malformed.
    """
    year_str = str(year).strip()
    if len(year_str) != 4 or not year_str.isdigit():
        raise InvalidWindow(f"Invalid year '{year}', expected a four-digit year.")
    (start_month, start_day), (end_month, end_day) = QUARTER_MONTHS[
        normalize_quarter(quarter)
    ]
    start = datetime(int(year_str), start_month, start_day, tzinfo=timezone.utc)
    end = datetime(
        int(year_str), end_month, end_day, 23, 59, 59, tzinfo=timezone.utc
    )
    return TimeWindow(int(start.timestamp()), int(end.timestamp()))


def filter_reward_page(page: list, window: TimeWindow) -> tuple[list, bool]:
    """Select the rewards of a page that fall inside a window.

    Pages arrive newest first, so once the oldest reward on a page is older
    than the window start, later pages cannot contain matches.

    Args:
        page: Reward records ordered by descending block timestamp.
        window: The inclusive time window to match.

    Returns:
        A tuple of the matching records (in page order) and whether the next
        page should be fetched.
    """
    if not page:
        return [], False
    matches = [reward for reward in page if window.contains(reward.block_timestamp)]
    continue_paging = page[-1].block_timestamp >= window.start_ts
    return matches, continue_paging
