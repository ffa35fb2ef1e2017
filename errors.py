"""Exceptions raised while collecting and pricing staking rewards."""


class StakingReportError(Exception):
    """Base class for all errors raised by the staking report tools."""


class RateLimited(StakingReportError):
    """The Subscan API rejected a request because of its rate limit.

    Recoverable: the reward collector backs off and retries the same page.
    """

    def __init__(self, message: str = "API rate limit exceeded", code: int = None):
        super().__init__(message)
        self.code = code


class RequestFailed(StakingReportError):
    """A request failed for any reason other than rate limiting."""


class InvalidWindow(StakingReportError, ValueError):
    """A time window, year or quarter is malformed."""


class PriceUnavailable(StakingReportError):
    """The token price could not be retrieved."""
