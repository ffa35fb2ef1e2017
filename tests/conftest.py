"""Pytest configuration and shared fixtures."""

from unittest.mock import MagicMock

import pytest

from reward_window import TimeWindow

from .fixtures.subscan_responses import Q1_2024_END, Q1_2024_START


@pytest.fixture
def q1_2024_window() -> TimeWindow:
    """The first quarter of 2024 in UTC."""
    return TimeWindow(Q1_2024_START, Q1_2024_END)


@pytest.fixture
def mock_session() -> MagicMock:
    """HTTP session double with a real headers dict."""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def sleeps() -> list:
    """Records every wait requested through an injected ``sleep``."""
    return []


@pytest.fixture
def log_messages() -> list:
    return []
