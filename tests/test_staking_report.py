"""Tests for staking_report.py."""

import pandas as pd
import pytest

from staking_report import (
    add_total_row,
    default_report_filename,
    export_report,
    generate_overview_table,
    get_column_order,
    rewards_to_dataframe,
)
from subscan import RewardRecord


@pytest.fixture
def rewards() -> list:
    return [
        RewardRecord(1450, 1711000000, "20100000-12", "20100000-1", 12_500_000_000),
        RewardRecord(1449, 1710900000, "20083333-40", "20083333-1", 7_500_000_000),
    ]


class TestRewardsToDataFrame:
    def test_polkadot_uses_ten_decimals(self, rewards):
        df = rewards_to_dataframe(rewards, price=6.0, network="polkadot")

        assert df["amount"].tolist() == pytest.approx([1.25, 0.75])
        assert df["value (EUR)"].tolist() == pytest.approx([7.5, 4.5])

    def test_kusama_uses_twelve_decimals(self, rewards):
        df = rewards_to_dataframe(rewards, price=30.0, network="kusama", currency="USD")

        assert df["amount"].tolist() == pytest.approx([0.0125, 0.0075])
        assert df["value (USD)"].tolist() == pytest.approx([0.375, 0.225])

    def test_columns_and_metadata(self, rewards):
        df = rewards_to_dataframe(rewards, price=6.0, network="polkadot")

        assert list(df.columns) == get_column_order("EUR")
        first = df.iloc[0]
        assert first["date"] == "2024-03-21"
        assert first["era"] == 1450
        assert first["block timestamp"] == 1711000000
        assert first["event index"] == "20100000-12"
        assert first["extrinsic index"] == "20100000-1"

    def test_no_rewards(self):
        df = rewards_to_dataframe([], price=6.0, network="polkadot")
        assert df.empty
        assert list(df.columns) == get_column_order("EUR")


class TestAddTotalRow:
    def test_total_row(self, rewards):
        df = add_total_row(rewards_to_dataframe(rewards, 6.0, "polkadot"), price=6.0)

        assert len(df) == 3
        total = df.iloc[-1]
        assert total["date"] == "Total"
        assert total["extrinsic index"] == "6.0 EUR per token"
        assert total["amount"] == pytest.approx(2.0)
        assert total["value (EUR)"] == pytest.approx(12.0)

    def test_total_row_without_rewards(self):
        df = add_total_row(rewards_to_dataframe([], 6.0, "polkadot"), price=6.0)

        assert len(df) == 1
        assert df.iloc[0]["amount"] == 0


class TestOverviewTable:
    def test_overview(self, rewards, q1_2024_window):
        reward_data = rewards_to_dataframe(rewards, price=6.0, network="polkadot")

        table = generate_overview_table(
            network="polkadot",
            address="15oF4uVJ",
            year=2024,
            quarter="Q1",
            window=q1_2024_window,
            reward_data=reward_data,
            price=6.0,
        )

        metrics = dict(table)
        assert metrics["Network"] == "Polkadot"
        assert metrics["Period"] == "2024 Q1"
        assert metrics["Rewards"] == "2"
        assert metrics["DOT Price"] == "6.0 EUR"
        assert metrics["Total Rewards (DOT)"] == "2.0000 DOT"
        assert metrics["Total Rewards (EUR)"] == "12.00 EUR"


class TestExportReport:
    def test_default_filename(self):
        assert (
            default_report_filename(2024, "Q1", "kusama", "HNZata")
            == "2024-Q1-kusama-HNZata.xlsx"
        )

    def test_writes_overview_and_rewards_sheets(self, rewards, q1_2024_window, tmp_path):
        reward_data = rewards_to_dataframe(rewards, price=6.0, network="polkadot")
        overview = generate_overview_table(
            "polkadot", "15oF4uVJ", 2024, "Q1", q1_2024_window, reward_data, 6.0
        )
        filename = tmp_path / "report.xlsx"

        written = export_report(reward_data, overview, filename=filename, price=6.0)

        sheets = pd.read_excel(written, sheet_name=None)
        assert list(sheets) == ["overview", "rewards"]
        assert len(sheets["overview"]) == len(overview)
        assert len(sheets["rewards"]) == 3
        assert sheets["rewards"].iloc[-1]["date"] == "Total"
