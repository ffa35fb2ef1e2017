"""Turn collected staking rewards into a priced spreadsheet report."""

from datetime import datetime, timezone

import pandas as pd
from pandas import ExcelWriter

from config import get_network
from reward_window import TimeWindow


def get_column_order(currency: str) -> list:
    """Generate the report column order with dynamic currency names.

    Args:
        currency: The target currency (e.g., "EUR", "USD").

    Returns:
        A list of column names with the correct currency.
    """
    return [
        "date",
        "era",
        "block timestamp",
        "event index",
        "extrinsic index",
        "amount",
        f"value ({currency})",
    ]


def rewards_to_dataframe(
    rewards: list, price: float, network: str, currency: str = "EUR"
) -> pd.DataFrame:
    """Convert reward records into a DataFrame of token amounts and values.

    Args:
        rewards: ``RewardRecord`` instances in the order they should appear.
        price: The token price in the target currency.
        network: The network the rewards were earned on, which sets the token
            decimals.
        currency: The target currency (default: "EUR").

    Returns:
        A DataFrame with one row per reward.
    """
    decimals = get_network(network)["decimals"]
    rows = []
    for reward in rewards:
        amount = reward.amount / 10**decimals
        rows.append(
            {
                "date": datetime.fromtimestamp(
                    reward.block_timestamp, tz=timezone.utc
                ).strftime("%Y-%m-%d"),
                "era": reward.era,
                "block timestamp": reward.block_timestamp,
                "event index": reward.event_index,
                "extrinsic index": reward.extrinsic_index,
                "amount": amount,
                f"value ({currency})": amount * price,
            }
        )
    return pd.DataFrame(rows, columns=get_column_order(currency))


def add_total_row(
    reward_data: pd.DataFrame, price: float, currency: str = "EUR"
) -> pd.DataFrame:
    """Append a row with the summed amount and value plus the price used."""
    total_row = pd.DataFrame(
        [
            {
                "date": "Total",
                "extrinsic index": f"{price} {currency} per token",
                "amount": reward_data["amount"].sum(),
                f"value ({currency})": reward_data[f"value ({currency})"].sum(),
            }
        ],
        columns=get_column_order(currency),
    )
    if reward_data.empty:
        return total_row
    return pd.concat([reward_data, total_row], ignore_index=True)


def generate_overview_table(
    network: str,
    address: str,
    year: int | str,
    quarter: str,
    window: TimeWindow,
    reward_data: pd.DataFrame,
    price: float,
    currency: str = "EUR",
) -> list:
    """Generate an overview table with the key metrics of the report.

    Args:
        network: The network name.
        address: The wallet address.
        year: The report year.
        quarter: The report quarter.
        window: The time window the rewards were collected for.
        reward_data: DataFrame of rewards without the total row.
        price: The token price in the target currency.
        currency: The target currency (default: "EUR").

    Returns:
        A list of ``[metric, value]`` rows.
    """
    symbol = get_network(network)["symbol"]
    total_amount = reward_data.get("amount", pd.Series(dtype=float)).sum()
    total_value = reward_data.get(f"value ({currency})", pd.Series(dtype=float)).sum()
    return [
        ["Network", network.capitalize()],
        ["Wallet Address", address],
        ["Period", f"{year} {quarter}"],
        ["Time Window", window.describe()],
        ["Rewards", f"{len(reward_data)}"],
        [f"{symbol} Price", f"{price} {currency}"],
        [f"Total Rewards ({symbol})", f"{total_amount:.4f} {symbol}"],
        [f"Total Rewards ({currency})", f"{total_value:.2f} {currency}"],
    ]


def default_report_filename(
    year: int | str, quarter: str, network: str, address: str
) -> str:
    return f"{year}-{quarter}-{network}-{address}.xlsx"


def export_report(
    reward_data: pd.DataFrame,
    overview_table: list,
    filename: str,
    price: float,
    currency: str = "EUR",
) -> str:
    """Write the overview and the rewards (with a total row) to an Excel file.

    Args:
        reward_data: DataFrame of rewards without the total row.
        overview_table: The rows returned by ``generate_overview_table``.
        filename: The path of the Excel file to write.
        price: The token price in the target currency.
        currency: The target currency (default: "EUR").

    Returns:
        The path of the written file.
    """
    overview_df = pd.DataFrame(overview_table, columns=["Metric", "Value"])
    rewards_df = add_total_row(reward_data, price=price, currency=currency)
    with ExcelWriter(filename) as writer:
        overview_df.to_excel(writer, sheet_name="overview", index=False)
        rewards_df.to_excel(writer, sheet_name="rewards", index=False)
    return filename
