"""Retrieve and export the staking rewards of a Polkadot or Kusama account for a
calendar quarter as an Excel file for tax reporting.
"""

import argparse
import sys
import time

import requests
from tabulate import tabulate

from config import NETWORKS, get_network
from errors import StakingReportError
from reward_collector import RewardCollector
from reward_window import normalize_quarter, quarter_window
from staking_report import (
    default_report_filename,
    export_report,
    generate_overview_table,
    rewards_to_dataframe,
)
from subscan import SubscanClient
from token_price import fetch_token_price


def parse_args(argv: list = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export staking rewards of an account for a calendar quarter."
    )
    parser.add_argument(
        "-n", "--network", choices=list(NETWORKS), help="Network (polkadot or kusama)"
    )
    parser.add_argument("-y", "--year", help="Year of the rewards")
    parser.add_argument("-q", "--quarter", help="Quarter (Q1, Q2, Q3, Q4)")
    parser.add_argument("-a", "--address", help="Wallet address")
    parser.add_argument(
        "-p", "--price", type=float, help="Token price (fetched from CoinGecko if omitted)"
    )
    parser.add_argument(
        "-c", "--currency", default="EUR", help="Price currency (default: EUR)"
    )
    parser.add_argument("-o", "--output", help="Path of the Excel file to write")
    return parser.parse_args(argv)


def prompt_value(message: str, is_valid, error_message: str) -> str:
    """Prompt until the user enters a value accepted by ``is_valid``."""
    while True:
        value = input(message).strip()
        if is_valid(value):
            return value
        print(error_message)


def is_valid_price(value: str) -> bool:
    if not value:
        return True
    try:
        float(value)
    except ValueError:
        return False
    return True


def prompt_missing_options(args: argparse.Namespace) -> argparse.Namespace:
    """Ask interactively for every option that was not given on the command line."""
    if not args.network:
        args.network = prompt_value(
            f"Select the network ({', '.join(NETWORKS)}): ",
            lambda value: value.lower() in NETWORKS,
            "Please select a supported network.",
        ).lower()
    if not args.year:
        args.year = prompt_value(
            "Enter the year: ",
            lambda value: len(value) == 4 and value.isdigit(),
            "Please enter a valid year.",
        )
    if not args.quarter:
        args.quarter = prompt_value(
            "Select the quarter (Q1, Q2, Q3, Q4): ",
            lambda value: value.upper() in ("Q1", "Q2", "Q3", "Q4"),
            "Please select a valid quarter.",
        ).upper()
    if not args.address:
        args.address = prompt_value(
            "Enter the wallet address: ",
            bool,
            "Please enter a valid wallet address.",
        )
    if args.price is None:
        price = prompt_value(
            f"Enter the token price in {args.currency} "
            "(leave empty to fetch from CoinGecko): ",
            is_valid_price,
            "Please enter a valid number.",
        )
        args.price = float(price) if price else None
    return args


def resolve_price(
    price: float | None, network: str, currency: str, session=None
) -> float:
    """Return the given price, or fetch the current one from CoinGecko."""
    if price is not None:
        return price
    print(f"Fetching token price for {network} from CoinGecko...")
    price = fetch_token_price(network, currency=currency, session=session)
    print(f"Token price for {network}: {price} {currency}")
    return price


def main(
    argv: list = None, session: requests.Session = None, sleep=time.sleep
) -> int:
    print("== Staking Rewards Exporter ==")
    args = prompt_missing_options(parse_args(argv))
    currency = args.currency.upper()

    try:
        get_network(args.network)
        quarter = normalize_quarter(args.quarter)
        window = quarter_window(args.year, quarter)
        price = resolve_price(args.price, args.network, currency, session=session)

        print(
            f"\nFetching staking rewards for {args.address} on {args.network} "
            f"({window.describe()})..."
        )
        client = SubscanClient.for_network(args.network, session=session)
        collector = RewardCollector(client, sleep=sleep)
        rewards = collector.collect(args.address, window)
    except (StakingReportError, ValueError) as e:
        print(f"\033[91mError: {e}\033[0m")  # Red text
        if e.__cause__ is not None:
            print(f"Cause: {e.__cause__!r}")
        return 1

    if not rewards:
        print("\033[93mNo rewards found for the given period.\033[0m")  # Yellow text
        return 0

    reward_data = rewards_to_dataframe(
        rewards, price=price, network=args.network, currency=currency
    )
    overview_table = generate_overview_table(
        network=args.network,
        address=args.address,
        year=args.year,
        quarter=quarter,
        window=window,
        reward_data=reward_data,
        price=price,
        currency=currency,
    )
    print(f"\nOverview ({args.year} {quarter}):")
    print(tabulate(overview_table, headers=["Metric", "Value"], tablefmt="grid"))

    print("\nExporting data to Excel...")
    filename = args.output or default_report_filename(
        args.year, quarter, args.network, args.address
    )
    export_report(
        reward_data,
        overview_table,
        filename=filename,
        price=price,
        currency=currency,
    )
    print(f"Export completed: {filename}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
