"""Custom price updater for Sharesight portfolios.

Usage:
    # List custom investments (id, code, name)
    sharesight list

    # Add a price for the investment with code FUND1
    sharesight update FUND1 2022-01-12 398.27

    # Same, addressing the investment by its Sharesight id
    sharesight update 123456 2022-01-12 398.27 --use-id

    # Show scrapeable prices, then scrape one
    sharesight scrape --list
    sharesight scrape IE00B3X1NT05

CLIENT_ID and CLIENT_SECRET must be set (or present in .env) for every command.
"""

from __future__ import annotations

import argparse
import sys

from ..config import AppConfig, load_config, load_credentials, load_env_file
from ..errors import SharesightError, UsageError
from ..helpers.validation import (
    format_price,
    parse_investment_id,
    parse_price,
    validate_date,
)
from ..integrations.sharesight import authenticate
from ..logutils import logger, setup_logging
from ..models import Credentials
from ..sources import fetch_reference_price, list_sources


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sharesight",
        description="Custom price updater for sharesight portfolios",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    sub = parser.add_subparsers(dest="cmd", required=True, metavar="COMMAND")

    sub_list = sub.add_parser(
        "list", help="Lists custom investments, showing their name and IDs"
    )
    sub_list.set_defaults(func=cmd_list)

    sub_update = sub.add_parser(
        "update",
        help="Adds a new price at a specific date for the given investment",
    )
    sub_update.add_argument(
        "investment",
        help="The custom investment code, or internal sharesight ID if you pass --use-id",
    )
    sub_update.add_argument("date", help="The date, formatted like YYYY-MM-DD")
    sub_update.add_argument("price", help="The price at this date")
    sub_update.add_argument(
        "--use-id",
        action="store_true",
        help="Identify the investment using the internal sharesight ID, not your custom code",
    )
    sub_update.set_defaults(func=cmd_update)

    sub_scrape = sub.add_parser(
        "scrape",
        help="Try and scrape the price of a fund from the web, or list available sources",
    )
    sub_scrape.add_argument(
        "code",
        nargs="?",
        help="The code of a scrapeable price, taken from the `scrape --list` command",
    )
    sub_scrape.add_argument(
        "--list",
        action="store_true",
        help="List the funds/investments it is possible to scrape the price for",
    )
    sub_scrape.set_defaults(func=cmd_scrape)
    return parser


def cmd_list(args: argparse.Namespace, config: AppConfig, credentials: Credentials) -> int:
    with authenticate(credentials, config) as client:
        investments = client.list_investments()
    for investment in investments:
        print(investment.as_row())
    return 0


def cmd_update(args: argparse.Namespace, config: AppConfig, credentials: Credentials) -> int:
    # All argument checks happen before any network activity
    date = validate_date(args.date)
    price = parse_price(args.price)
    investment_id = parse_investment_id(args.investment) if args.use_id else None

    with authenticate(credentials, config) as client:
        if investment_id is None:
            investment_id = client.resolve_id_by_code(args.investment)

        print(f"add_custom_investment_price {investment_id} {date} {format_price(price)}")
        ok = client.submit_price(investment_id, date, price)

    if not ok:
        print("Failed to put custom price", file=sys.stderr)
        return 1
    print("Success")
    return 0


def cmd_scrape(args: argparse.Namespace, config: AppConfig, credentials: Credentials) -> int:
    if args.list:
        for source in list_sources():
            print(source.as_row())
        return 0
    if not args.code:
        raise UsageError("Missing scrape code; pass one from `scrape --list`")

    observation = fetch_reference_price(args.code, config=config)
    print(f"{args.code}\t{observation.date}\t{format_price(observation.price)}")
    return 0


def run(args: argparse.Namespace) -> int:
    """Load configuration and credentials, then dispatch to the selected command.

    Credentials are required for every command, including ``scrape``, so a
    missing ``CLIENT_ID``/``CLIENT_SECRET`` fails before any command runs.
    """
    load_env_file()
    config = load_config()
    if not args.verbose:
        setup_logging(config.LOG_LEVEL)
    credentials = load_credentials()
    logger.debug(f"Running command {args.cmd!r} against {config.API_BASE_URL}")
    return args.func(args, config, credentials)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    try:
        return run(args)
    except SharesightError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except Exception as e:
        logger.exception(f"Unexpected failure: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
