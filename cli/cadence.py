#!/usr/bin/env python3

from models.cadence import PaymentCadence
from cli.formatting import format_currency
from logger import get_logger

logger = get_logger()


def cmd_convert(args, services):
    """Convert an amount between per-paycheck and monthly."""
    cadence = PaymentCadence.from_label(args.cadence)

    if args.to_paycheck:
        per_paycheck = cadence.to_per_paycheck(args.amount)
        logger.info(
            f"{format_currency(args.amount)} per month = "
            f"{format_currency(per_paycheck)} per {cadence.value} paycheck"
        )
    else:
        per_paycheck = args.amount
        logger.info(
            f"{format_currency(per_paycheck)} per {cadence.value} paycheck = "
            f"{format_currency(cadence.to_monthly(per_paycheck))} per month"
        )
    logger.info(f"Annual: {format_currency(cadence.to_annual(per_paycheck))}")


def setup_parser(subparsers):
    """Setup cadence subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "cadence",
        help="Paycheck cadence conversions",
        description="Convert amounts between per-paycheck and monthly figures",
    )

    cadence_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available cadence commands",
        dest="subcommand",
        required=True,
    )

    convert_parser = cadence_subparsers.add_parser(
        "convert", help="Convert an amount"
    )
    convert_parser.add_argument("amount", type=float, help="Amount to convert")
    convert_parser.add_argument(
        "--cadence",
        required=True,
        help="Paycheck cadence (Weekly, Bi-Weekly, Semi-Monthly, Monthly)",
    )
    direction = convert_parser.add_mutually_exclusive_group()
    direction.add_argument(
        "--to-monthly",
        action="store_true",
        help="Treat AMOUNT as per paycheck and convert to monthly (default)",
    )
    direction.add_argument(
        "--to-paycheck",
        action="store_true",
        help="Treat AMOUNT as monthly and convert to per paycheck",
    )
    convert_parser.set_defaults(func=cmd_convert)
