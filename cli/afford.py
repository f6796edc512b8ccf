#!/usr/bin/env python3

import sys
import yaml
from affordability.calculator import (
    AffordabilityItem,
    calculate_amount,
    check_house_price,
)
from cli.formatting import format_currency
from logger import get_logger

logger = get_logger()

RESULT_LABELS = {
    AffordabilityItem.HOUSE: "Affordable home price",
    AffordabilityItem.CAR: "Affordable car price",
    AffordabilityItem.RETIREMENT: "Monthly saving needed",
}


def _parse_overrides(pairs):
    """Parse KEY=VALUE pairs; values are read as YAML scalars."""
    overrides = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected KEY=VALUE, got '{pair}'")
        overrides[key.strip()] = yaml.safe_load(value)
    return overrides


def cmd_afford(args, services):
    """Estimate what an item costs or what can be afforded."""
    item = AffordabilityItem.from_name(args.item)
    try:
        overrides = _parse_overrides(args.set)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    amount = calculate_amount(item, args.income, overrides)
    label = RESULT_LABELS.get(item, "Estimated cost")
    logger.info(f"{label}: {format_currency(amount)}")

    if args.price is not None:
        check = check_house_price(args.price, args.income)
        verdict = "affordable" if check.is_affordable else "not affordable"
        logger.info(f"\nHome price {format_currency(args.price)} is {verdict}")
        logger.info(f"  Down payment:    {format_currency(check.down_payment)}")
        logger.info(f"  Monthly payment: {format_currency(check.monthly_payment)}")
        logger.info(f"  Income required: {format_currency(check.required_income)}")


def setup_parser(subparsers):
    """Setup afford subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "afford",
        help="Affordability estimates",
        description="Estimate affordability of a purchase or savings goal",
    )
    parser.add_argument(
        "item",
        choices=[item.value for item in AffordabilityItem],
        help="What to estimate",
    )
    parser.add_argument(
        "--income", type=float, required=True, help="Annual income"
    )
    parser.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        help="Override an assumption (repeatable)",
    )
    parser.add_argument(
        "--price",
        type=float,
        help="Also check whether a home at this price is affordable",
    )
    parser.set_defaults(func=cmd_afford)
