#!/usr/bin/env python3
"""
Budgie CLI - Unified command-line interface for budget planning.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Browse the category catalog
    cadence      Paycheck cadence conversions
    budget       Allocations, summaries and suggestions for a budget plan
    afford       Affordability estimates

Examples:
    python -m cli categories list --type saving
    python -m cli categories show Housing
    python -m cli cadence convert 2500 --cadence Bi-Weekly
    python -m cli budget show plan.yaml
    python -m cli budget enhance plan.yaml
    python -m cli afford house --income 90000 --set down_payment_saved=60000
"""

import sys
import argparse
from cli import afford, budget, cadence, categories
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Budgie - Paycheck budget planning",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Create subparsers for each command
    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    categories.setup_parser(subparsers)
    cadence.setup_parser(subparsers)
    budget.setup_parser(subparsers)
    afford.setup_parser(subparsers)

    # Parse arguments and execute
    args = parser.parse_args()

    # Call the appropriate handler function
    if hasattr(args, "func"):
        try:
            # Load configuration
            config = load_config()

            # Set up logging
            setup_logging(config)

            # Create services container for dependency injection
            services = Services(config)

            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
