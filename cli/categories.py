#!/usr/bin/env python3

import sys
from models.category import CategoryType, item_label
from cli.formatting import format_currency
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the categories in the catalog."""
    category_type = CategoryType(args.type) if args.type else None
    categories = services.categories.find_all(category_type)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(
            f"{item_label(category):<32} {category.type.value:<8} "
            f"priority {category.priority}"
        )

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_show(args, services):
    """Show one category with its subcategories."""
    category = services.categories.find_by_name(args.name)
    if not category:
        logger.error(f"Category '{args.name}' not found.")
        sys.exit(1)

    logger.info(f"\n{item_label(category)}")
    logger.info("=" * 80)
    logger.info(f"Type: {category.type.value}")
    logger.info(f"Priority: {category.priority}")
    if category.description:
        logger.info(f"Description: {category.description}")
    if category.amount is not None:
        logger.info(f"Amount: {format_currency(category.amount)}")
    if category.due_date:
        logger.info(f"Due: {category.due_date.isoformat()}")

    if category.subcategories:
        logger.info("\nSubcategories:")
        logger.info("-" * 80)
        for subcategory in sorted(category.subcategories, key=lambda s: s.priority):
            logger.info(
                f"  {subcategory.name:<28} priority {subcategory.priority:<3} "
                f"{subcategory.allocation_percentage:>5.1f}%"
            )


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Browse the category catalog",
        description="List and inspect budget categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.add_argument(
        "--type",
        choices=[t.value for t in CategoryType],
        help="Only list categories of this type",
    )
    list_parser.set_defaults(func=cmd_list)

    # categories show
    show_parser = categories_subparsers.add_parser(
        "show", help="Show a category and its subcategories"
    )
    show_parser.add_argument("name", help="Category name (e.g., Housing)")
    show_parser.set_defaults(func=cmd_show)
