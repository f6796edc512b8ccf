#!/usr/bin/env python3

from pathlib import Path
from models.category import CategoryType, item_label
from tools.prioritization import (
    highlighted_for_reduction,
    prioritized_categories,
    recommended_additions,
)
from tools.summary import get_budget_summary
from tools.enhance import enhance_budget
from cli.formatting import format_currency
from logger import get_logger

logger = get_logger()


def _load_plan(args, services):
    """Apply a plan file to the catalog and compute every allocation map."""
    plan = services.plans.load(Path(args.plan_file))
    services.plans.apply(plan)
    services.engine.set_income(plan.paycheck, plan.cadence)
    return plan


def cmd_show(args, services):
    """Show entered, recommended and perfect allocations for a plan."""
    plan = _load_plan(args, services)
    engine = services.engine

    logger.info(
        f"\nPaycheck: {format_currency(plan.paycheck)} ({plan.cadence.value}), "
        f"monthly income {format_currency(engine.monthly_income)}"
    )
    logger.info("=" * 80)
    logger.info(f"{'Category':<36} {'Entered':>12} {'Recommended':>14} {'Perfect':>12}")

    for category_type in (CategoryType.DEBT, CategoryType.NEED, CategoryType.SAVING):
        categories = prioritized_categories(services, category_type)
        if not categories:
            continue
        logger.info("-" * 80)
        for category in categories:
            logger.info(
                f"{item_label(category):<36} "
                f"{format_currency(engine.allocations.get(category.id)):>12} "
                f"{format_currency(engine.recommended_allocations.get(category.id)):>14} "
                f"{format_currency(engine.perfect_allocations.get(category.id)):>12}"
            )
            for subcategory in category.selected_subcategories:
                logger.info(
                    f"    {subcategory.name:<32} "
                    f"{format_currency(engine.allocations.get(subcategory.id)):>12} "
                    f"{format_currency(engine.recommended_allocations.get(subcategory.id)):>14} "
                    f"{format_currency(engine.perfect_allocations.get(subcategory.id)):>12}"
                )

    logger.info("=" * 80)
    logger.info(f"Total allocated: {format_currency(engine.total_allocated)}")

    balance = engine.deficit_or_surplus
    if balance < 0:
        logger.info(f"Deficit: {format_currency(-balance)}")
        logger.info("\nConsider reducing:")
        for category in highlighted_for_reduction(services):
            logger.info(f"  ! {item_label(category)} (priority {category.priority})")
    else:
        logger.info(f"Surplus: {format_currency(balance)}")
        additions = recommended_additions(services)
        if additions:
            logger.info("\nConsider adding:")
            for addition in additions:
                logger.info(
                    f"  + {item_label(addition.category):<32} "
                    f"{format_currency(addition.amount):>12}"
                )


def cmd_summary(args, services):
    """Show totals by category type and advisory notes for a plan."""
    _load_plan(args, services)
    summary = get_budget_summary(services)

    logger.info("\nBudget Summary")
    logger.info("=" * 80)
    logger.info(f"Debts:   {format_currency(summary.total_debts):>14}")
    logger.info(f"Needs:   {format_currency(summary.total_needs):>14}")
    logger.info(f"Wants:   {format_currency(summary.total_wants):>14}")
    logger.info(f"Savings: {format_currency(summary.total_savings):>14}")
    logger.info("-" * 80)
    logger.info(f"Total:   {format_currency(summary.total_allocated):>14}")
    logger.info(f"Balance: {format_currency(summary.surplus_or_deficit):>14}")

    if summary.recommendations:
        logger.info("\nRecommendations:")
        for message in summary.recommendations:
            logger.info(f"  - {message}")


def cmd_enhance(args, services):
    """Suggest improvements to a plan."""
    _load_plan(args, services)
    suggestions = enhance_budget(services)

    titles = {
        "add": "Suggested additions",
        "adjust": "Suggested adjustments",
        "reduce": "Possible reductions",
    }
    found = False
    for kind, title in titles.items():
        recommendations = suggestions[kind]
        if not recommendations:
            continue
        found = True
        logger.info(f"\n{title}:")
        logger.info("-" * 80)
        for rec in sorted(recommendations, key=lambda r: r.priority):
            current = ""
            if rec.current_amount is not None:
                current = f"{format_currency(rec.current_amount)} -> "
            logger.info(
                f"  {rec.category_name:<28} {current}"
                f"{format_currency(rec.recommended_amount)}"
            )
            logger.info(f"      {rec.reason}")

    if not found:
        logger.info("No suggestions. Your budget looks balanced.")


def setup_parser(subparsers):
    """Setup budget subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "budget",
        help="Work with budget plans",
        description="Compute allocations, summaries and suggestions for a YAML budget plan",
    )

    budget_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available budget commands",
        dest="subcommand",
        required=True,
    )

    commands = [
        ("show", "Show allocations and deficit or surplus", cmd_show),
        ("summary", "Show totals by category type", cmd_summary),
        ("enhance", "Suggest budget improvements", cmd_enhance),
    ]
    for name, help_text, handler in commands:
        command_parser = budget_subparsers.add_parser(name, help=help_text)
        command_parser.add_argument("plan_file", help="Path to the budget plan YAML file")
        command_parser.set_defaults(func=handler)
