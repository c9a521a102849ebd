#!/usr/bin/env python3
"""
Budget CLI - Limits, Budget-vs-Actual and Recurring Bills
"""

import click

from ..analysis import DEFAULT_CATALOG, BudgetStatus
from ..core.dates import FinancialDate
from ..core.models import RecurrenceInterval
from .context import (
    get_analytics,
    get_cli_config,
    get_store,
    parse_amount,
    parse_date_ms,
    parse_month_ms,
    require_user,
    store_errors,
)

STATUS_MARKERS = {
    BudgetStatus.OK: "ok",
    BudgetStatus.WARNING: "warning",
    BudgetStatus.OVER: "OVER",
}


@click.group()
def budget() -> None:
    """Budget limit commands."""
    pass


@budget.command("set")
@click.argument("workspace_id")
@click.argument("category")
@click.argument("amount")
@click.pass_context
def set_limit(ctx: click.Context, workspace_id: str, category: str, amount: str) -> None:
    """
    Set a monthly category limit, replacing any existing one.

    A limit of 0 leaves the category unbudgeted.

    Example:
      household budget set home groceries 400
    """
    if category not in DEFAULT_CATALOG:
        raise click.BadParameter(f"Unknown category {category!r}")

    with store_errors():
        saved = get_store(ctx).set_category_budget(workspace_id, category, parse_amount(amount))
    click.echo(f"{DEFAULT_CATALOG.lookup(category).name} limit: {saved.limit}")


@budget.command()
@click.argument("workspace_id")
@click.argument("amount", required=False)
@click.option("--clear", is_flag=True, help="Remove the overall limit")
@click.pass_context
def overall(ctx: click.Context, workspace_id: str, amount: str | None, clear: bool) -> None:
    """Set the overall monthly limit (the pooled target for joint workspaces)."""
    if clear == (amount is not None):
        raise click.UsageError("Give either AMOUNT or --clear")

    with store_errors():
        updated = get_store(ctx).set_overall_budget(workspace_id, None if clear else parse_amount(amount))

    if updated.overall_limit is None:
        click.echo("Overall limit cleared")
    else:
        click.echo(f"Overall limit: {updated.overall_limit}")


@budget.command()
@click.argument("workspace_id")
@click.option("--month", help="Month to compare (YYYY-MM, default: current)")
@click.pass_context
def status(ctx: click.Context, workspace_id: str, month: str | None) -> None:
    """Compare this month's spending to the budget limits."""
    analytics = get_analytics(ctx)
    window = analytics.window(parse_month_ms(ctx, month))
    with store_errors():
        comparison = analytics.budget_comparison(workspace_id, window)

    click.echo(f"Budget Status ({window.label}):")
    click.echo("=" * 60)
    if not comparison.per_category:
        click.echo("No category limits set.")
    for line in comparison.per_category:
        click.echo(
            f"{line.icon} {line.name:<16} {str(line.spent):>11} / {str(line.limit):<11} "
            f"{line.percent_used:6.1f}%  {STATUS_MARKERS[line.status]}"
        )

    if comparison.unbudgeted:
        click.echo("\nUnbudgeted:")
        for entry in comparison.unbudgeted:
            click.echo(f"{entry.icon} {entry.name:<16} {str(entry.spent):>11}")

    click.echo("-" * 60)
    click.echo(f"Spent: {comparison.overall_spent}")
    if comparison.overall_limit is not None:
        click.echo(f"Overall Limit: {comparison.overall_limit}")
        click.echo(f"Remaining: {comparison.overall_remaining}")


@budget.group()
def recurring() -> None:
    """Recurring bills and subscriptions."""
    pass


@recurring.command("add")
@click.argument("workspace_id")
@click.argument("label")
@click.argument("amount")
@click.argument("category")
@click.option(
    "--interval",
    type=click.Choice([i.value for i in RecurrenceInterval]),
    default=RecurrenceInterval.MONTHLY.value,
    show_default=True,
    help="How often the bill comes due",
)
@click.option("--next-due", help="Next due date (YYYY-MM-DD)")
@click.pass_context
def add_recurring(
    ctx: click.Context,
    workspace_id: str,
    label: str,
    amount: str,
    category: str,
    interval: str,
    next_due: str | None,
) -> None:
    """
    Save a recurring bill.

    Examples:
      household --user alice budget recurring add home Netflix 15.49 entertainment
      household --user alice budget recurring add home "Car insurance" 1200 transport --interval yearly
    """
    actor_id = require_user(ctx)
    if category not in DEFAULT_CATALOG:
        raise click.BadParameter(f"Unknown category {category!r}")

    with store_errors():
        template = get_store(ctx).add_recurring_template(
            workspace_id,
            actor_id,
            label,
            parse_amount(amount),
            category,
            RecurrenceInterval(interval),
            next_due=parse_date_ms(ctx, next_due) if next_due else None,
        )
    click.echo(f"Added {template.label}: {template.amount} {template.interval.value} ({template.id})")


@recurring.command("list")
@click.argument("workspace_id")
@click.pass_context
def list_recurring(ctx: click.Context, workspace_id: str) -> None:
    """List recurring bills and the fixed monthly cost they add up to."""
    tz = get_cli_config(ctx).analysis.tzinfo
    with store_errors():
        summary = get_analytics(ctx).recurring_summary(workspace_id)

    if not summary.lines:
        click.echo("No recurring bills.")
        return

    click.echo("Bills & Subscriptions:")
    for line in summary.lines:
        template = line.template
        info = DEFAULT_CATALOG.lookup(template.category)
        due = ""
        if template.next_due is not None:
            due = f"  next due {FinancialDate.from_epoch_ms(template.next_due, tz)}"
        click.echo(
            f"{info.icon} {template.label:<20} {str(template.amount):>11} {template.interval.value:<8}"
            f" {str(line.monthly_money):>11}/mo{due}"
        )
        if ctx.obj.get("verbose", False):
            click.echo(f"    id: {template.id}")
    click.echo("-" * 60)
    click.echo(f"Fixed Monthly Costs: {summary.monthly_total} / month")


@recurring.command("delete")
@click.argument("template_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_recurring(ctx: click.Context, template_id: str, yes: bool) -> None:
    """Remove a recurring bill."""
    actor_id = require_user(ctx)
    if not yes:
        click.confirm(f"Delete recurring bill {template_id}?", abort=True)

    with store_errors():
        get_store(ctx).delete_recurring_template(template_id, actor_id)
    click.echo(f"Deleted {template_id}")
