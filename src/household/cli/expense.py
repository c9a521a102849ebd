#!/usr/bin/env python3
"""
Expense CLI - Record, Edit and Export Expenses
"""

from datetime import datetime
from pathlib import Path

import click

from ..analysis import DEFAULT_CATALOG, recent_expenses, recurring_expenses
from ..store import write_expenses_csv
from .context import (
    get_cli_config,
    get_store,
    parse_amount,
    parse_date_ms,
    parse_split,
    require_user,
    store_errors,
)


@click.group()
def expense() -> None:
    """Expense recording commands."""
    pass


def _check_category(category: str) -> None:
    if category not in DEFAULT_CATALOG:
        known = ", ".join(DEFAULT_CATALOG.ids())
        raise click.BadParameter(f"Unknown category {category!r}; choose one of: {known}")


@expense.command()
@click.argument("workspace_id")
@click.argument("amount")
@click.argument("category")
@click.option("--date", "date_str", help="Expense date (YYYY-MM-DD, default: today)")
@click.option("--description", "-d", default="", help="Free-text description")
@click.option("--recurring", is_flag=True, help="Mark as a recurring expense")
@click.option("--recurrence-rule", help="Recurrence rule text, e.g. 'monthly'")
@click.option("--split", "splits", multiple=True, help="Per-member share override: member=amount")
@click.pass_context
def add(
    ctx: click.Context,
    workspace_id: str,
    amount: str,
    category: str,
    date_str: str | None,
    description: str,
    recurring: bool,
    recurrence_rule: str | None,
    splits: tuple[str, ...],
) -> None:
    """
    Record an expense paid by the acting user.

    Examples:
      household --user alice expense add home 42.50 groceries
      household --user alice expense add home 100 dining --split alice=70 --split bob=30
    """
    payer_id = require_user(ctx)
    _check_category(category)

    store = get_store(ctx)
    with store_errors():
        created = store.add_expense(
            workspace_id=workspace_id,
            payer_id=payer_id,
            amount=parse_amount(amount),
            category=category,
            date=parse_date_ms(ctx, date_str),
            description=description,
            is_recurring=recurring,
            recurrence_rule=recurrence_rule,
            split_details=parse_split(splits),
        )

    click.echo(f"Recorded {created.amount} for {category} ({created.id})")


@expense.command()
@click.argument("expense_id")
@click.option("--amount", help="New amount (dollars)")
@click.option("--category", help="New category")
@click.option("--description", "-d", help="New description")
@click.option("--date", "date_str", help="New date (YYYY-MM-DD)")
@click.option("--recurring/--not-recurring", default=None, help="Change the recurring flag")
@click.option("--split", "splits", multiple=True, help="Replace the share override: member=amount")
@click.option("--clear-split", is_flag=True, help="Drop the share override and use the workspace split")
@click.pass_context
def update(
    ctx: click.Context,
    expense_id: str,
    amount: str | None,
    category: str | None,
    description: str | None,
    date_str: str | None,
    recurring: bool | None,
    splits: tuple[str, ...],
    clear_split: bool,
) -> None:
    """
    Edit an expense. Only its payer or a workspace owner/admin may edit.

    A changed amount must still match the share override; give the new
    shares with --split in the same call, or drop them with --clear-split.

    Examples:
      household --user alice expense update 3f2a --amount 120 --split alice=80 --split bob=40
      household --user alice expense update 3f2a --amount 120 --clear-split
    """
    actor_id = require_user(ctx)
    if category is not None:
        _check_category(category)
    if splits and clear_split:
        raise click.UsageError("Give either --split or --clear-split, not both")

    store = get_store(ctx)
    with store_errors():
        updated = store.update_expense(
            expense_id,
            actor_id,
            amount=parse_amount(amount) if amount is not None else None,
            description=description,
            category=category,
            date=parse_date_ms(ctx, date_str) if date_str else None,
            is_recurring=recurring,
            split_details=parse_split(splits),
            clear_split_details=clear_split,
        )

    click.echo(f"Updated {updated.id}: {updated.amount} {updated.category}")
    if updated.split_details is not None:
        shares = ", ".join(f"{member_id} {share}" for member_id, share in updated.split_details.items())
        click.echo(f"  Split: {shares}")


@expense.command()
@click.argument("expense_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete(ctx: click.Context, expense_id: str, yes: bool) -> None:
    """Delete an expense. Only its payer or a workspace owner/admin may delete."""
    actor_id = require_user(ctx)
    if not yes:
        click.confirm(f"Delete expense {expense_id}?", abort=True)

    store = get_store(ctx)
    with store_errors():
        store.delete_expense(expense_id, actor_id)
    click.echo(f"Deleted {expense_id}")


@expense.command("list")
@click.argument("workspace_id")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum rows")
@click.option("--recurring", is_flag=True, help="Only recurring expenses")
@click.pass_context
def list_expenses(ctx: click.Context, workspace_id: str, limit: int, recurring: bool) -> None:
    """List the most recent expenses, newest first."""
    tz = get_cli_config(ctx).analysis.tzinfo
    store = get_store(ctx)
    with store_errors():
        expenses = store.list_expenses(workspace_id)

    if recurring:
        expenses = recurring_expenses(expenses)
    rows = recent_expenses(expenses, limit)

    if not rows:
        click.echo("No expenses found.")
        return

    for row in rows:
        day = datetime.fromtimestamp(row.date / 1000, tz=tz).strftime("%Y-%m-%d")
        info = DEFAULT_CATALOG.lookup(row.category)
        marker = " (recurring)" if row.is_recurring else ""
        click.echo(f"{day}  {str(row.amount):>12}  {info.icon} {info.name:<14} {row.payer_id:<10} {row.description}{marker}")
        if ctx.obj.get("verbose", False):
            click.echo(f"            id: {row.id}")


@expense.command()
@click.argument("workspace_id")
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def export(ctx: click.Context, workspace_id: str, output_file: Path) -> None:
    """Export all of a workspace's expenses to CSV."""
    tz = get_cli_config(ctx).analysis.tzinfo
    store = get_store(ctx)
    with store_errors():
        expenses = store.list_expenses(workspace_id)

    written = write_expenses_csv(expenses, output_file, tz=tz)
    click.echo(f"Exported {len(expenses)} expenses to {written}")
