#!/usr/bin/env python3
"""
Report CLI - Breakdowns, Trends and Settlement

Read-only reports over one workspace. Every report re-reads the store.
"""

import click

from ..analysis import TimeWindow, settlement_transfers
from ..core.dates import FinancialDate
from ..core.money import Money
from .context import get_analytics, get_cli_config, parse_day, parse_month_ms, store_errors


@click.group()
def report() -> None:
    """Workspace analytics reports."""
    pass


def _window(ctx: click.Context, month: str | None, start: str | None, end: str | None) -> TimeWindow:
    """
    Month window for `--month`, narrowed by explicit `--start`/`--end` days.

    Both days are inclusive and resolved in the configured timezone. With
    either bound given, the label names the actual date range.
    """
    tz = get_cli_config(ctx).analysis.tzinfo
    start_day = parse_day(start) if start else None
    end_day = parse_day(end) if end else None
    if start_day is not None and end_day is not None and start_day > end_day:
        raise click.BadParameter(f"--start {start_day} is after --end {end_day}")

    window = get_analytics(ctx).window(
        parse_month_ms(ctx, month),
        start_day.to_epoch_ms(tz) if start_day is not None else None,
        end_day.to_end_epoch_ms(tz) if end_day is not None else None,
    )
    if start_day is None and end_day is None:
        return window

    first = start_day or FinancialDate.from_epoch_ms(window.start_ms, tz)
    last = end_day or FinancialDate.from_epoch_ms(window.end_ms, tz)
    return TimeWindow(start_ms=window.start_ms, end_ms=window.end_ms, label=f"{first} to {last}")


def _bar(percent: float, width: int = 20) -> str:
    filled = min(width, int(round(percent * width / 100)))
    return "#" * filled + "." * (width - filled)


@report.command()
@click.argument("workspace_id")
@click.option("--month", help="Month to report (YYYY-MM, default: current)")
@click.option("--start", help="Explicit window start (YYYY-MM-DD)")
@click.option("--end", help="Explicit window end, inclusive (YYYY-MM-DD)")
@click.pass_context
def breakdown(ctx: click.Context, workspace_id: str, month: str | None, start: str | None, end: str | None) -> None:
    """
    Category spending for one month (or an explicit date range), largest first.

    Examples:
      household report breakdown home
      household report breakdown home --month 2024-03
      household report breakdown home --start 2024-11-01 --end 2024-11-03
    """
    window = _window(ctx, month, start, end)
    with store_errors():
        totals = get_analytics(ctx).category_breakdown(workspace_id, window)

    if not totals:
        click.echo(f"No expenses in {window.label}.")
        return

    click.echo(f"Spending by Category ({window.label}):")
    click.echo("=" * 60)
    for line in totals:
        click.echo(
            f"{line.icon} {line.name:<16} {str(line.total):>12}  {line.percent_of_total:5.1f}%  {_bar(line.percent_of_total)}"
        )
    click.echo("-" * 60)
    click.echo(f"Total: {Money.total(line.total for line in totals)}")


@report.command()
@click.argument("workspace_id")
@click.option("--month", help="Month to report (YYYY-MM, default: current)")
@click.pass_context
def members(ctx: click.Context, workspace_id: str, month: str | None) -> None:
    """Category spending per paying member for one month."""
    window = _window(ctx, month, None, None)
    with store_errors():
        breakdowns = get_analytics(ctx).member_breakdown(workspace_id, window)

    if not breakdowns:
        click.echo(f"No expenses in {window.label}.")
        return

    for entry in breakdowns:
        click.echo(f"\n{entry.member_id}: {entry.total}")
        for line in entry.categories:
            click.echo(f"  {line.icon} {line.name:<16} {str(line.total):>12}")


@report.command()
@click.argument("workspace_id")
@click.option("--months", type=int, help="Number of months (default: HOUSEHOLD_TREND_MONTHS)")
@click.option("--month", help="Last month of the trend (YYYY-MM, default: current)")
@click.pass_context
def trend(ctx: click.Context, workspace_id: str, months: int | None, month: str | None) -> None:
    """Monthly spending totals, oldest first."""
    month_count = months if months is not None else get_cli_config(ctx).analysis.trend_months
    with store_errors():
        points = get_analytics(ctx).trend(workspace_id, month_count, parse_month_ms(ctx, month))

    if not points:
        click.echo("No months to report.")
        return

    peak = max(point.total.to_cents() for point in points)
    click.echo("Monthly Spending Trend:")
    for point in points:
        percent = point.total.to_cents() * 100 / peak if peak else 0.0
        click.echo(f"  {point.label:<4} {str(point.total):>12}  {_bar(percent)}")


@report.command()
@click.argument("workspace_id")
@click.pass_context
def settle(ctx: click.Context, workspace_id: str) -> None:
    """
    Settlement balances for a split workspace.

    Positive balances are owed to the member; negative balances are owed by them.
    """
    analytics = get_analytics(ctx)
    with store_errors():
        balances = analytics.settlement(workspace_id)
    transfers = settlement_transfers(balances)
    user_id = analytics.store.current_user_id()

    if not balances:
        click.echo("No settlement ledger for this workspace.")
        return

    click.echo("Settlement Balances:")
    for member_id, balance in balances.items():
        if balance.to_cents() > 0:
            status = "is owed"
        elif balance.to_cents() < 0:
            status = "owes"
        else:
            status = "is settled"
        click.echo(f"  {member_id:<12} {str(balance):>12}  {status}")

    if user_id and user_id in balances:
        click.echo(f"\nYour balance: {balances[user_id]}")

    if transfers:
        click.echo("\nSuggested Transfers:")
        for transfer in transfers:
            click.echo(f"  {transfer.debtor_id} -> {transfer.creditor_id}: {transfer.amount}")
    else:
        click.echo("\nEveryone is settled up.")


@report.command()
@click.argument("workspace_id")
@click.option("--month", help="Month to report (YYYY-MM, default: current)")
@click.pass_context
def stats(ctx: click.Context, workspace_id: str, month: str | None) -> None:
    """Headline figures for one month."""
    with store_errors():
        summary = get_analytics(ctx).workspace_stats(workspace_id, parse_month_ms(ctx, month))

    click.echo(f"Total Spent: {summary.total_spent}")
    click.echo(f"Transactions: {summary.transaction_count}")
    if summary.monthly_target is not None:
        click.echo(f"Monthly Target: {summary.monthly_target}")
    if summary.budget_remaining is not None:
        click.echo(f"Remaining: {summary.budget_remaining}")
    if summary.my_balance is not None:
        click.echo(f"My Balance: {summary.my_balance}")


@report.command()
@click.argument("workspace_id")
@click.pass_context
def summary(ctx: click.Context, workspace_id: str) -> None:
    """Current month figures plus the last few months (HOUSEHOLD_SUMMARY_MONTHS)."""
    analytics = get_analytics(ctx)
    month_count = get_cli_config(ctx).analysis.summary_months
    with store_errors():
        headline = analytics.workspace_stats(workspace_id)
        points = analytics.trend(workspace_id, month_count)

    click.echo(f"This Month: {headline.total_spent} across {headline.transaction_count} expenses")
    if headline.budget_remaining is not None:
        click.echo(f"Remaining: {headline.budget_remaining}")
    if headline.my_balance is not None:
        click.echo(f"My Balance: {headline.my_balance}")

    click.echo(f"Last {len(points)} Months:")
    for point in points:
        click.echo(f"  {point.label:<4} {str(point.total):>12}")
    if points:
        average = Money.from_cents(sum(p.total.to_cents() for p in points) // len(points))
        click.echo(f"  Average: {average}")
