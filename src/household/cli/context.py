#!/usr/bin/env python3
"""
Shared CLI helpers: store/analytics construction and argument parsing.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date

import click

from ..analysis import TimeWindowResolver, WorkspaceAnalytics
from ..core.config import Config
from ..core.datastore import StoreError
from ..core.dates import FinancialDate
from ..core.money import Money
from ..store import AccessDeniedError, JsonWorkspaceStore


def get_cli_config(ctx: click.Context) -> Config:
    return ctx.obj["config"]


def get_store(ctx: click.Context) -> JsonWorkspaceStore:
    """Store rooted at the configured data dir, acting as the configured user."""
    config = get_cli_config(ctx)
    return JsonWorkspaceStore(config.data_dir, current_user=ctx.obj.get("user") or config.current_user)


def get_analytics(ctx: click.Context) -> WorkspaceAnalytics:
    config = get_cli_config(ctx)
    return WorkspaceAnalytics(
        get_store(ctx),
        resolver=TimeWindowResolver(config.analysis.tzinfo),
        warning_percent=config.analysis.budget_warning_percent,
    )


def require_user(ctx: click.Context) -> str:
    """The acting user, or a usage error when none is configured."""
    user = ctx.obj.get("user") or get_cli_config(ctx).current_user
    if not user:
        raise click.UsageError("No user given; pass --user or set HOUSEHOLD_USER")
    return user


def parse_amount(value: str) -> Money:
    """Parse a dollar amount like '12.34' or '$1,200'."""
    try:
        amount = Money.from_dollars(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    if amount.to_cents() < 0:
        raise click.BadParameter("Amount must be non-negative")
    return amount


def parse_day(value: str) -> FinancialDate:
    try:
        return FinancialDate.from_string(value)
    except ValueError as e:
        raise click.BadParameter(f"Invalid date {value!r}; expected YYYY-MM-DD") from e


def parse_date_ms(ctx: click.Context, value: str | None) -> int:
    """Epoch ms for midnight of a YYYY-MM-DD date (today when omitted)."""
    tz = get_cli_config(ctx).analysis.tzinfo
    day = parse_day(value) if value else FinancialDate.today(tz)
    return day.to_epoch_ms(tz)


def parse_month_ms(ctx: click.Context, value: str | None) -> int | None:
    """Epoch ms inside a YYYY-MM month, or None for the current month."""
    if not value:
        return None
    tz = get_cli_config(ctx).analysis.tzinfo
    try:
        first = FinancialDate.from_string(f"{value}-01")
    except ValueError as e:
        raise click.BadParameter(f"Invalid month {value!r}; expected YYYY-MM") from e
    return FinancialDate(date=date(first.date.year, first.date.month, 15)).to_epoch_ms(tz)


def parse_split(values: tuple[str, ...]) -> dict[str, Money] | None:
    """Parse repeated --split member=amount options into an override mapping."""
    if not values:
        return None
    split: dict[str, Money] = {}
    for value in values:
        member_id, sep, amount = value.partition("=")
        if not sep or not member_id:
            raise click.BadParameter(f"Invalid split {value!r}; expected member=amount")
        split[member_id.strip()] = parse_amount(amount.strip())
    return split


@contextmanager
def store_errors() -> Iterator[None]:
    """Report store and validation failures as CLI errors."""
    try:
        yield
    except (StoreError, AccessDeniedError, ValueError) as e:
        raise click.ClickException(str(e)) from e
