#!/usr/bin/env python3
"""
Category and Trend Aggregation

Pure folds over an expense list: per-category totals inside a time window,
the same broken down per payer, and per-month totals across a run of
windows. Nothing here caches or mutates its inputs.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..core.models import Expense
from ..core.money import Money
from .categories import DEFAULT_CATALOG, CategoryCatalog
from .windows import TREND_MONTHS, TimeWindow, TimeWindowResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryTotal:
    """Spend for one category inside a window."""

    category: str
    total: Money
    name: str
    icon: str
    percent_of_total: float = 0.0


@dataclass(frozen=True)
class MemberCategoryBreakdown:
    """One payer's category totals inside a window."""

    member_id: str
    categories: list[CategoryTotal]
    total: Money


@dataclass(frozen=True)
class TrendPoint:
    """Total spend for one month of a trend."""

    label: str
    total: Money
    window: TimeWindow = field(compare=False)


def expenses_in_window(expenses: Iterable[Expense], window: TimeWindow) -> list[Expense]:
    """Expenses whose date falls inside the window, inclusive on both ends."""
    return [expense for expense in expenses if window.contains(expense.date)]


def monthly_total(expenses: Iterable[Expense], window: TimeWindow) -> Money:
    """Plain sum of in-window expense amounts."""
    return Money.total(expense.amount for expense in expenses_in_window(expenses, window))


def _percent(part: Money, whole: Money) -> float:
    if whole.is_zero():
        return 0.0
    return round(part.to_cents() * 100 / whole.to_cents(), 1)


def _category_totals(
    expenses: Iterable[Expense], catalog: CategoryCatalog
) -> list[CategoryTotal]:
    # Insertion order of the dict is first-seen order, which the stable sort keeps for ties
    totals: dict[str, int] = defaultdict(int)
    for expense in expenses:
        totals[expense.category] += expense.amount.to_cents()

    grand_total = Money.from_cents(sum(totals.values()))

    result = []
    for category_id, cents in totals.items():
        if category_id not in catalog:
            logger.debug("Unknown category %r kept with fallback display", category_id)
        info = catalog.lookup(category_id)
        amount = Money.from_cents(cents)
        result.append(
            CategoryTotal(
                category=category_id,
                total=amount,
                name=info.name,
                icon=info.icon,
                percent_of_total=_percent(amount, grand_total),
            )
        )

    return sorted(result, key=lambda t: t.total, reverse=True)


def by_category(
    expenses: Iterable[Expense],
    window: TimeWindow,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> list[CategoryTotal]:
    """
    Total spend per category inside a window.

    Args:
        expenses: Expense records (any order)
        window: Inclusive time window
        catalog: Display metadata source

    Returns:
        Category totals sorted by total, largest first; equal totals keep
        first-seen order. Unknown category ids are kept verbatim.
    """
    return _category_totals(expenses_in_window(expenses, window), catalog)


def by_member_category(
    expenses: Iterable[Expense],
    window: TimeWindow,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> list[MemberCategoryBreakdown]:
    """
    Category totals inside a window, partitioned by payer.

    Returns:
        One breakdown per payer, sorted by the payer's total, largest first.
        Each payer's categories are sorted the same way as `by_category`.
    """
    per_payer: dict[str, list[Expense]] = defaultdict(list)
    for expense in expenses_in_window(expenses, window):
        per_payer[expense.payer_id].append(expense)

    result = []
    for payer_id, payer_expenses in per_payer.items():
        categories = _category_totals(payer_expenses, catalog)
        result.append(
            MemberCategoryBreakdown(
                member_id=payer_id,
                categories=categories,
                total=Money.total(c.total for c in categories),
            )
        )

    return sorted(result, key=lambda b: b.total, reverse=True)


def trend(
    expenses: Iterable[Expense],
    reference_ms: int,
    month_count: int = TREND_MONTHS,
    resolver: TimeWindowResolver | None = None,
) -> list[TrendPoint]:
    """
    Per-month totals for the `month_count` months ending at the reference month.

    Months without expenses report zero, so the result always has exactly
    `month_count` entries (none for a non-positive count), oldest first.
    """
    resolver = resolver or TimeWindowResolver()
    expense_list = list(expenses)
    return [
        TrendPoint(label=window.label, total=monthly_total(expense_list, window), window=window)
        for window in resolver.recent_months(reference_ms, month_count)
    ]


def recurring_expenses(expenses: Iterable[Expense]) -> list[Expense]:
    """Expenses flagged as recurring, in input order."""
    return [expense for expense in expenses if expense.is_recurring]


def recent_expenses(expenses: Iterable[Expense], limit: int = 50) -> list[Expense]:
    """Most recent expenses by date, newest first."""
    return sorted(expenses, key=lambda e: e.date, reverse=True)[: max(limit, 0)]
