#!/usr/bin/env python3
"""
Budget Comparator

Merges category spend against configured per-category limits and an
optional overall limit.

Categories with a positive limit are "budgeted" and compared against it;
categories with spend but no limit (or a limit of 0) are reported separately
as "unbudgeted". A category never appears in both groups.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from ..core.models import CategoryBudget
from ..core.money import Money
from .aggregation import CategoryTotal
from .categories import DEFAULT_CATALOG, CategoryCatalog

DEFAULT_WARNING_PERCENT = 80


class BudgetStatus(Enum):
    """How close a category is to its limit."""

    OK = "ok"
    WARNING = "warning"  # at or above the warning percent
    OVER = "over"  # spent > limit


@dataclass(frozen=True)
class BudgetLine:
    """Spend vs. limit for one budgeted category."""

    category: str
    name: str
    icon: str
    spent: Money
    limit: Money
    percent_used: float
    status: BudgetStatus

    @property
    def is_over(self) -> bool:
        return self.spent > self.limit

    @property
    def remaining(self) -> Money:
        """Limit minus spend (negative when over)."""
        return self.limit - self.spent


@dataclass(frozen=True)
class UnbudgetedLine:
    """Spend in a category with no configured limit."""

    category: str
    name: str
    icon: str
    spent: Money


@dataclass(frozen=True)
class BudgetComparison:
    """Result of comparing spend against limits."""

    per_category: list[BudgetLine] = field(default_factory=list)
    unbudgeted: list[UnbudgetedLine] = field(default_factory=list)
    overall_limit: Money | None = None
    overall_spent: Money = field(default_factory=Money.zero)

    @property
    def overall_remaining(self) -> Money | None:
        """Overall limit minus spend, or None when no overall limit is set."""
        if self.overall_limit is None:
            return None
        return self.overall_limit - self.overall_spent

    @property
    def over_budget_categories(self) -> list[BudgetLine]:
        return [line for line in self.per_category if line.is_over]


def limits_from_budgets(budgets: Iterable[CategoryBudget]) -> dict[str, Money]:
    """Category -> limit mapping; a later entry for the same category wins."""
    return {budget.category: budget.limit for budget in budgets}


def totals_by_category(category_totals: Iterable[CategoryTotal]) -> dict[str, Money]:
    """Category -> spend mapping from aggregator output."""
    return {total.category: total.total for total in category_totals}


def _status(spent: Money, limit: Money, warning_percent: int) -> BudgetStatus:
    if spent > limit:
        return BudgetStatus.OVER
    if spent.to_cents() * 100 >= limit.to_cents() * warning_percent:
        return BudgetStatus.WARNING
    return BudgetStatus.OK


def compare(
    category_totals: Mapping[str, Money],
    category_limits: Mapping[str, Money],
    overall_limit: Money | None = None,
    overall_spent: Money | None = None,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
    warning_percent: int = DEFAULT_WARNING_PERCENT,
) -> BudgetComparison:
    """
    Compare category spend against limits.

    Args:
        category_totals: category -> spend in the period
        category_limits: category -> configured limit; 0 means "no limit"
        overall_limit: Optional overall ceiling for the period
        overall_spent: Overall spend (defaults to the sum of category totals)
        catalog: Display metadata source
        warning_percent: Percent of a limit at which status becomes WARNING

    Returns:
        BudgetComparison whose budgeted lines are sorted by percent used,
        highest first (ties keep limit order)
    """
    budgeted: list[BudgetLine] = []
    for category, limit in category_limits.items():
        if limit.to_cents() <= 0:
            continue
        spent = category_totals.get(category, Money.zero())
        info = catalog.lookup(category)
        budgeted.append(
            BudgetLine(
                category=category,
                name=info.name,
                icon=info.icon,
                spent=spent,
                limit=limit,
                percent_used=round(spent.to_cents() * 100 / limit.to_cents(), 1),
                status=_status(spent, limit, warning_percent),
            )
        )

    budgeted_categories = {line.category for line in budgeted}
    unbudgeted = []
    for category, spent in category_totals.items():
        if category in budgeted_categories or spent.to_cents() <= 0:
            continue
        info = catalog.lookup(category)
        unbudgeted.append(UnbudgetedLine(category=category, name=info.name, icon=info.icon, spent=spent))

    if overall_spent is None:
        overall_spent = Money.total(category_totals.values())

    return BudgetComparison(
        per_category=sorted(budgeted, key=lambda line: line.percent_used, reverse=True),
        unbudgeted=unbudgeted,
        overall_limit=overall_limit,
        overall_spent=overall_spent,
    )
