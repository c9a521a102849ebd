#!/usr/bin/env python3
"""
Workspace Analytics Service

Composes the aggregators over a workspace store. Each query re-reads the
store, folds over the snapshot it got, and returns; nothing is cached
between calls. Store failures propagate to the caller unchanged.
"""

import logging
from dataclasses import dataclass

from ..core.datastore import WorkspaceStore
from ..core.models import WorkspaceType
from ..core.money import Money
from .aggregation import (
    CategoryTotal,
    MemberCategoryBreakdown,
    TrendPoint,
    by_category,
    by_member_category,
    monthly_total,
    trend,
)
from .budget import (
    DEFAULT_WARNING_PERCENT,
    BudgetComparison,
    compare,
    limits_from_budgets,
    totals_by_category,
)
from .categories import DEFAULT_CATALOG, CategoryCatalog
from .recurring import RecurringSummary, summarize
from .settlement import Transfer, my_balance, pooled_remaining, settle, settlement_transfers
from .windows import TREND_MONTHS, TimeWindow, TimeWindowResolver, now_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceStats:
    """Headline figures for a workspace's current month."""

    total_spent: Money
    transaction_count: int
    budget_remaining: Money | None  # joint only
    my_balance: Money | None  # split only
    monthly_target: Money | None


class WorkspaceAnalytics:
    """
    Read-only analytics over one store.

    Args:
        store: Source of expenses, members, workspace settings and budgets
        resolver: Month window resolver (UTC when omitted)
        catalog: Category display metadata
        warning_percent: Budget warning threshold
    """

    def __init__(
        self,
        store: WorkspaceStore,
        resolver: TimeWindowResolver | None = None,
        catalog: CategoryCatalog = DEFAULT_CATALOG,
        warning_percent: int = DEFAULT_WARNING_PERCENT,
    ):
        self.store = store
        self.resolver = resolver or TimeWindowResolver()
        self.catalog = catalog
        self.warning_percent = warning_percent

    def window(
        self, reference_ms: int | None = None, start_ms: int | None = None, end_ms: int | None = None
    ) -> TimeWindow:
        """Month window around `reference_ms` (now by default), with optional explicit bounds."""
        return self.resolver.month_window(reference_ms if reference_ms is not None else now_ms(), start_ms, end_ms)

    def category_breakdown(self, workspace_id: str, window: TimeWindow | None = None) -> list[CategoryTotal]:
        window = window or self.window()
        expenses = self.store.list_expenses(workspace_id, window.as_range())
        return by_category(expenses, window, self.catalog)

    def member_breakdown(
        self, workspace_id: str, window: TimeWindow | None = None
    ) -> list[MemberCategoryBreakdown]:
        window = window or self.window()
        expenses = self.store.list_expenses(workspace_id, window.as_range())
        return by_member_category(expenses, window, self.catalog)

    def trend(
        self, workspace_id: str, month_count: int = TREND_MONTHS, reference_ms: int | None = None
    ) -> list[TrendPoint]:
        reference_ms = reference_ms if reference_ms is not None else now_ms()
        expenses = self.store.list_expenses(workspace_id)
        return trend(expenses, reference_ms, month_count, self.resolver)

    def settlement(self, workspace_id: str) -> dict[str, Money]:
        """
        All-time settlement balances for a split workspace.

        Non-split workspaces have no ledger and yield an empty mapping.
        """
        workspace = self.store.get_workspace(workspace_id)
        if workspace.type != WorkspaceType.SPLIT:
            logger.debug("Workspace %s is %s; no settlement ledger", workspace_id, workspace.type.value)
            return {}
        members = self.store.list_members(workspace_id)
        expenses = self.store.list_expenses(workspace_id)
        return settle(expenses, members, workspace)

    def my_balance(self, workspace_id: str) -> Money:
        """The current user's settlement balance (zero when not applicable)."""
        return my_balance(self.settlement(workspace_id), self.store.current_user_id())

    def transfers(self, workspace_id: str) -> list[Transfer]:
        return settlement_transfers(self.settlement(workspace_id))

    def recurring_summary(self, workspace_id: str) -> RecurringSummary:
        """Recurring bill templates with their fixed monthly cost."""
        return summarize(self.store.list_recurring_templates(workspace_id))

    def budget_comparison(self, workspace_id: str, window: TimeWindow | None = None) -> BudgetComparison:
        window = window or self.window()
        workspace = self.store.get_workspace(workspace_id)
        budgets = self.store.list_category_budgets(workspace_id)
        expenses = self.store.list_expenses(workspace_id, window.as_range())

        totals = totals_by_category(by_category(expenses, window, self.catalog))
        return compare(
            totals,
            limits_from_budgets(budgets),
            overall_limit=workspace.overall_limit,
            overall_spent=monthly_total(expenses, window),
            catalog=self.catalog,
            warning_percent=self.warning_percent,
        )

    def joint_remaining(self, workspace_id: str, window: TimeWindow | None = None) -> Money | None:
        """Pooled monthly target minus this month's spend, for joint workspaces."""
        window = window or self.window()
        workspace = self.store.get_workspace(workspace_id)
        expenses = self.store.list_expenses(workspace_id, window.as_range())
        return pooled_remaining(workspace, monthly_total(expenses, window))

    def workspace_stats(self, workspace_id: str, reference_ms: int | None = None) -> WorkspaceStats:
        """Current-month totals plus the figure that matters for the workspace type."""
        window = self.window(reference_ms)
        workspace = self.store.get_workspace(workspace_id)
        all_expenses = self.store.list_expenses(workspace_id)
        month_expenses = [e for e in all_expenses if window.contains(e.date)]
        total_spent = Money.total(e.amount for e in month_expenses)

        balance = None
        if workspace.type == WorkspaceType.SPLIT:
            balances = settle(all_expenses, self.store.list_members(workspace_id), workspace)
            balance = my_balance(balances, self.store.current_user_id())

        return WorkspaceStats(
            total_spent=total_spent,
            transaction_count=len(month_expenses),
            budget_remaining=pooled_remaining(workspace, total_spent),
            my_balance=balance,
            monthly_target=workspace.monthly_target,
        )
