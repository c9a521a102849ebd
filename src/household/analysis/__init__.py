"""
Financial Aggregation & Settlement Engine

Pure functions over a workspace's expense list.

Key Components:
- categories: Fixed category catalog with display metadata
- windows: Calendar-month time windows
- aggregation: Category, per-member and monthly trend totals
- settlement: Split policies and the per-member settlement ledger
- budget: Budget-vs-actual comparison
- recurring: Fixed monthly cost of recurring bill templates
- service: WorkspaceAnalytics facade over a workspace store
"""

from .aggregation import (
    CategoryTotal,
    MemberCategoryBreakdown,
    TrendPoint,
    by_category,
    by_member_category,
    expenses_in_window,
    monthly_total,
    recent_expenses,
    recurring_expenses,
    trend,
)
from .budget import (
    BudgetComparison,
    BudgetLine,
    BudgetStatus,
    UnbudgetedLine,
    compare,
    limits_from_budgets,
    totals_by_category,
)
from .categories import DEFAULT_CATALOG, CategoryCatalog, CategoryInfo
from .recurring import (
    CommitmentLine,
    RecurringSummary,
    commitment_lines,
    monthly_commitment,
    monthly_equivalent,
    summarize,
)
from .service import WorkspaceAnalytics, WorkspaceStats
from .settlement import (
    CustomSplit,
    EqualSplit,
    IncomeWeightedSplit,
    SplitPolicy,
    Transfer,
    my_balance,
    parse_custom_split_config,
    pooled_remaining,
    resolve_shares,
    resolve_split_policy,
    settle,
    settlement_transfers,
)
from .windows import SUMMARY_MONTHS, TREND_MONTHS, TimeWindow, TimeWindowResolver

__all__ = [
    "DEFAULT_CATALOG",
    "SUMMARY_MONTHS",
    "TREND_MONTHS",
    "BudgetComparison",
    "BudgetLine",
    "BudgetStatus",
    "CategoryCatalog",
    "CategoryInfo",
    "CategoryTotal",
    "CommitmentLine",
    "CustomSplit",
    "EqualSplit",
    "IncomeWeightedSplit",
    "MemberCategoryBreakdown",
    "RecurringSummary",
    "SplitPolicy",
    "TimeWindow",
    "TimeWindowResolver",
    "Transfer",
    "TrendPoint",
    "UnbudgetedLine",
    "WorkspaceAnalytics",
    "WorkspaceStats",
    "by_category",
    "by_member_category",
    "commitment_lines",
    "compare",
    "expenses_in_window",
    "limits_from_budgets",
    "monthly_total",
    "monthly_commitment",
    "monthly_equivalent",
    "my_balance",
    "parse_custom_split_config",
    "pooled_remaining",
    "recent_expenses",
    "recurring_expenses",
    "resolve_shares",
    "resolve_split_policy",
    "settle",
    "settlement_transfers",
    "summarize",
    "totals_by_category",
    "trend",
]
