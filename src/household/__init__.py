"""
Household Finances - Shared and Personal Expense Analytics

Turns a workspace's raw expense log into settlement balances, spend
breakdowns, monthly trends and budget comparisons.

Domain Packages:
- core: Money, dates, domain models, configuration, store protocol
- analysis: Category catalog, time windows, aggregation, settlement, budgets
- store: File-backed workspace store and CSV export
- cli: Command-line interface

Example Usage:
    from household.analysis import WorkspaceAnalytics
    from household.store import JsonWorkspaceStore

    analytics = WorkspaceAnalytics(JsonWorkspaceStore(data_dir, current_user="alice"))
    analytics.settlement("shared-flat")
"""

__version__ = "0.1.0"
__author__ = "Household Finances Contributors"

from .core.config import Environment, get_config
from .core.models import CategoryBudget, Expense, Member, Workspace
from .core.money import Money

__all__ = [
    "CategoryBudget",
    "Environment",
    "Expense",
    "Member",
    "Money",
    "Workspace",
    "get_config",
]
