"""
Core Utilities Package

Shared primitives used across the household engine.

This package provides:
- Currency handling with integer cents
- Domain models for expenses, workspaces, members, category budgets and
  recurring bill templates
- Configuration management for environment-specific settings
- The store protocol the engine reads through, and its error types
"""

from .config import AnalysisConfig, Config, Environment, get_config, reload_config
from .currency import (
    allocate_proportional,
    cents_to_dollars_str,
    format_cents,
    parse_dollars_to_cents,
    safe_currency_to_cents,
    validate_sum_equals_total,
)
from .datastore import (
    ExpenseNotFoundError,
    RecurringTemplateNotFoundError,
    StoreError,
    WorkspaceNotFoundError,
    WorkspaceStore,
)
from .dates import FinancialDate
from .models import (
    CategoryBudget,
    Expense,
    Member,
    MemberRole,
    RecurrenceInterval,
    RecurringTemplate,
    SplitMethod,
    Workspace,
    WorkspaceType,
)
from .money import Money

__all__ = [
    "AnalysisConfig",
    "CategoryBudget",
    "Config",
    "Environment",
    "Expense",
    "ExpenseNotFoundError",
    "FinancialDate",
    "Member",
    "MemberRole",
    "Money",
    "RecurrenceInterval",
    "RecurringTemplate",
    "RecurringTemplateNotFoundError",
    "SplitMethod",
    "StoreError",
    "Workspace",
    "WorkspaceNotFoundError",
    "WorkspaceStore",
    "WorkspaceType",
    "allocate_proportional",
    "cents_to_dollars_str",
    "format_cents",
    "get_config",
    "parse_dollars_to_cents",
    "reload_config",
    "safe_currency_to_cents",
    "validate_sum_equals_total",
]
