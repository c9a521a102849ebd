#!/usr/bin/env python3
"""
Workspace Store Protocol - the read interface the aggregation engine consumes.

The engine never persists derived figures; every query re-reads expenses,
members, workspace settings, budget limits and recurring templates through
this interface.
"""

from typing import Protocol

from .models import CategoryBudget, Expense, Member, RecurringTemplate, Workspace


class StoreError(Exception):
    """The store could not produce the data the engine needs."""

    pass


class WorkspaceNotFoundError(StoreError):
    """Raised when a referenced workspace does not exist."""

    pass


class ExpenseNotFoundError(StoreError):
    """Raised when a referenced expense does not exist."""

    pass


class RecurringTemplateNotFoundError(StoreError):
    """Raised when a referenced recurring template does not exist."""

    pass


class WorkspaceStore(Protocol):
    """
    Read primitives for one household data source.

    Implementations raise StoreError (or a subclass) when the backing store
    is unreachable or a workspace does not exist. Callers should treat that
    as "try again"; the engine itself never retries.
    """

    def list_expenses(
        self, workspace_id: str, date_range: tuple[int, int] | None = None
    ) -> list[Expense]:
        """
        List expenses of a workspace.

        Args:
            workspace_id: Owning workspace
            date_range: Optional inclusive (start_ms, end_ms) filter on expense date

        Returns:
            Expenses in insertion order
        """
        ...

    def list_members(self, workspace_id: str) -> list[Member]:
        """Current membership, in join order."""
        ...

    def get_workspace(self, workspace_id: str) -> Workspace:
        """Workspace settings: type, split policy, overall limits."""
        ...

    def list_category_budgets(self, workspace_id: str) -> list[CategoryBudget]:
        """Configured per-category limits."""
        ...

    def list_recurring_templates(self, workspace_id: str) -> list[RecurringTemplate]:
        """Recurring bill templates, in insertion order."""
        ...

    def current_user_id(self) -> str | None:
        """Identity used to select "my balance"; not an authorization check."""
        ...
