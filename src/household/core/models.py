#!/usr/bin/env python3
"""
Core Data Models for Household Finances

Records read from the workspace store: expenses, workspaces, memberships
and category budget limits. Amounts are Money (integer cents); expense dates
are epoch milliseconds.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .money import Money


class WorkspaceType(Enum):
    """How a workspace treats shared spending."""

    PERSONAL = "personal"
    SPLIT = "split"  # per-member settlement ledger
    JOINT = "joint"  # pooled monthly target


class SplitMethod(Enum):
    """Default split policy tag for split workspaces."""

    EQUAL = "50/50"
    INCOME = "income"
    CUSTOM = "custom"


class MemberRole(Enum):
    """Membership roles within a workspace."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


class RecurrenceInterval(Enum):
    """How often a recurring bill comes due."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


def _optional_money(value: Any) -> Money | None:
    if value is None:
        return None
    return Money.from_cents(value)


@dataclass
class Expense:
    """
    One recorded transaction.

    `date` is when the expense happened (not when it was recorded) and is the
    only key used for time-window bucketing.
    """

    id: str
    workspace_id: str
    payer_id: str
    amount: Money
    category: str
    date: int

    description: str = ""
    is_recurring: bool = False
    recurrence_rule: str | None = None
    # Per-expense override of the workspace split: member id -> share amount
    split_details: dict[str, Money] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """Create Expense from a stored dict (amounts in cents)."""
        split_details = data.get("split_details")
        return cls(
            id=data["id"],
            workspace_id=data["workspace_id"],
            payer_id=data["payer_id"],
            amount=Money.from_cents(data["amount"]),
            category=data["category"],
            date=int(data["date"]),
            description=data.get("description", ""),
            is_recurring=data.get("is_recurring", False),
            recurrence_rule=data.get("recurrence_rule"),
            split_details=(
                {member_id: Money.from_cents(cents) for member_id, cents in split_details.items()}
                if split_details is not None
                else None
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "workspace_id": self.workspace_id,
            "payer_id": self.payer_id,
            "amount": self.amount.to_cents(),
            "category": self.category,
            "date": self.date,
            "description": self.description,
            "is_recurring": self.is_recurring,
            "recurrence_rule": self.recurrence_rule,
            "split_details": (
                {member_id: share.to_cents() for member_id, share in self.split_details.items()}
                if self.split_details is not None
                else None
            ),
        }


@dataclass
class Workspace:
    """
    Scope for a set of expenses, members and budget configuration.

    `custom_split_config` is kept as the raw JSON text it is stored as
    (e.g. '{"owner": 60}'); the settlement ledger parses it.
    """

    id: str
    name: str
    type: WorkspaceType

    currency: str = "USD"
    split_method: SplitMethod | None = None
    custom_split_config: str | None = None
    monthly_target: Money | None = None  # joint
    monthly_budget: Money | None = None  # personal / generic

    @property
    def overall_limit(self) -> Money | None:
        """Overall monthly ceiling for this workspace type, if configured."""
        if self.type == WorkspaceType.JOINT:
            return self.monthly_target
        return self.monthly_budget

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Workspace":
        split_method = data.get("split_method")
        return cls(
            id=data["id"],
            name=data["name"],
            type=WorkspaceType(data["type"]),
            currency=data.get("currency", "USD"),
            split_method=SplitMethod(split_method) if split_method else None,
            custom_split_config=data.get("custom_split_config"),
            monthly_target=_optional_money(data.get("monthly_target")),
            monthly_budget=_optional_money(data.get("monthly_budget")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "currency": self.currency,
            "split_method": self.split_method.value if self.split_method else None,
            "custom_split_config": self.custom_split_config,
            "monthly_target": self.monthly_target.to_cents() if self.monthly_target is not None else None,
            "monthly_budget": self.monthly_budget.to_cents() if self.monthly_budget is not None else None,
        }


@dataclass
class Member:
    """Workspace membership: a user with a role, joined at an epoch-ms time."""

    workspace_id: str
    user_id: str
    role: MemberRole = MemberRole.MEMBER
    joined_at: int = 0

    @property
    def can_manage_expenses(self) -> bool:
        """Owners and admins may edit or delete anyone's expenses."""
        return self.role in (MemberRole.OWNER, MemberRole.ADMIN)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Member":
        return cls(
            workspace_id=data["workspace_id"],
            user_id=data["user_id"],
            role=MemberRole(data.get("role", "member")),
            joined_at=int(data.get("joined_at", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "workspace_id": self.workspace_id,
            "user_id": self.user_id,
            "role": self.role.value,
            "joined_at": self.joined_at,
        }


@dataclass
class CategoryBudget:
    """Spending limit for one category of one workspace."""

    workspace_id: str
    category: str
    limit: Money = field(default_factory=Money.zero)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryBudget":
        return cls(
            workspace_id=data["workspace_id"],
            category=data["category"],
            limit=Money.from_cents(data["limit"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "workspace_id": self.workspace_id,
            "category": self.category,
            "limit": self.limit.to_cents(),
        }



@dataclass
class RecurringTemplate:
    """
    A fixed bill or subscription (rent, streaming, insurance).

    Templates describe planned spending; they are never settled or counted
    as expenses. `next_due` is an optional epoch-ms reminder date.
    """

    id: str
    workspace_id: str
    label: str
    amount: Money
    category: str
    interval: RecurrenceInterval = RecurrenceInterval.MONTHLY
    next_due: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecurringTemplate":
        next_due = data.get("next_due")
        return cls(
            id=data["id"],
            workspace_id=data["workspace_id"],
            label=data["label"],
            amount=Money.from_cents(data["amount"]),
            category=data["category"],
            interval=RecurrenceInterval(data.get("interval", "monthly")),
            next_due=int(next_due) if next_due is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "workspace_id": self.workspace_id,
            "label": self.label,
            "amount": self.amount.to_cents(),
            "category": self.category,
            "interval": self.interval.value,
            "next_due": self.next_due,
        }
