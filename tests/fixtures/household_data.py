#!/usr/bin/env python3
"""
Synthetic Test Data Builders

Small constructors for expenses, members, workspaces and recurring
templates. All ids, amounts and dates are synthetic.
"""

from datetime import datetime, timezone

from household.core.models import (
    Expense,
    Member,
    MemberRole,
    RecurrenceInterval,
    RecurringTemplate,
    SplitMethod,
    Workspace,
    WorkspaceType,
)
from household.core.money import Money

_expense_counter = 0


def epoch_ms(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0, ms: int = 0) -> int:
    """UTC wall-clock time as epoch milliseconds."""
    moment = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000) + ms


def make_expense(
    amount_cents: int,
    category: str = "groceries",
    payer_id: str = "alice",
    date: int | None = None,
    workspace_id: str = "ws",
    split_details: dict[str, int] | None = None,
    is_recurring: bool = False,
    expense_id: str | None = None,
) -> Expense:
    global _expense_counter
    _expense_counter += 1
    return Expense(
        id=expense_id or f"exp-{_expense_counter}",
        workspace_id=workspace_id,
        payer_id=payer_id,
        amount=Money.from_cents(amount_cents),
        category=category,
        date=date if date is not None else epoch_ms(2024, 3, 15, 12),
        is_recurring=is_recurring,
        split_details=(
            {member_id: Money.from_cents(cents) for member_id, cents in split_details.items()}
            if split_details is not None
            else None
        ),
    )


def make_members(*user_ids: str, owner: str | None = None, workspace_id: str = "ws") -> list[Member]:
    """Members in the given order; `owner` (if any) gets the owner role."""
    return [
        Member(
            workspace_id=workspace_id,
            user_id=user_id,
            role=MemberRole.OWNER if user_id == owner else MemberRole.MEMBER,
            joined_at=index,
        )
        for index, user_id in enumerate(user_ids)
    ]


def make_split_workspace(
    split_method: SplitMethod | None = SplitMethod.EQUAL,
    custom_split_config: str | None = None,
    workspace_id: str = "ws",
) -> Workspace:
    return Workspace(
        id=workspace_id,
        name="Synthetic Split",
        type=WorkspaceType.SPLIT,
        split_method=split_method,
        custom_split_config=custom_split_config,
    )


def make_template(
    amount_cents: int,
    interval: RecurrenceInterval = RecurrenceInterval.MONTHLY,
    label: str = "Subscription",
    category: str = "utilities",
    workspace_id: str = "ws",
) -> RecurringTemplate:
    global _expense_counter
    _expense_counter += 1
    return RecurringTemplate(
        id=f"tpl-{_expense_counter}",
        workspace_id=workspace_id,
        label=label,
        amount=Money.from_cents(amount_cents),
        category=category,
        interval=interval,
    )
