#!/usr/bin/env python3
"""
Settlement Ledger

Computes each member's net position in a split workspace from the full
expense history.

Every expense credits its payer the full amount and debits the members'
shares of it. Shares come from the workspace split policy unless the expense
carries an explicit per-member override. Positive balances are owed money;
negative balances owe the group.

Key Features:
- Closed split policy variants resolved from the workspace settings
- Exact rational shares with largest-remainder cent allocation, so policy
  splits of an expense always sum to the expense amount
- Malformed custom split settings fall back to an equal split and are logged
- Historical expenses involving departed members are still processed; only
  current members receive a balance
"""

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from fractions import Fraction

from ..core.currency import allocate_proportional, validate_sum_equals_total
from ..core.models import Expense, Member, MemberRole, SplitMethod, Workspace, WorkspaceType
from ..core.money import Money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EqualSplit:
    """Every current member bears the same share."""


@dataclass(frozen=True)
class IncomeWeightedSplit:
    """
    Reserved policy tag for income-weighted splitting.

    No weighting formula exists yet, so shares resolve like EqualSplit.
    """


@dataclass(frozen=True)
class CustomSplit:
    """The owner bears `owner_percent`; everyone else shares the rest equally."""

    owner_percent: Fraction


SplitPolicy = EqualSplit | IncomeWeightedSplit | CustomSplit


@dataclass(frozen=True)
class Transfer:
    """A payment that moves a debtor toward zero."""

    debtor_id: str
    creditor_id: str
    amount: Money


def parse_custom_split_config(raw: str | None) -> Fraction | None:
    """
    Parse a stored custom split config like '{"owner": 60}'.

    Returns:
        Owner percent as an exact Fraction, or None when the config is
        missing, unparseable, or out of the 0-100 range
    """
    if not raw:
        return None

    try:
        config = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Failed to parse custom split config %r: %s", raw, e)
        return None

    owner = config.get("owner") if isinstance(config, dict) else None
    if isinstance(owner, bool) or not isinstance(owner, (int, float)):
        logger.warning("Custom split config has no numeric owner share: %r", raw)
        return None

    try:
        percent = Fraction(Decimal(str(owner)))
    except (InvalidOperation, ValueError, OverflowError):
        logger.warning("Custom split owner share is not a finite number: %r", raw)
        return None

    if not 0 <= percent <= 100:
        logger.warning("Custom split owner share out of range 0-100: %r", raw)
        return None

    return percent


def resolve_split_policy(workspace: Workspace) -> SplitPolicy:
    """
    Resolve the default split policy of a workspace.

    Only `custom` with a valid config yields CustomSplit; a malformed config
    falls back to EqualSplit.
    """
    if workspace.split_method == SplitMethod.CUSTOM:
        owner_percent = parse_custom_split_config(workspace.custom_split_config)
        if owner_percent is not None:
            return CustomSplit(owner_percent=owner_percent)
        logger.warning("Workspace %s: invalid custom split config, using equal split", workspace.id)
        return EqualSplit()
    if workspace.split_method == SplitMethod.INCOME:
        return IncomeWeightedSplit()
    return EqualSplit()


def find_owner(members: Sequence[Member]) -> Member | None:
    """First member holding the owner role, in membership order."""
    owners = [member for member in members if member.role == MemberRole.OWNER]
    if len(owners) > 1:
        logger.warning("Multiple owners found; using %s for custom split", owners[0].user_id)
    return owners[0] if owners else None


def resolve_shares(policy: SplitPolicy, members: Sequence[Member]) -> dict[str, Fraction]:
    """
    Each current member's share of an expense under a policy.

    Shares sum to 1 for any non-empty membership. Custom splits with no
    owner or no other members degrade to an equal split.

    Returns:
        member id -> share, in membership order; empty for no members
    """
    member_ids = list(dict.fromkeys(member.user_id for member in members))
    if not member_ids:
        return {}

    equal = {member_id: Fraction(1, len(member_ids)) for member_id in member_ids}

    match policy:
        case CustomSplit(owner_percent=owner_percent):
            owner = find_owner(members)
            if owner is None:
                logger.warning("Custom split without an owner member; using equal split")
                return equal
            others = [member_id for member_id in member_ids if member_id != owner.user_id]
            if not others:
                return equal
            owner_share = owner_percent / 100
            other_share = (1 - owner_share) / len(others)
            return {
                member_id: owner_share if member_id == owner.user_id else other_share
                for member_id in member_ids
            }
        case IncomeWeightedSplit():
            logger.debug("Income-weighted split has no weighting data; using equal shares")
            return equal
        case EqualSplit():
            return equal

    raise ValueError(f"Unknown split policy: {policy!r}")


def _debits_for(expense: Expense, shares: dict[str, Fraction]) -> dict[str, int]:
    """Cents each member is charged for one expense."""
    if expense.split_details is not None:
        debits = {
            member_id: amount.to_cents()
            for member_id, amount in expense.split_details.items()
            if member_id in shares
        }
        override_cents = [amount.to_cents() for amount in expense.split_details.values()]
        if not validate_sum_equals_total(override_cents, expense.amount.to_cents()):
            logger.warning(
                "Expense %s split override totals %s but amount is %s",
                expense.id,
                Money.from_cents(sum(override_cents)),
                expense.amount,
            )
        return debits

    member_ids = list(shares)
    parts = allocate_proportional(expense.amount.to_cents(), [shares[m] for m in member_ids])
    return dict(zip(member_ids, parts))


def settle(
    expenses: Iterable[Expense],
    members: Sequence[Member],
    workspace: Workspace,
) -> dict[str, Money]:
    """
    Signed settlement balance per current member over all expenses.

    Args:
        expenses: All-time expenses of the workspace (not windowed)
        members: Current membership; departed members get no entry
        workspace: Supplies the default split policy

    Returns:
        member id -> balance, in membership order. Positive means the group
        owes the member; negative means the member owes the group. Empty
        when there are no members.
    """
    policy = resolve_split_policy(workspace)
    shares = resolve_shares(policy, members)
    if not shares:
        return {}

    ledger: dict[str, int] = dict.fromkeys(shares, 0)

    for expense in expenses:
        if expense.payer_id in ledger:
            ledger[expense.payer_id] += expense.amount.to_cents()

        for member_id, cents in _debits_for(expense, shares).items():
            ledger[member_id] -= cents

    return {member_id: Money.from_cents(cents) for member_id, cents in ledger.items()}


def my_balance(balances: dict[str, Money], user_id: str | None) -> Money:
    """The given user's balance, or zero when unknown or not a member."""
    if user_id is None:
        return Money.zero()
    return balances.get(user_id, Money.zero())


def settlement_transfers(balances: dict[str, Money]) -> list[Transfer]:
    """
    Greedy list of payments that brings every balance to zero.

    Largest debtor pays largest creditor first. With balances that do not
    net to zero, the leftover stays unmatched.
    """
    creditors = sorted(
        ([member_id, b.to_cents()] for member_id, b in balances.items() if b.to_cents() > 0),
        key=lambda c: c[1],
        reverse=True,
    )
    debtors = sorted(
        ([member_id, -b.to_cents()] for member_id, b in balances.items() if b.to_cents() < 0),
        key=lambda d: d[1],
        reverse=True,
    )

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        amount = min(debtors[i][1], creditors[j][1])
        transfers.append(Transfer(debtors[i][0], creditors[j][0], Money.from_cents(amount)))
        debtors[i][1] -= amount
        creditors[j][1] -= amount
        if debtors[i][1] == 0:
            i += 1
        if creditors[j][1] == 0:
            j += 1

    return transfers


def pooled_remaining(workspace: Workspace, spent_this_month: Money) -> Money | None:
    """
    Remaining pooled budget for a joint workspace: monthly target minus spend.

    Returns None for other workspace types or when no target is configured.
    """
    if workspace.type != WorkspaceType.JOINT or workspace.monthly_target is None:
        return None
    return workspace.monthly_target - spent_this_month
