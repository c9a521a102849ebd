#!/usr/bin/env python3
"""
File-backed Workspace Store

Reference implementation of the workspace store interfaces plus the
single-record write paths: expense insert/patch/delete, budget limits and
recurring bill templates.

Layout under the data directory:

    workspaces/<workspace_id>/workspace.json   settings and members
    workspaces/<workspace_id>/expenses.json    expense records
    workspaces/<workspace_id>/budgets.yaml     category -> limit in cents
    workspaces/<workspace_id>/recurring.json   recurring bill templates

Every mutation is one read-modify-write of one file; there is no
multi-record coordination and no derived data is ever written.
"""

import json
import logging
import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from ..core.datastore import (
    ExpenseNotFoundError,
    RecurringTemplateNotFoundError,
    StoreError,
    WorkspaceNotFoundError,
)
from ..core.json_utils import read_json, write_json, write_yaml
from ..core.models import (
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
from ..core.money import Money

logger = logging.getLogger(__name__)


class AccessDeniedError(PermissionError):
    """The acting user may not perform this write."""

    pass


class SplitDetailsError(ValueError):
    """A per-expense split override is inconsistent with the expense."""

    pass


def _now_ms() -> int:
    return int(datetime.now().timestamp() * 1000)


def validate_split_details(
    split_details: Mapping[str, Money] | None, amount: Money, member_ids: Iterable[str]
) -> None:
    """
    Check that an override only names current members and sums to the amount.

    Raises:
        SplitDetailsError: If the override is inconsistent
    """
    if split_details is None:
        return

    known = set(member_ids)
    unknown = [member_id for member_id in split_details if member_id not in known]
    if unknown:
        raise SplitDetailsError(f"Split details name non-members: {', '.join(sorted(unknown))}")

    if any(share.to_cents() < 0 for share in split_details.values()):
        raise SplitDetailsError("Split details shares must be non-negative")

    override_total = Money.total(split_details.values())
    if override_total != amount:
        raise SplitDetailsError(f"Split details total {override_total} doesn't match amount {amount}")


class JsonWorkspaceStore:
    """
    Workspace store persisted as JSON and YAML files.

    Args:
        data_dir: Base data directory
        current_user: Identity reported by `current_user_id()`
    """

    def __init__(self, data_dir: Path, current_user: str | None = None):
        self.data_dir = Path(data_dir)
        self.workspaces_dir = self.data_dir / "workspaces"
        self.current_user = current_user

    # -- paths and raw file access ------------------------------------------

    def _workspace_dir(self, workspace_id: str) -> Path:
        return self.workspaces_dir / workspace_id

    def _workspace_file(self, workspace_id: str) -> Path:
        return self._workspace_dir(workspace_id) / "workspace.json"

    def _expenses_file(self, workspace_id: str) -> Path:
        return self._workspace_dir(workspace_id) / "expenses.json"

    def _budgets_file(self, workspace_id: str) -> Path:
        return self._workspace_dir(workspace_id) / "budgets.yaml"

    def _recurring_file(self, workspace_id: str) -> Path:
        return self._workspace_dir(workspace_id) / "recurring.json"

    def _read(self, path: Path, default: Any) -> Any:
        if not path.exists():
            return default
        try:
            return read_json(path)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Unreadable store file {path}: {e}") from e

    def _load_workspace_doc(self, workspace_id: str) -> dict[str, Any]:
        path = self._workspace_file(workspace_id)
        if not path.exists():
            raise WorkspaceNotFoundError(f"Workspace not found: {workspace_id}")
        return self._read(path, {})

    def _load_expense_dicts(self, workspace_id: str) -> list[dict[str, Any]]:
        return self._read(self._expenses_file(workspace_id), [])

    def _load_budget_map(self, workspace_id: str) -> dict[str, int]:
        path = self._budgets_file(workspace_id)
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise StoreError(f"Unreadable budgets file {path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"Malformed budgets file {path}: expected a category -> cents mapping")
        budgets = {}
        for category, limit in data.items():
            if isinstance(limit, bool) or not isinstance(limit, int):
                raise StoreError(f"Malformed budgets file {path}: limit for {category!r} is {limit!r}, not cents")
            budgets[str(category)] = limit
        return budgets

    def _save_budget_map(self, workspace_id: str, budgets: dict[str, int]) -> None:
        write_yaml(self._budgets_file(workspace_id), budgets)

    def _load_template_dicts(self, workspace_id: str) -> list[dict[str, Any]]:
        return self._read(self._recurring_file(workspace_id), [])

    # -- read interface ---------------------------------------------------------

    def exists(self, workspace_id: str) -> bool:
        return self._workspace_file(workspace_id).exists()

    def list_workspace_ids(self) -> list[str]:
        if not self.workspaces_dir.exists():
            return []
        return sorted(p.parent.name for p in self.workspaces_dir.glob("*/workspace.json"))

    def get_workspace(self, workspace_id: str) -> Workspace:
        return Workspace.from_dict(self._load_workspace_doc(workspace_id)["workspace"])

    def list_members(self, workspace_id: str) -> list[Member]:
        doc = self._load_workspace_doc(workspace_id)
        return [Member.from_dict(m) for m in doc.get("members", [])]

    def list_expenses(
        self, workspace_id: str, date_range: tuple[int, int] | None = None
    ) -> list[Expense]:
        self._load_workspace_doc(workspace_id)
        expenses = [Expense.from_dict(e) for e in self._load_expense_dicts(workspace_id)]
        if date_range is not None:
            start_ms, end_ms = date_range
            expenses = [e for e in expenses if start_ms <= e.date <= end_ms]
        return expenses

    def list_category_budgets(self, workspace_id: str) -> list[CategoryBudget]:
        self._load_workspace_doc(workspace_id)
        return [
            CategoryBudget(workspace_id=workspace_id, category=category, limit=Money.from_cents(limit))
            for category, limit in self._load_budget_map(workspace_id).items()
        ]

    def list_recurring_templates(self, workspace_id: str) -> list[RecurringTemplate]:
        self._load_workspace_doc(workspace_id)
        return [RecurringTemplate.from_dict(t) for t in self._load_template_dicts(workspace_id)]

    def current_user_id(self) -> str | None:
        return self.current_user

    def get_expense(self, expense_id: str) -> Expense:
        """Find an expense in any workspace."""
        for workspace_id in self.list_workspace_ids():
            for data in self._load_expense_dicts(workspace_id):
                if data["id"] == expense_id:
                    return Expense.from_dict(data)
        raise ExpenseNotFoundError(f"Expense not found: {expense_id}")

    def summary_text(self, workspace_id: str) -> str:
        """Human-readable summary of one workspace's stored data."""
        if not self.exists(workspace_id):
            return f"No workspace {workspace_id}"
        workspace = self.get_workspace(workspace_id)
        expense_count = len(self._load_expense_dicts(workspace_id))
        member_count = len(self.list_members(workspace_id))
        return f"{workspace.name} ({workspace.type.value}): {member_count} members, {expense_count} expenses"

    # -- workspace setup ----------------------------------------------------------

    def create_workspace(
        self,
        name: str,
        workspace_type: WorkspaceType,
        owner_id: str,
        split_method: SplitMethod | None = None,
        custom_split_config: str | None = None,
        monthly_target: Money | None = None,
        monthly_budget: Money | None = None,
        currency: str = "USD",
        workspace_id: str | None = None,
    ) -> Workspace:
        """
        Create a workspace with `owner_id` as its single owner.

        Split method applies to split workspaces only (default 50/50); the
        monthly target applies to joint workspaces only.
        """
        workspace = Workspace(
            id=workspace_id or uuid.uuid4().hex,
            name=name,
            type=workspace_type,
            currency=currency,
            split_method=(split_method or SplitMethod.EQUAL) if workspace_type == WorkspaceType.SPLIT else None,
            custom_split_config=custom_split_config if workspace_type == WorkspaceType.SPLIT else None,
            monthly_target=monthly_target if workspace_type == WorkspaceType.JOINT else None,
            monthly_budget=monthly_budget,
        )
        if self.exists(workspace.id):
            raise StoreError(f"Workspace already exists: {workspace.id}")

        owner = Member(workspace_id=workspace.id, user_id=owner_id, role=MemberRole.OWNER, joined_at=_now_ms())
        write_json(
            self._workspace_file(workspace.id),
            {"workspace": workspace.to_dict(), "members": [owner.to_dict()]},
        )
        logger.info("Created %s workspace %s (%s)", workspace_type.value, workspace.name, workspace.id)
        return workspace

    def add_member(
        self,
        workspace_id: str,
        user_id: str,
        role: MemberRole = MemberRole.MEMBER,
        joined_at: int | None = None,
    ) -> Member:
        """Add a member; an existing membership is returned unchanged."""
        if role == MemberRole.OWNER:
            raise ValueError("A workspace has exactly one owner; add members as admin or member")

        doc = self._load_workspace_doc(workspace_id)
        for data in doc.get("members", []):
            if data["user_id"] == user_id:
                return Member.from_dict(data)

        member = Member(
            workspace_id=workspace_id,
            user_id=user_id,
            role=role,
            joined_at=joined_at if joined_at is not None else _now_ms(),
        )
        doc.setdefault("members", []).append(member.to_dict())
        write_json(self._workspace_file(workspace_id), doc)
        return member

    def set_overall_budget(self, workspace_id: str, limit: Money | None) -> Workspace:
        """Set (or clear) the overall limit: monthly target for joint, monthly budget otherwise."""
        if limit is not None and limit.to_cents() < 0:
            raise ValueError("Budget limit must be non-negative")

        doc = self._load_workspace_doc(workspace_id)
        workspace = Workspace.from_dict(doc["workspace"])
        if workspace.type == WorkspaceType.JOINT:
            workspace.monthly_target = limit
        else:
            workspace.monthly_budget = limit
        doc["workspace"] = workspace.to_dict()
        write_json(self._workspace_file(workspace_id), doc)
        return workspace

    def set_category_budget(self, workspace_id: str, category: str, limit: Money) -> CategoryBudget:
        """Set a category limit, replacing any existing limit for that category."""
        if limit.to_cents() < 0:
            raise ValueError("Budget limit must be non-negative")

        self._load_workspace_doc(workspace_id)
        budgets = self._load_budget_map(workspace_id)
        budgets[category] = limit.to_cents()
        self._save_budget_map(workspace_id, budgets)
        return CategoryBudget(workspace_id=workspace_id, category=category, limit=limit)

    # -- expense writes -----------------------------------------------------------

    def _membership(self, workspace_id: str, user_id: str) -> Member:
        for member in self.list_members(workspace_id):
            if member.user_id == user_id:
                return member
        raise AccessDeniedError(f"{user_id} is not a member of workspace {workspace_id}")

    def _new_expense(
        self, workspace_id: str, payer_id: str, member_ids: list[str], item: Mapping[str, Any]
    ) -> Expense:
        amount = item["amount"]
        if amount.to_cents() < 0:
            raise ValueError("Expense amount must be non-negative")

        split_details = item.get("split_details")
        validate_split_details(split_details, amount, member_ids)

        return Expense(
            id=uuid.uuid4().hex,
            workspace_id=workspace_id,
            payer_id=payer_id,
            amount=amount,
            category=item["category"],
            date=int(item["date"]),
            description=item.get("description", ""),
            is_recurring=item.get("is_recurring", False),
            recurrence_rule=item.get("recurrence_rule"),
            split_details=dict(split_details) if split_details is not None else None,
        )

    def add_expenses(self, workspace_id: str, payer_id: str, items: list[Mapping[str, Any]]) -> list[Expense]:
        """
        Record several expenses paid by one member.

        Every item is validated before anything is written, so a bad item
        leaves the store untouched.

        Args:
            workspace_id: Target workspace
            payer_id: Member who paid; must be a current member
            items: Mappings with amount (Money), category, date (epoch ms) and
                optional description, is_recurring, recurrence_rule, split_details

        Raises:
            AccessDeniedError: If the payer is not a member
            SplitDetailsError: If an override is inconsistent
            ValueError: If an amount is negative
        """
        self._membership(workspace_id, payer_id)
        member_ids = [m.user_id for m in self.list_members(workspace_id)]

        expenses = [self._new_expense(workspace_id, payer_id, member_ids, item) for item in items]

        stored = self._load_expense_dicts(workspace_id)
        stored.extend(expense.to_dict() for expense in expenses)
        write_json(self._expenses_file(workspace_id), stored)

        logger.info("Recorded %d expenses in workspace %s", len(expenses), workspace_id)
        return expenses

    def add_expense(
        self,
        workspace_id: str,
        payer_id: str,
        amount: Money,
        category: str,
        date: int,
        description: str = "",
        is_recurring: bool = False,
        recurrence_rule: str | None = None,
        split_details: Mapping[str, Money] | None = None,
    ) -> Expense:
        """Record one expense. See `add_expenses` for validation rules."""
        item = {
            "amount": amount,
            "category": category,
            "date": date,
            "description": description,
            "is_recurring": is_recurring,
            "recurrence_rule": recurrence_rule,
            "split_details": split_details,
        }
        return self.add_expenses(workspace_id, payer_id, [item])[0]

    def _authorize_change(self, expense: Expense, actor_id: str, action: str) -> None:
        member = self._membership(expense.workspace_id, actor_id)
        if expense.payer_id != actor_id and not member.can_manage_expenses:
            raise AccessDeniedError(f"You can only {action} your own expenses")

    def update_expense(
        self,
        expense_id: str,
        actor_id: str,
        amount: Money | None = None,
        description: str | None = None,
        category: str | None = None,
        date: int | None = None,
        is_recurring: bool | None = None,
        split_details: Mapping[str, Money] | None = None,
        clear_split_details: bool = False,
    ) -> Expense:
        """
        Patch an expense. Only the payer or an owner/admin may edit.

        Fields left as None are unchanged. The workspace and payer never change.
        A new `split_details` replaces the stored override; `clear_split_details`
        drops it so the workspace split policy applies again. Whenever the
        amount or the override changes, the resulting pair is validated
        together.

        Raises:
            AccessDeniedError: If the actor may not edit this expense
            SplitDetailsError: If the resulting override doesn't fit the amount
            ValueError: If the amount is negative, or both a new override and
                `clear_split_details` are given
        """
        if split_details is not None and clear_split_details:
            raise ValueError("Give either new split details or clear them, not both")

        expense = self.get_expense(expense_id)
        self._authorize_change(expense, actor_id, "edit")

        if amount is not None or split_details is not None or clear_split_details:
            new_amount = amount if amount is not None else expense.amount
            if clear_split_details:
                new_split = None
            elif split_details is not None:
                new_split = dict(split_details)
            else:
                new_split = expense.split_details

            if new_amount.to_cents() < 0:
                raise ValueError("Expense amount must be non-negative")
            member_ids = [m.user_id for m in self.list_members(expense.workspace_id)]
            validate_split_details(new_split, new_amount, member_ids)

            expense.amount = new_amount
            expense.split_details = new_split
        if description is not None:
            expense.description = description
        if category is not None:
            expense.category = category
        if date is not None:
            expense.date = date
        if is_recurring is not None:
            expense.is_recurring = is_recurring

        stored = self._load_expense_dicts(expense.workspace_id)
        write_json(
            self._expenses_file(expense.workspace_id),
            [expense.to_dict() if data["id"] == expense_id else data for data in stored],
        )
        return expense

    def delete_expense(self, expense_id: str, actor_id: str) -> None:
        """Hard-delete an expense. Only the payer or an owner/admin may delete."""
        expense = self.get_expense(expense_id)
        self._authorize_change(expense, actor_id, "delete")

        stored = self._load_expense_dicts(expense.workspace_id)
        write_json(
            self._expenses_file(expense.workspace_id),
            [data for data in stored if data["id"] != expense_id],
        )
        logger.info("Deleted expense %s from workspace %s", expense_id, expense.workspace_id)

    # -- recurring templates ------------------------------------------------------

    def get_recurring_template(self, template_id: str) -> RecurringTemplate:
        """Find a recurring template in any workspace."""
        for workspace_id in self.list_workspace_ids():
            for data in self._load_template_dicts(workspace_id):
                if data["id"] == template_id:
                    return RecurringTemplate.from_dict(data)
        raise RecurringTemplateNotFoundError(f"Recurring template not found: {template_id}")

    def add_recurring_template(
        self,
        workspace_id: str,
        actor_id: str,
        label: str,
        amount: Money,
        category: str,
        interval: RecurrenceInterval = RecurrenceInterval.MONTHLY,
        next_due: int | None = None,
    ) -> RecurringTemplate:
        """
        Save a recurring bill template. Any current member may add one.

        Raises:
            AccessDeniedError: If the actor is not a member
            ValueError: If the label is blank or the amount is negative
        """
        self._membership(workspace_id, actor_id)
        if not label.strip():
            raise ValueError("Recurring template needs a label")
        if amount.to_cents() < 0:
            raise ValueError("Recurring amount must be non-negative")

        template = RecurringTemplate(
            id=uuid.uuid4().hex,
            workspace_id=workspace_id,
            label=label.strip(),
            amount=amount,
            category=category,
            interval=interval,
            next_due=next_due,
        )
        stored = self._load_template_dicts(workspace_id)
        stored.append(template.to_dict())
        write_json(self._recurring_file(workspace_id), stored)

        logger.info("Added %s template %s to workspace %s", interval.value, template.label, workspace_id)
        return template

    def delete_recurring_template(self, template_id: str, actor_id: str) -> None:
        """Remove a recurring template. Any current member may remove one."""
        template = self.get_recurring_template(template_id)
        self._membership(template.workspace_id, actor_id)

        stored = self._load_template_dicts(template.workspace_id)
        write_json(
            self._recurring_file(template.workspace_id),
            [data for data in stored if data["id"] != template_id],
        )
        logger.info("Deleted recurring template %s from workspace %s", template_id, template.workspace_id)
