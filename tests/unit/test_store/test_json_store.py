#!/usr/bin/env python3
"""
Unit tests for the file-backed workspace store.
"""

import pytest
import yaml

from household.core.datastore import (
    ExpenseNotFoundError,
    RecurringTemplateNotFoundError,
    StoreError,
    WorkspaceNotFoundError,
)
from household.core.models import MemberRole, RecurrenceInterval, SplitMethod, WorkspaceType
from household.core.money import Money
from household.store import AccessDeniedError, SplitDetailsError, validate_split_details
from tests.fixtures.household_data import epoch_ms

WHEN = epoch_ms(2024, 3, 15)


def m(cents: int) -> Money:
    return Money.from_cents(cents)


@pytest.mark.store
class TestWorkspaceSetup:
    """Test workspace creation and membership."""

    def test_create_split_workspace(self, store, split_workspace):
        workspace = store.get_workspace("flat")
        assert workspace.type == WorkspaceType.SPLIT
        assert workspace.split_method == SplitMethod.EQUAL
        assert [(mb.user_id, mb.role) for mb in store.list_members("flat")] == [
            ("alice", MemberRole.OWNER),
            ("bob", MemberRole.MEMBER),
        ]
        assert store.list_workspace_ids() == ["flat"]

    def test_target_only_kept_for_joint(self, store):
        workspace = store.create_workspace("Me", WorkspaceType.PERSONAL, "alice", monthly_target=m(100))
        assert workspace.monthly_target is None

    def test_duplicate_workspace_id(self, store, split_workspace):
        with pytest.raises(StoreError, match="already exists"):
            store.create_workspace("Again", WorkspaceType.SPLIT, "alice", workspace_id="flat")

    def test_add_member_is_idempotent(self, store, split_workspace):
        store.add_member("flat", "bob", MemberRole.ADMIN)
        assert len(store.list_members("flat")) == 2

    def test_second_owner_rejected(self, store, split_workspace):
        with pytest.raises(ValueError):
            store.add_member("flat", "carol", MemberRole.OWNER)

    def test_missing_workspace(self, store):
        with pytest.raises(WorkspaceNotFoundError):
            store.get_workspace("nope")
        with pytest.raises(WorkspaceNotFoundError):
            store.list_expenses("nope")

    def test_corrupt_file_raises_store_error(self, store, split_workspace):
        (store.workspaces_dir / "flat" / "expenses.json").write_text("{broken")
        with pytest.raises(StoreError, match="Unreadable"):
            store.list_expenses("flat")

    def test_summary_text(self, store, split_workspace):
        assert store.summary_text("flat") == "Flat (split): 2 members, 0 expenses"
        assert store.summary_text("nope") == "No workspace nope"


@pytest.mark.store
class TestExpenseWrites:
    """Test expense insert, update and delete rules."""

    def test_add_and_list(self, store, split_workspace):
        created = store.add_expense("flat", "bob", m(4599), "groceries", WHEN, description="Weekly shop")
        listed = store.list_expenses("flat")
        assert listed == [created]
        assert store.get_expense(created.id).description == "Weekly shop"

    def test_date_range_filter_is_inclusive(self, store, split_workspace):
        store.add_expense("flat", "alice", m(100), "other", WHEN)
        store.add_expense("flat", "alice", m(200), "other", WHEN + 1)
        assert [e.amount.to_cents() for e in store.list_expenses("flat", (WHEN, WHEN))] == [100]
        assert len(store.list_expenses("flat", (WHEN, WHEN + 1))) == 2

    def test_non_member_cannot_add(self, store, split_workspace):
        with pytest.raises(AccessDeniedError):
            store.add_expense("flat", "mallory", m(100), "other", WHEN)

    def test_negative_amount_rejected(self, store, split_workspace):
        with pytest.raises(ValueError):
            store.add_expense("flat", "alice", m(-1), "other", WHEN)

    def test_batch_is_all_or_nothing(self, store, split_workspace):
        items = [
            {"amount": m(100), "category": "groceries", "date": WHEN},
            {"amount": m(100), "category": "dining", "date": WHEN, "split_details": {"alice": m(10)}},
        ]
        with pytest.raises(SplitDetailsError):
            store.add_expenses("flat", "alice", items)
        assert store.list_expenses("flat") == []

    def test_batch_insert(self, store, split_workspace):
        items = [{"amount": m(100 * i), "category": "groceries", "date": WHEN} for i in range(1, 4)]
        created = store.add_expenses("flat", "bob", items)
        assert [e.amount.to_cents() for e in created] == [100, 200, 300]
        assert len(store.list_expenses("flat")) == 3

    def test_payer_can_update(self, store, split_workspace):
        expense = store.add_expense("flat", "bob", m(1000), "dining", WHEN)
        updated = store.update_expense(expense.id, "bob", amount=m(1200), is_recurring=True)
        assert updated.amount == m(1200)
        assert store.get_expense(expense.id).is_recurring

    def test_member_cannot_edit_others_expense(self, store, split_workspace):
        expense = store.add_expense("flat", "alice", m(1000), "dining", WHEN)
        with pytest.raises(AccessDeniedError, match="own expenses"):
            store.update_expense(expense.id, "bob", description="mine now")
        with pytest.raises(AccessDeniedError):
            store.delete_expense(expense.id, "bob")

    def test_owner_can_delete_anyones_expense(self, store, split_workspace):
        expense = store.add_expense("flat", "bob", m(1000), "dining", WHEN)
        store.delete_expense(expense.id, "alice")
        with pytest.raises(ExpenseNotFoundError):
            store.get_expense(expense.id)

    def test_amount_alone_must_still_match_kept_override(self, store, split_workspace):
        expense = store.add_expense(
            "flat", "alice", m(1000), "dining", WHEN, split_details={"alice": m(600), "bob": m(400)}
        )
        with pytest.raises(SplitDetailsError):
            store.update_expense(expense.id, "alice", amount=m(2000))
        assert store.get_expense(expense.id).amount == m(1000)

    def test_update_amount_and_override_together(self, store, split_workspace):
        expense = store.add_expense(
            "flat", "alice", m(10000), "dining", WHEN, split_details={"alice": m(7000), "bob": m(3000)}
        )
        updated = store.update_expense(
            expense.id, "alice", amount=m(12000), split_details={"alice": m(8000), "bob": m(4000)}
        )

        stored = store.get_expense(expense.id)
        assert updated == stored
        assert stored.amount == m(12000)
        assert stored.split_details == {"alice": m(8000), "bob": m(4000)}

    def test_clear_override_returns_to_workspace_split(self, store, split_workspace):
        expense = store.add_expense(
            "flat", "alice", m(10000), "dining", WHEN, split_details={"alice": m(7000), "bob": m(3000)}
        )
        store.update_expense(expense.id, "alice", amount=m(12000), clear_split_details=True)

        stored = store.get_expense(expense.id)
        assert stored.amount == m(12000)
        assert stored.split_details is None

    def test_new_override_checked_against_current_amount(self, store, split_workspace):
        expense = store.add_expense("flat", "alice", m(1000), "dining", WHEN)
        with pytest.raises(SplitDetailsError, match="doesn't match"):
            store.update_expense(expense.id, "alice", split_details={"alice": m(900)})
        with pytest.raises(SplitDetailsError, match="non-members"):
            store.update_expense(expense.id, "alice", split_details={"alice": m(500), "carol": m(500)})

        store.update_expense(expense.id, "alice", split_details={"alice": m(100), "bob": m(900)})
        assert store.get_expense(expense.id).split_details == {"alice": m(100), "bob": m(900)}

    def test_override_and_clear_are_exclusive(self, store, split_workspace):
        expense = store.add_expense("flat", "alice", m(1000), "dining", WHEN)
        with pytest.raises(ValueError, match="not both"):
            store.update_expense(
                expense.id, "alice", split_details={"alice": m(1000)}, clear_split_details=True
            )

    def test_description_edit_leaves_override_alone(self, store, split_workspace):
        expense = store.add_expense(
            "flat", "alice", m(1000), "dining", WHEN, split_details={"alice": m(600), "bob": m(400)}
        )
        store.update_expense(expense.id, "alice", description="Pizza")

        stored = store.get_expense(expense.id)
        assert stored.description == "Pizza"
        assert stored.split_details == {"alice": m(600), "bob": m(400)}


@pytest.mark.store
class TestBudgets:
    """Test budget limits."""

    def test_set_category_budget_replaces(self, store, split_workspace):
        store.set_category_budget("flat", "groceries", m(40000))
        store.set_category_budget("flat", "groceries", m(45000))
        budgets = store.list_category_budgets("flat")
        assert [(b.category, b.limit) for b in budgets] == [("groceries", m(45000))]

        with open(store.workspaces_dir / "flat" / "budgets.yaml") as f:
            assert yaml.safe_load(f) == {"groceries": 45000}

    def test_negative_limit_rejected(self, store, split_workspace):
        with pytest.raises(ValueError):
            store.set_category_budget("flat", "groceries", m(-1))

    def test_set_overall_budget_by_type(self, store, split_workspace, joint_workspace):
        assert store.set_overall_budget("flat", m(300000)).monthly_budget == m(300000)
        assert store.set_overall_budget("pool", m(250000)).monthly_target == m(250000)
        assert store.set_overall_budget("pool", None).overall_limit is None

    def test_budget_write_leaves_no_temp_files(self, store, split_workspace):
        store.set_category_budget("flat", "groceries", m(40000))
        names = sorted(p.name for p in (store.workspaces_dir / "flat").iterdir())
        assert names == ["budgets.yaml", "workspace.json"]

    @pytest.mark.parametrize(
        "content",
        [
            "groceries:\n",  # null limit
            "groceries: lots\n",
            "groceries: 12.5\n",
            "- groceries\n- dining\n",
            "just text\n",
        ],
    )
    def test_malformed_budgets_file_raises_store_error(self, store, split_workspace, content):
        (store.workspaces_dir / "flat" / "budgets.yaml").write_text(content)
        with pytest.raises(StoreError, match="Malformed budgets file"):
            store.list_category_budgets("flat")

    def test_empty_budgets_file_means_no_limits(self, store, split_workspace):
        (store.workspaces_dir / "flat" / "budgets.yaml").write_text("")
        assert store.list_category_budgets("flat") == []


@pytest.mark.store
class TestRecurringTemplates:
    """Test recurring bill template storage."""

    def test_add_and_list(self, store, split_workspace):
        rent = store.add_recurring_template("flat", "alice", "Rent", m(150000), "rent")
        insurance = store.add_recurring_template(
            "flat", "bob", " Insurance ", m(120000), "transport", RecurrenceInterval.YEARLY, next_due=WHEN
        )

        assert store.list_recurring_templates("flat") == [rent, insurance]
        assert insurance.label == "Insurance"
        assert store.get_recurring_template(insurance.id).next_due == WHEN

    def test_empty_workspace_has_no_templates(self, store, split_workspace):
        assert store.list_recurring_templates("flat") == []

    def test_missing_workspace(self, store):
        with pytest.raises(WorkspaceNotFoundError):
            store.list_recurring_templates("nope")

    def test_non_member_cannot_add(self, store, split_workspace):
        with pytest.raises(AccessDeniedError):
            store.add_recurring_template("flat", "mallory", "Gym", m(3000), "health")

    @pytest.mark.parametrize("label,cents", [("  ", 100), ("Gym", -1)])
    def test_invalid_template_rejected(self, store, split_workspace, label, cents):
        with pytest.raises(ValueError):
            store.add_recurring_template("flat", "alice", label, m(cents), "health")
        assert store.list_recurring_templates("flat") == []

    def test_delete(self, store, split_workspace):
        gym = store.add_recurring_template("flat", "alice", "Gym", m(3000), "health")
        phone = store.add_recurring_template("flat", "alice", "Phone", m(4000), "utilities")

        with pytest.raises(AccessDeniedError):
            store.delete_recurring_template(gym.id, "mallory")

        store.delete_recurring_template(gym.id, "bob")
        assert store.list_recurring_templates("flat") == [phone]
        with pytest.raises(RecurringTemplateNotFoundError):
            store.delete_recurring_template(gym.id, "alice")


class TestValidateSplitDetails:
    def test_valid_override(self):
        validate_split_details({"a": m(70), "b": m(30)}, m(100), ["a", "b"])

    def test_none_is_valid(self):
        validate_split_details(None, m(100), [])

    def test_unknown_member(self):
        with pytest.raises(SplitDetailsError, match="non-members"):
            validate_split_details({"a": m(50), "x": m(50)}, m(100), ["a", "b"])

    def test_wrong_total(self):
        with pytest.raises(SplitDetailsError, match="doesn't match"):
            validate_split_details({"a": m(50)}, m(100), ["a"])
