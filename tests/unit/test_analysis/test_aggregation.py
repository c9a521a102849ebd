#!/usr/bin/env python3
"""
Unit tests for category and trend aggregation.
"""

from household.analysis.aggregation import (
    by_category,
    by_member_category,
    expenses_in_window,
    monthly_total,
    recent_expenses,
    recurring_expenses,
    trend,
)
from household.analysis.categories import FALLBACK_ICON
from household.analysis.windows import TimeWindowResolver
from household.core.money import Money
from tests.fixtures.household_data import epoch_ms, make_expense

RESOLVER = TimeWindowResolver("UTC")
MARCH = RESOLVER.month_window(epoch_ms(2024, 3, 15))


class TestByCategory:
    """Test by_category."""

    def test_totals_sorted_largest_first(self):
        expenses = [
            make_expense(1000, "dining"),
            make_expense(5000, "groceries"),
            make_expense(2500, "dining"),
        ]
        totals = by_category(expenses, MARCH)

        assert [t.category for t in totals] == ["groceries", "dining"]
        assert totals[0].total == Money.from_cents(5000)
        assert totals[1].total == Money.from_cents(3500)
        assert totals[1].name == "Dining Out"

    def test_percent_of_total(self):
        expenses = [make_expense(7500, "rent"), make_expense(2500, "utilities")]
        totals = by_category(expenses, MARCH)
        assert [t.percent_of_total for t in totals] == [75.0, 25.0]

    def test_equal_totals_keep_first_seen_order(self):
        expenses = [
            make_expense(1000, "health"),
            make_expense(1000, "shopping"),
            make_expense(1000, "transport"),
        ]
        assert [t.category for t in by_category(expenses, MARCH)] == ["health", "shopping", "transport"]

    def test_expenses_outside_window_are_ignored(self):
        expenses = [
            make_expense(1000, "groceries", date=epoch_ms(2024, 3, 31, 23, 59, 59, 999)),
            make_expense(9999, "groceries", date=epoch_ms(2024, 4, 1)),
            make_expense(9999, "groceries", date=epoch_ms(2024, 2, 29, 23, 59, 59, 999)),
        ]
        totals = by_category(expenses, MARCH)
        assert len(totals) == 1
        assert totals[0].total == Money.from_cents(1000)

    def test_unknown_category_is_kept(self):
        totals = by_category([make_expense(100, "pets")], MARCH)
        assert totals[0].category == "pets"
        assert totals[0].name == "pets"
        assert totals[0].icon == FALLBACK_ICON

    def test_empty_input(self):
        assert by_category([], MARCH) == []

    def test_sum_of_categories_equals_monthly_total(self):
        expenses = [make_expense(c, cat) for c, cat in [(101, "dining"), (202, "other"), (303, "dining")]]
        totals = by_category(expenses, MARCH)
        assert Money.total(t.total for t in totals) == monthly_total(expenses, MARCH)

    def test_same_input_same_output(self):
        expenses = [make_expense(300, "dining"), make_expense(300, "groceries")]
        assert by_category(expenses, MARCH) == by_category(expenses, MARCH)


class TestByMemberCategory:
    """Test by_member_category."""

    def test_partitioned_by_payer(self):
        expenses = [
            make_expense(1000, "groceries", payer_id="alice"),
            make_expense(4000, "rent", payer_id="bob"),
            make_expense(500, "dining", payer_id="alice"),
        ]
        result = by_member_category(expenses, MARCH)

        assert [b.member_id for b in result] == ["bob", "alice"]
        alice = result[1]
        assert alice.total == Money.from_cents(1500)
        assert [c.category for c in alice.categories] == ["groceries", "dining"]


class TestTrend:
    """Test trend."""

    def test_always_returns_requested_months(self):
        points = trend([], epoch_ms(2024, 3, 15), 6, RESOLVER)
        assert len(points) == 6
        assert all(p.total.is_zero() for p in points)

    def test_buckets_by_month(self):
        expenses = [
            make_expense(1000, date=epoch_ms(2024, 1, 31, 23, 59, 59, 999)),
            make_expense(2000, date=epoch_ms(2024, 2, 1)),
            make_expense(3000, date=epoch_ms(2024, 3, 10)),
            make_expense(4000, date=epoch_ms(2023, 1, 10)),
        ]
        points = trend(expenses, epoch_ms(2024, 3, 15), 3, RESOLVER)

        assert [p.label for p in points] == ["Jan", "Feb", "Mar"]
        assert [p.total.to_cents() for p in points] == [1000, 2000, 3000]

    def test_accepts_one_shot_iterables(self):
        points = trend(iter([make_expense(100)]), epoch_ms(2024, 3, 15), 2, RESOLVER)
        assert [p.total.to_cents() for p in points] == [0, 100]


class TestListings:
    """Test monthly_total, recurring and recent listings."""

    def test_monthly_total(self):
        expenses = [make_expense(100), make_expense(250), make_expense(1, date=epoch_ms(2024, 4, 2))]
        assert monthly_total(expenses, MARCH) == Money.from_cents(350)
        assert len(expenses_in_window(expenses, MARCH)) == 2

    def test_recurring_expenses(self):
        netflix = make_expense(1599, "subscriptions", is_recurring=True)
        expenses = [make_expense(100), netflix]
        assert recurring_expenses(expenses) == [netflix]

    def test_recent_expenses_newest_first_with_limit(self):
        expenses = [make_expense(100, date=epoch_ms(2024, 3, day)) for day in (5, 20, 1, 12)]
        recent = recent_expenses(expenses, limit=3)
        assert [e.date for e in recent] == [epoch_ms(2024, 3, 20), epoch_ms(2024, 3, 12), epoch_ms(2024, 3, 5)]

    def test_recent_expenses_non_positive_limit(self):
        assert recent_expenses([make_expense(100)], limit=0) == []
