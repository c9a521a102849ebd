#!/usr/bin/env python3
"""Unit tests for the fixed monthly cost of recurring bill templates."""

from fractions import Fraction

import pytest

from household.analysis.recurring import commitment_lines, monthly_commitment, monthly_equivalent, summarize
from household.core.models import RecurrenceInterval
from household.core.money import Money
from tests.fixtures.household_data import make_template

YEARLY = RecurrenceInterval.YEARLY


@pytest.mark.budget
class TestMonthlyCommitment:
    """Test folding templates into a monthly figure."""

    def test_no_templates(self):
        assert monthly_commitment([]) == Money.zero()

    def test_monthly_and_yearly_mix(self):
        templates = [make_template(1549), make_template(120000, YEARLY)]
        # $15.49 + $1,200.00 / 12
        assert monthly_commitment(templates) == Money.from_cents(11549)

    def test_yearly_equivalent_is_exact(self):
        assert monthly_equivalent(make_template(1000, YEARLY)) == Fraction(250, 3)
        assert monthly_equivalent(make_template(1000)) == 1000

    def test_rounds_once_after_summing(self):
        # Each $1.00 yearly bill is 8.33... cents a month; twelve of them are exactly 100
        assert monthly_commitment([make_template(100, YEARLY)] * 12) == Money.from_cents(100)

    @pytest.mark.parametrize(
        "yearly_cents,expected",
        [(6, 1), (5, 0), (18, 2), (99999, 8333)],
    )
    def test_half_cent_rounds_up(self, yearly_cents, expected):
        assert monthly_commitment([make_template(yearly_cents, YEARLY)]) == Money.from_cents(expected)


class TestCommitmentLines:
    def test_largest_monthly_share_first(self):
        rent = make_template(150000, label="Rent")
        insurance = make_template(240000, YEARLY, label="Insurance")
        phone = make_template(4000, label="Phone")

        lines = commitment_lines([phone, insurance, rent])
        assert [line.template.label for line in lines] == ["Rent", "Insurance", "Phone"]
        assert lines[1].monthly_money == Money.from_cents(20000)

    def test_summarize(self):
        summary = summarize(iter([make_template(1000), make_template(1200, YEARLY)]))
        assert len(summary.lines) == 2
        assert summary.monthly_total == Money.from_cents(1100)
