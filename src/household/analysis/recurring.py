#!/usr/bin/env python3
"""
Recurring Commitments

Folds recurring bill templates into the fixed monthly cost a workspace has
signed up for. Yearly bills count one twelfth of their amount per month.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from fractions import Fraction

from ..core.models import RecurrenceInterval, RecurringTemplate
from ..core.money import Money

MONTHS_PER_INTERVAL = {
    RecurrenceInterval.MONTHLY: 1,
    RecurrenceInterval.YEARLY: 12,
}


@dataclass(frozen=True)
class CommitmentLine:
    """One template with its exact per-month share."""

    template: RecurringTemplate
    monthly: Fraction  # cents per month

    @property
    def monthly_money(self) -> Money:
        return Money.from_cents(_round_half_up(self.monthly))


def _round_half_up(cents: Fraction) -> int:
    return math.floor(cents + Fraction(1, 2))


def monthly_equivalent(template: RecurringTemplate) -> Fraction:
    """Exact cents per month for one template."""
    return Fraction(template.amount.to_cents(), MONTHS_PER_INTERVAL[template.interval])


def commitment_lines(templates: Iterable[RecurringTemplate]) -> list[CommitmentLine]:
    """Templates with their monthly share, largest first (stable for ties)."""
    lines = [CommitmentLine(template=t, monthly=monthly_equivalent(t)) for t in templates]
    return sorted(lines, key=lambda line: line.monthly, reverse=True)


def monthly_commitment(templates: Iterable[RecurringTemplate]) -> Money:
    """
    Total fixed cost per month across templates.

    The monthly equivalents are summed exactly and rounded once (half up),
    so twelve $1.00 yearly bills add up to exactly $1.00 a month.
    """
    exact = sum((monthly_equivalent(t) for t in templates), Fraction(0))
    return Money.from_cents(_round_half_up(exact))


@dataclass(frozen=True)
class RecurringSummary:
    """A workspace's recurring bills and their combined monthly cost."""

    lines: list[CommitmentLine]
    monthly_total: Money


def summarize(templates: Iterable[RecurringTemplate]) -> RecurringSummary:
    templates = list(templates)
    return RecurringSummary(lines=commitment_lines(templates), monthly_total=monthly_commitment(templates))
