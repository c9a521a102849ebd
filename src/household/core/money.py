#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point drift in ledgers and totals.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    format_cents,
    parse_dollars_to_cents,
    safe_currency_to_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Expense amounts are non-negative; settlement balances and "remaining"
    figures may be negative.

    Examples:
        >>> groceries = Money.from_dollars("$120.50")
        >>> str(groceries)
        '$120.50'

        >>> balance = Money.from_cents(-5000)
        >>> str(balance)
        '-$50.00'

        >>> (groceries + balance).to_cents()
        7050
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=int(cents))

    @classmethod
    def zero(cls) -> "Money":
        """Create a zero amount."""
        return cls(cents=0)

    @classmethod
    def from_dollars(cls, dollars: str | int | float | Decimal) -> "Money":
        """
        Parse from a dollar string like '$123.45' or a numeric dollar amount.

        Args:
            dollars: String like "$12.34", integer dollars, or a decimal value

        Returns:
            Money object

        Raises:
            ValueError: If a string value is not a number
        """
        if isinstance(dollars, str):
            return cls(cents=parse_dollars_to_cents(dollars))
        return cls(cents=safe_currency_to_cents(dollars))

    @classmethod
    def total(cls, amounts: Iterable["Money"]) -> "Money":
        """Sum an iterable of Money values (zero when empty)."""
        return cls(cents=sum(amount.cents for amount in amounts))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value in dollars as an exact Decimal."""
        return Decimal(self.cents) / 100

    def to_dollars(self) -> str:
        """Get formatted dollar string."""
        return str(self)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def is_zero(self) -> bool:
        """Check whether the amount is exactly zero."""
        return self.cents == 0

    def __add__(self, other: "Money") -> "Money":
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        return Money(cents=self.cents - other.cents)

    def __neg__(self) -> "Money":
        return Money(cents=-self.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents == other.cents

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        return format_cents(self.cents)

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"
