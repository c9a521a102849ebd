#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All monetary arithmetic in the household engine is done on integer cents.

Currency Systems:
- Internal calculations use cents: 100 cents = $1.00
- Stored records carry integer cents
- User input and display use dollar strings: "$12.34"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Parse user input through Decimal, never float
- Split amounts with exact rational weights and hand out leftover cents
  deterministically so every split sums exactly to its total
"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from fractions import Fraction
from typing import Union


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted dollar string with thousands separators

    Example:
        cents_to_dollars_str(123456) -> "1,234.56"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars:,}.{remainder:02d}"
    return f"{dollars:,}.{remainder:02d}"


def parse_dollars_to_cents(dollars_str: str) -> int:
    """
    Parse dollar string to cents.

    Fractional cents beyond two places are rounded half-up.

    Args:
        dollars_str: String representation of dollar amount

    Returns:
        Amount in cents

    Raises:
        ValueError: If the string is not a number

    Examples:
        parse_dollars_to_cents("12.34") -> 1234
        parse_dollars_to_cents("$1,234.56") -> 123456
        parse_dollars_to_cents("12.5") -> 1250
    """
    clean = dollars_str.replace("$", "").replace(",", "").strip()
    if not clean:
        return 0

    try:
        amount = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Invalid dollar amount: {dollars_str!r}") from e

    return decimal_to_cents(amount)


def decimal_to_cents(amount: Decimal) -> int:
    """Convert a Decimal dollar amount to cents, rounding half-up."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def safe_currency_to_cents(value: Union[str, int, float, Decimal, None]) -> int:
    """
    Convert a loosely-typed dollar value to integer cents.

    Floats are routed through their string form so that 0.1 becomes 10 cents
    rather than 9. Unparseable input yields 0.

    Examples:
        safe_currency_to_cents('$45.99') -> 4599
        safe_currency_to_cents(19.99) -> 1999
        safe_currency_to_cents('FREE') -> 0
    """
    if value is None:
        return 0
    try:
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value * 100
        if isinstance(value, float):
            return decimal_to_cents(Decimal(str(value)))
        if isinstance(value, Decimal):
            return decimal_to_cents(value)

        clean_str = str(value).replace("$", "").replace(",", "").strip()
        if not clean_str or clean_str.lower() in ["nan", "none", "free"]:
            return 0
        return decimal_to_cents(Decimal(clean_str))
    except (ValueError, TypeError, OverflowError, InvalidOperation):
        return 0


def allocate_proportional(total: int, weights: Sequence[Fraction]) -> list[int]:
    """
    Split an integer total across weights so the parts sum exactly to total.

    Each part gets the floor of its exact proportional amount. Leftover cents
    go one at a time to the parts with the largest fractional remainder; ties
    go to the earlier part.

    Args:
        total: Amount in cents to distribute (may be negative)
        weights: Non-negative weights; they are normalized by their sum

    Returns:
        List of integer parts, same length as weights. All zeros when the
        weights sum to zero.

    Example:
        allocate_proportional(100, [Fraction(1, 3)] * 3) -> [34, 33, 33]
    """
    weight_sum = sum(weights, Fraction(0))
    if not weights or weight_sum == 0:
        return [0] * len(weights)

    sign = -1 if total < 0 else 1
    magnitude = abs(total)

    exact = [magnitude * w / weight_sum for w in weights]
    parts = [int(e.numerator // e.denominator) for e in exact]
    leftover = magnitude - sum(parts)

    order = sorted(range(len(weights)), key=lambda i: exact[i] - parts[i], reverse=True)
    for i in order[:leftover]:
        parts[i] += 1

    return [sign * p for p in parts]


def validate_sum_equals_total(amounts: Sequence[int], total: int, tolerance: int = 0) -> bool:
    """
    Check that split amounts sum to the expected total.

    Args:
        amounts: Split amounts in cents
        total: Expected total in cents
        tolerance: Allowed difference in cents (default: exact match)

    Returns:
        True if sum matches within tolerance
    """
    return abs(sum(amounts) - total) <= tolerance


def format_cents(cents: int) -> str:
    """Format cents as dollar string with $ prefix ("-$12.34" for negatives)."""
    if cents < 0:
        return f"-${cents_to_dollars_str(-cents)}"
    return f"${cents_to_dollars_str(cents)}"
