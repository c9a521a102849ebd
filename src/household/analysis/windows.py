#!/usr/bin/env python3
"""
Time Window Resolver

Calendar-month windows in epoch milliseconds. Every monthly aggregation
buckets expenses with these windows, so the boundaries live in one place.

A month window runs from day 1 00:00:00.000 to the last millisecond of the
last day, both inclusive. The end is computed as one millisecond before the
first instant of the following month, so an expense stamped late on the
last day still belongs to its month and never to the next one.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

TREND_MONTHS = 6
SUMMARY_MONTHS = 3


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [start_ms, end_ms] range, optionally labelled ("Jan")."""

    start_ms: int
    end_ms: int
    label: str = ""

    def contains(self, epoch_ms: int) -> bool:
        """Check whether a timestamp falls inside the window (both ends inclusive)."""
        return self.start_ms <= epoch_ms <= self.end_ms

    def as_range(self) -> tuple[int, int]:
        """The window as a (start_ms, end_ms) tuple for store queries."""
        return (self.start_ms, self.end_ms)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(datetime.now(tz=timezone.utc).timestamp() * 1000)


class TimeWindowResolver:
    """
    Resolves calendar-month windows in a configured timezone.

    Month labels are short month names as rendered by `strftime("%b")`.
    """

    def __init__(self, tz: tzinfo | str | None = None):
        if tz is None:
            tz = timezone.utc
        elif isinstance(tz, str):
            tz = ZoneInfo(tz)
        self.tz = tz

    def _month_start_ms(self, year: int, month: int) -> int:
        # Normalize month overflow/underflow into the year
        year += (month - 1) // 12
        month = (month - 1) % 12 + 1
        start = datetime(year, month, 1, tzinfo=self.tz)
        return int(start.timestamp() * 1000)

    def _month_window(self, year: int, month: int) -> TimeWindow:
        year += (month - 1) // 12
        month = (month - 1) % 12 + 1
        start_ms = self._month_start_ms(year, month)
        end_ms = self._month_start_ms(year, month + 1) - 1
        label = datetime(year, month, 1).strftime("%b")
        return TimeWindow(start_ms=start_ms, end_ms=end_ms, label=label)

    def _local(self, epoch_ms: int) -> datetime:
        return datetime.fromtimestamp(epoch_ms / 1000, tz=self.tz)

    def month_window(
        self,
        reference_ms: int,
        explicit_start: int | None = None,
        explicit_end: int | None = None,
    ) -> TimeWindow:
        """
        Window for the calendar month containing `reference_ms`.

        Explicit bounds, when given, are used verbatim; a missing bound falls
        back to the calendar month's bound.

        Args:
            reference_ms: "Now" in epoch milliseconds
            explicit_start: Optional inclusive start override
            explicit_end: Optional inclusive end override

        Returns:
            TimeWindow labelled with the reference month's short name
        """
        local = self._local(reference_ms)
        month = self._month_window(local.year, local.month)
        return TimeWindow(
            start_ms=explicit_start if explicit_start is not None else month.start_ms,
            end_ms=explicit_end if explicit_end is not None else month.end_ms,
            label=month.label,
        )

    def recent_months(self, reference_ms: int, count: int = TREND_MONTHS) -> list[TimeWindow]:
        """
        `count` consecutive month windows, oldest first, ending at the month
        containing `reference_ms`. A non-positive count yields no windows.
        """
        local = self._local(reference_ms)
        return [self._month_window(local.year, local.month - offset) for offset in range(count - 1, -1, -1)]
