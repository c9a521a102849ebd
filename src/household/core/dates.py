#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable calendar date wrapper used at the edges of the system, where
expense timestamps (epoch milliseconds) meet human-entered dates.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo


@dataclass(frozen=True, order=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting and ordering."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, date_format).date())

    @classmethod
    def from_epoch_ms(cls, epoch_ms: int, tz: tzinfo = timezone.utc) -> "FinancialDate":
        """
        Create from an epoch-millisecond timestamp as seen in a timezone.

        Args:
            epoch_ms: Milliseconds since the Unix epoch
            tz: Timezone used to pick the calendar day (default: UTC)

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.fromtimestamp(epoch_ms / 1000, tz=tz).date())

    @classmethod
    def today(cls, tz: tzinfo = timezone.utc) -> "FinancialDate":
        """Get today's date in the given timezone."""
        return cls(date=datetime.now(tz=tz).date())

    def to_epoch_ms(self, tz: tzinfo = timezone.utc) -> int:
        """Midnight at the start of this date in the given timezone, in epoch ms."""
        start = datetime.combine(self.date, time.min, tzinfo=tz)
        return int(start.timestamp() * 1000)

    def next_day(self) -> "FinancialDate":
        return FinancialDate(date=self.date + timedelta(days=1))

    def to_end_epoch_ms(self, tz: tzinfo = timezone.utc) -> int:
        """
        Last millisecond of this date in the given timezone.

        One millisecond before the next local midnight, so 23- and 25-hour
        DST days are covered exactly.
        """
        return self.next_day().to_epoch_ms(tz) - 1

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_iso_string()
