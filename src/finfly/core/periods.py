"""Period selectors to inclusive date bounds.

Bounds are computed from an injectable ``today`` so results are
deterministic:

- month: first to last calendar day of today's month
- year: January 1st to December 31st of today's year
- last3: three calendar months before today, open-ended
- custom: the literal start/end given by the caller
- all: unbounded
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

SUMMARY_PERIODS = ("month", "year", "custom", "all")
EXPORT_RANGES = ("all", "month", "year", "last3", "custom")


class PeriodError(ValueError):
    """Raised for unknown selectors or inconsistent custom bounds."""


@dataclass(frozen=True)
class DateRange:
    """Inclusive date bounds; None means unbounded on that side."""

    start: date | None = None
    end: date | None = None

    @property
    def bounded(self) -> bool:
        return self.start is not None or self.end is not None


def month_bounds(today: date) -> DateRange:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return DateRange(
        start=today.replace(day=1),
        end=today.replace(day=last_day),
    )


def year_bounds(today: date) -> DateRange:
    return DateRange(start=date(today.year, 1, 1), end=date(today.year, 12, 31))


def months_before(today: date, months: int) -> date:
    """Same day `months` calendar months earlier, clamped to month length."""
    month_index = today.year * 12 + (today.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def resolve_period(
    period: str,
    start: date | None = None,
    end: date | None = None,
    *,
    today: date | None = None,
    allowed: tuple[str, ...] = EXPORT_RANGES,
) -> DateRange:
    """Resolve a period selector into inclusive bounds.

    Args:
        period: Selector name.
        start: Custom start (only used for "custom").
        end: Custom end (only used for "custom").
        today: Reference date; defaults to date.today().
        allowed: Selectors accepted by the caller.

    Returns:
        DateRange for the selector.

    Raises:
        PeriodError: If the selector is not allowed or custom bounds are
            missing or reversed.
    """
    if period not in allowed:
        raise PeriodError(
            f"Invalid period '{period}'. Valid periods: {', '.join(allowed)}"
        )

    today = today or date.today()

    if period == "month":
        return month_bounds(today)
    if period == "year":
        return year_bounds(today)
    if period == "last3":
        return DateRange(start=months_before(today, 3))
    if period == "custom":
        if start is None or end is None:
            raise PeriodError("Custom period requires startDate and endDate")
        if start > end:
            raise PeriodError("startDate must not be after endDate")
        return DateRange(start=start, end=end)
    return DateRange()
