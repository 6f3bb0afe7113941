"""Partial-period commission for the first window of each leg."""

from __future__ import annotations

from commission_engine.calculations.calendar import DateLike, days_between

# Commercial convention: every month counts as 30 days, whatever its length.
DAYS_PER_MONTH = 30


def monthly_amount(principal: float, rate_pct: float) -> float:
    """Full-period commission at a monthly percentage."""
    return float(principal) * float(rate_pct) / 100.0


def pro_rata_days(start: DateLike, cutoff: DateLike) -> int:
    """Days accrued in [start, cutoff), capped at one 30-day month."""
    return min(days_between(start, cutoff), DAYS_PER_MONTH)


def pro_rata(principal: float, rate_pct: float, start: DateLike, cutoff: DateLike) -> float:
    """Commission accrued from ``start`` to ``cutoff`` on the 30-day month convention.

    Zero when ``start`` is on or after ``cutoff``; never more than a full month.
    """
    days = pro_rata_days(start, cutoff)
    if days == 0:
        return 0.0
    return monthly_amount(principal, rate_pct) * days / DAYS_PER_MONTH
