"""Calendar arithmetic for commission cutoffs and payment days.

Every function takes plain calendar dates. Nothing here reads the clock:
callers pass ``today`` explicitly.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pandas as pd

from commission_engine.utils.date_utils import to_date

CUTOFF_DAY = 20
INVESTOR_DELAY_DAYS = 60
PAYMENT_BUSINESS_DAY = 5

DateLike = pd.Timestamp | datetime | date | str

_REDEMPTION_LABELS = {3: '3 months', 6: '6 months', 12: '12 months', 24: '24 months', 36: '36 months'}


def add_months(value: DateLike, months: int) -> date:
    """Shift by calendar months, clamping to month end when the day does not exist."""
    return (pd.Timestamp(to_date(value)) + pd.DateOffset(months=int(months))).date()


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole days in [start, end); zero when end is not after start."""
    return max(0, (to_date(end) - to_date(start)).days)


def cutoff_date(reference_month: DateLike) -> date:
    """Cutoff closing the period before ``reference_month``: the 20th of the previous month."""
    ref = to_date(reference_month)
    return add_months(ref.replace(day=1), -1).replace(day=CUTOFF_DAY)


def first_cutoff(start: DateLike) -> date:
    """First cutoff an investment starting on ``start`` takes part in.

    Starts before the 20th close on the same month's 20th. Starts on or after
    the 20th were not live before that cutoff and roll to the next month.
    """
    d = to_date(start)
    if d.day < CUTOFF_DAY:
        return d.replace(day=CUTOFF_DAY)
    return add_months(d.replace(day=1), 1).replace(day=CUTOFF_DAY)


def nth_cutoff(start: DateLike, n: int) -> date:
    """The n-th (0-based) monthly cutoff after ``start``."""
    return add_months(first_cutoff(start), n)


def current_cutoff(today: DateLike) -> date:
    """Most recent cutoff on or before ``today``."""
    d = to_date(today)
    if d.day >= CUTOFF_DAY:
        return d.replace(day=CUTOFF_DAY)
    return cutoff_date(d)


def next_cutoff(today: DateLike) -> date:
    """Cutoff that closes the period ``today`` belongs to."""
    return first_cutoff(today)


def fifth_business_day(year: int, month: int) -> date:
    """Fifth Monday-to-Friday day of a month."""
    days = pd.bdate_range(start=pd.Timestamp(year=year, month=month, day=1), periods=PAYMENT_BUSINESS_DAY)
    return days[-1].date()


def is_fifth_business_day(value: DateLike) -> bool:
    d = to_date(value)
    return d == fifth_business_day(d.year, d.month)


def payment_date_for_cutoff(cutoff: DateLike) -> date:
    """Commissions closed at a cutoff are paid on the fifth business day of the next month."""
    following = add_months(to_date(cutoff).replace(day=1), 1)
    return fifth_business_day(following.year, following.month)


def next_payment_date(today: DateLike) -> date:
    """First payment day on or after ``today``, independent of any investment."""
    d = to_date(today)
    this_month = fifth_business_day(d.year, d.month)
    if this_month >= d:
        return this_month
    following = add_months(d.replace(day=1), 1)
    return fifth_business_day(following.year, following.month)


def investor_start_date(start: DateLike) -> date:
    """Date the investor leg starts accruing (D+60)."""
    return to_date(start) + timedelta(days=INVESTOR_DELAY_DAYS)


def has_reached_d60(start: DateLike, today: DateLike) -> bool:
    return to_date(today) >= investor_start_date(start)


def redemption_window(period_months: int) -> dict[str, int | str]:
    """Redemption window for a commitment period on the 30-day month convention.

    Periods outside the listed set snap up to the next listed one, and
    anything above 36 months uses the 36-month window.
    """
    listed = sorted(_REDEMPTION_LABELS)
    months = next((m for m in listed if int(period_months) <= m), listed[-1])
    return {'months': months, 'days': months * 30, 'label': _REDEMPTION_LABELS[months]}
