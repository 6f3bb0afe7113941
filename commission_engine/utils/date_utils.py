"""Date helpers shared across calculations and data layers."""

from __future__ import annotations

from datetime import date, datetime

import pandas as pd


def to_timestamp(value: pd.Timestamp | datetime | date | str) -> pd.Timestamp:
    """Convert an input value to a timezone-naive, midnight-normalized Timestamp.

    Aware inputs keep their own wall-clock date; no timezone conversion happens.
    """
    ts = pd.Timestamp(value)
    if ts is pd.NaT:
        raise ValueError(f'Not a calendar date: {value!r}')
    if ts.tz is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()


def to_date(value: pd.Timestamp | datetime | date | str) -> date:
    """Convert an input value to a plain calendar date."""
    return to_timestamp(value).date()
