"""Tabular views of commission schedules for reporting and export layers."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

import numpy as np
import pandas as pd

from commission_engine.models.schedule import CommissionSchedule

AMOUNT_COLUMNS = ['office_amount', 'advisor_amount', 'investor_amount']

SCHEDULE_COLUMNS = [
    'investment_id',
    'index',
    'cutoff_date',
    'due_date',
    *AMOUNT_COLUMNS,
    'total_amount',
    'is_pro_rata',
    'investor_pro_rata',
]

PARTY_LABELS = {
    'office_amount': 'office',
    'advisor_amount': 'advisor',
    'investor_amount': 'investor',
}


def _empty_schedule_frame() -> pd.DataFrame:
    return pd.DataFrame(columns=SCHEDULE_COLUMNS)


def schedule_to_frame(schedule: CommissionSchedule, *, decimals: int = 2) -> pd.DataFrame:
    """One row per cutoff with amounts rounded for display."""
    rows = [
        {
            'investment_id': schedule.investment_id,
            'index': e.index,
            'cutoff_date': pd.Timestamp(e.cutoff_date),
            'due_date': pd.Timestamp(e.due_date),
            'office_amount': e.office_amount,
            'advisor_amount': e.advisor_amount,
            'investor_amount': e.investor_amount,
            'is_pro_rata': e.is_pro_rata,
            'investor_pro_rata': e.investor_pro_rata,
        }
        for e in schedule.entries
    ]
    if not rows:
        return _empty_schedule_frame()
    out = pd.DataFrame(rows)
    out['total_amount'] = out[AMOUNT_COLUMNS].sum(axis=1)
    out[AMOUNT_COLUMNS + ['total_amount']] = out[AMOUNT_COLUMNS + ['total_amount']].round(decimals)
    return out[SCHEDULE_COLUMNS]


def schedules_to_frame(schedules: Iterable[CommissionSchedule], *, decimals: int = 2) -> pd.DataFrame:
    """Stack several schedules, ordered by due date then investment."""
    frames = [schedule_to_frame(s, decimals=decimals) for s in schedules]
    frames = [f for f in frames if not f.empty]
    if not frames:
        return _empty_schedule_frame()
    out = pd.concat(frames, ignore_index=True)
    return out.sort_values(['due_date', 'investment_id', 'index']).reset_index(drop=True)


def totals_by_party(frame: pd.DataFrame) -> pd.DataFrame:
    """Total amount per party across the given schedule rows."""
    if frame.empty:
        return pd.DataFrame({'party': list(PARTY_LABELS.values()), 'amount': 0.0})
    totals = frame[AMOUNT_COLUMNS].astype(float).sum()
    out = totals.rename(index=PARTY_LABELS).rename_axis('party').reset_index(name='amount')
    return out


def totals_by_due_date(frame: pd.DataFrame) -> pd.DataFrame:
    """Amounts per party and in total for each due date."""
    if frame.empty:
        return pd.DataFrame(columns=['due_date', *AMOUNT_COLUMNS, 'total_amount', 'investment_count'])
    grouped = frame.groupby('due_date', sort=True)
    out = grouped[AMOUNT_COLUMNS + ['total_amount']].sum()
    out['investment_count'] = grouped['investment_id'].nunique()
    return out.reset_index()


def with_payment_status(frame: pd.DataFrame, today: pd.Timestamp | datetime | date | str) -> pd.DataFrame:
    """Tag rows as paid (due date passed), due (today) or upcoming.

    ``today`` is supplied by the caller; schedules themselves never depend on it.
    """
    out = frame.copy()
    if out.empty:
        out['status'] = pd.Series(dtype=str)
        return out
    t = pd.Timestamp(today).normalize()
    due = pd.to_datetime(out['due_date'])
    out['status'] = np.select([due < t, due == t], ['paid', 'due'], default='upcoming')
    return out
