"""Validation for investment facts and tabular investment records."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import date

import numpy as np
import pandas as pd

from commission_engine.models.errors import InvalidPrincipal, InvalidStartDate, UnsupportedPeriod
from commission_engine.models.investment import AdvisorRole, InvestmentFact
from commission_engine.models.rates import SUPPORTED_PERIODS, check_period
from commission_engine.utils.date_utils import to_date

_TRUE_TEXT = {'true', 'yes', 'y', '1', 'sim', 's'}
_FALSE_TEXT = {'false', 'no', 'n', '0', 'nao', 'não'}

INVESTMENT_REQUIRED_COLUMNS = [
    'investment_id',
    'principal',
    'start_date',
    'commitment_period_months',
]


@dataclass(frozen=True)
class ValidatedFact:
    """Normalized inputs of an investment fact that passed validation."""

    investment_id: str
    principal: float
    start_date: date
    commitment_period_months: int
    advisor_role: AdvisorRole | None
    has_office: bool


def parse_flag(value: object) -> bool | None:
    """Read a yes/no cell. Blank or unrecognised values give ``None``."""
    if value is None:
        return None
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, numbers.Number):
        if pd.isna(value) or value not in (0, 1):
            return None
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_TEXT:
        return True
    if text in _FALSE_TEXT:
        return False
    return None


def _principal(value: object, investment_id: str) -> float:
    if isinstance(value, (bool, str)) or not isinstance(value, numbers.Number) or isinstance(value, complex):
        raise InvalidPrincipal(value, investment_id)
    amount = float(value)  # type: ignore[arg-type]
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidPrincipal(value, investment_id)
    return amount


def _start_date(value: object, investment_id: str) -> date:
    if value is None or isinstance(value, (bool, numbers.Number)):
        raise InvalidStartDate(value, investment_id)
    try:
        return to_date(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        raise InvalidStartDate(value, investment_id) from None


def validate_fact(fact: InvestmentFact, supported_periods: tuple[int, ...] = SUPPORTED_PERIODS) -> ValidatedFact:
    """Check every input of a fact up front, raising the first error kind found."""
    investment_id = str(fact.investment_id)
    principal = _principal(fact.principal, investment_id)
    start = _start_date(fact.start_date, investment_id)
    try:
        period = check_period(fact.commitment_period_months, supported_periods)
    except UnsupportedPeriod:
        raise UnsupportedPeriod(fact.commitment_period_months, supported_periods, investment_id) from None
    role = AdvisorRole.parse(fact.advisor_role, investment_id)
    return ValidatedFact(
        investment_id=investment_id,
        principal=principal,
        start_date=start,
        commitment_period_months=period,
        advisor_role=role,
        has_office=fact.office_present,
    )


def _missing_columns(df: pd.DataFrame, required: list[str]) -> list[str]:
    cols = set(df.columns)
    return [col for col in required if col not in cols]


def validate_investments(df: pd.DataFrame) -> list[str]:
    """Validate normalized investment records and return non-fatal warnings.

    Row-level problems are warnings only: the batch layer skips those
    investments individually when it computes schedules.
    """
    missing = _missing_columns(df, INVESTMENT_REQUIRED_COLUMNS)
    if missing:
        raise ValueError(f'Missing required investment columns: {missing}')

    if df['investment_id'].duplicated().any():
        raise ValueError('Duplicate investment_id values found.')

    warnings: list[str] = []

    missing_dates = int(df['start_date'].isna().sum())
    if missing_dates:
        warnings.append(f'{missing_dates} investments have no start_date.')

    principal = pd.to_numeric(df['principal'], errors='coerce')
    non_positive = int((principal.isna() | (principal <= 0)).sum())
    if non_positive:
        warnings.append(f'{non_positive} investments have a missing or non-positive principal.')

    period = pd.to_numeric(df['commitment_period_months'], errors='coerce')
    unsupported = int((~period.isin(list(SUPPORTED_PERIODS))).sum())
    if unsupported:
        warnings.append(
            f'{unsupported} investments have a commitment period outside {list(SUPPORTED_PERIODS)}.'
        )

    if 'advisor_role' in df.columns:
        roles = df['advisor_role'].dropna().astype(str).str.strip().str.lower()
        unknown = int((~roles.isin(['', 'internal', 'external'])).sum())
        if unknown:
            warnings.append(f'{unknown} investments have an unknown advisor_role.')

    if 'has_office' in df.columns:
        flags = df['has_office'].dropna()
        flags = flags[flags.astype(str).str.strip() != '']
        unreadable = int(sum(parse_flag(v) is None for v in flags))
        if unreadable:
            warnings.append(f'{unreadable} investments have an unreadable has_office flag; office_id decides.')

    return warnings
