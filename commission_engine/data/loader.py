"""Excel loader and investment record normalization."""

from __future__ import annotations

import pandas as pd

from commission_engine.data.validator import parse_flag, validate_investments
from commission_engine.models.investment import InvestmentFact
from commission_engine.utils.logging import get_logger

LOGGER = get_logger(__name__)

INVESTMENTS_SHEET = 'Investments'

INVESTMENT_COLUMN_MAP = {
    'id': 'investment_id',
    'amount': 'principal',
    'payment_date': 'start_date',
    'commitment_period': 'commitment_period_months',
    'profitability_liquidity': 'liquidity',
}

_OPTIONAL_TEXT_COLUMNS = ['liquidity', 'advisor_role', 'advisor_id', 'office_id']


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out.columns = [str(c).strip().lower() for c in out.columns]
    return out


def _clean_text(series: pd.Series) -> pd.Series:
    out = series.astype(object).where(series.notna(), None)
    out = out.map(lambda v: None if v is None else str(v).strip())
    return out.map(lambda v: None if v in ('', 'nan', 'None') else v)


def normalize_investments(raw: pd.DataFrame) -> pd.DataFrame:
    """Normalize an investment record table to the engine's column names and dtypes."""
    df = _normalize_columns(raw).rename(columns=INVESTMENT_COLUMN_MAP)
    for col in _OPTIONAL_TEXT_COLUMNS:
        if col not in df.columns:
            df[col] = None
    if 'has_office' not in df.columns:
        df['has_office'] = None

    if 'investment_id' in df.columns:
        df['investment_id'] = df['investment_id'].astype(str).str.strip()
    if 'start_date' in df.columns:
        df['start_date'] = pd.to_datetime(df['start_date'], errors='coerce')
    if 'principal' in df.columns:
        df['principal'] = pd.to_numeric(df['principal'], errors='coerce')
    if 'commitment_period_months' in df.columns:
        df['commitment_period_months'] = pd.to_numeric(df['commitment_period_months'], errors='coerce')
    for col in _OPTIONAL_TEXT_COLUMNS:
        df[col] = _clean_text(df[col])
    return df


def _period(value: object) -> object:
    if pd.isna(value) or not float(value).is_integer():
        return value
    return int(value)


def facts_from_frame(df: pd.DataFrame) -> list[InvestmentFact]:
    """Build facts from a normalized table.

    Missing values are passed through as-is so that the engine reports the
    matching error kind for each bad row.
    """
    facts: list[InvestmentFact] = []
    for row in df.to_dict(orient='records'):
        start = row['start_date']
        facts.append(
            InvestmentFact(
                investment_id=str(row['investment_id']),
                principal=row['principal'],
                start_date=None if pd.isna(start) else start,
                commitment_period_months=_period(row['commitment_period_months']),
                liquidity=row.get('liquidity'),
                advisor_role=row.get('advisor_role'),
                advisor_id=row.get('advisor_id'),
                office_id=row.get('office_id'),
                has_office=parse_flag(row.get('has_office')),
            )
        )
    return facts


def load_investment_workbook(path: str, sheet_name: str = INVESTMENTS_SHEET) -> list[InvestmentFact]:
    """Load, normalize, and validate investment records from a workbook."""
    raw = pd.read_excel(path, sheet_name=sheet_name)
    df = normalize_investments(raw)

    for warning in validate_investments(df):
        LOGGER.warning(warning)

    return facts_from_frame(df)
