"""Rate tables for investor, advisor and office commission legs."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import pandas as pd

from commission_engine.calculations.liquidity import CYCLE_MONTHS, LiquidityClass, classify
from commission_engine.models.errors import InvalidRateCombination, UnsupportedPeriod

SUPPORTED_PERIODS: tuple[int, ...] = (3, 6, 12, 24, 36)

RATE_COLUMNS = ['period_months', 'liquidity', 'rate_pct']

_DEFAULT_INVESTOR_RATES: dict[tuple[int, LiquidityClass], float] = {
    (3, LiquidityClass.MONTHLY): 1.8,
    (6, LiquidityClass.MONTHLY): 1.9,
    (6, LiquidityClass.SEMIANNUAL): 2.0,
    (12, LiquidityClass.MONTHLY): 2.1,
    (12, LiquidityClass.SEMIANNUAL): 2.2,
    (12, LiquidityClass.ANNUAL): 2.5,
    (24, LiquidityClass.MONTHLY): 2.3,
    (24, LiquidityClass.SEMIANNUAL): 2.5,
    (24, LiquidityClass.ANNUAL): 2.7,
    (24, LiquidityClass.BIENNIAL): 3.0,
    (36, LiquidityClass.MONTHLY): 2.4,
    (36, LiquidityClass.SEMIANNUAL): 2.6,
    (36, LiquidityClass.ANNUAL): 3.0,
    (36, LiquidityClass.BIENNIAL): 3.2,
    (36, LiquidityClass.TRIENNIAL): 3.5,
}


def check_period(period: object, supported: tuple[int, ...] = SUPPORTED_PERIODS) -> int:
    """Return the period as int or raise UnsupportedPeriod."""
    if isinstance(period, bool):
        raise UnsupportedPeriod(period, supported)
    try:
        months = int(period)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise UnsupportedPeriod(period, supported) from None
    if months != period or months not in supported:
        raise UnsupportedPeriod(period, supported)
    return months


@dataclass(frozen=True)
class RateTable:
    """Investor monthly rate percent keyed by (commitment period, liquidity class)."""

    rates: Mapping[tuple[int, LiquidityClass], float]
    supported_periods: tuple[int, ...] = field(default=SUPPORTED_PERIODS)

    def __post_init__(self) -> None:
        frozen = {(int(p), classify(c)): float(r) for (p, c), r in dict(self.rates).items()}
        object.__setattr__(self, 'rates', MappingProxyType(frozen))

    def rate(self, period: int, liquidity: LiquidityClass | str) -> float:
        months = check_period(period, self.supported_periods)
        liquidity_class = classify(liquidity)
        try:
            return self.rates[(months, liquidity_class)]
        except KeyError:
            raise InvalidRateCombination(months, liquidity_class.value) from None

    def periods(self) -> list[int]:
        return list(self.supported_periods)

    def available_liquidity(self, period: int) -> list[LiquidityClass]:
        """Liquidity classes with a defined rate for a period, shortest cycle first."""
        months = check_period(period, self.supported_periods)
        found = [c for (p, c) in self.rates if p == months]
        return sorted(found, key=lambda c: CYCLE_MONTHS[c])

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {'period_months': p, 'liquidity': c.value, 'rate_pct': r}
            for (p, c), r in self.rates.items()
        ]
        out = pd.DataFrame(rows, columns=RATE_COLUMNS)
        out['cycle'] = out['liquidity'].map(lambda v: CYCLE_MONTHS[LiquidityClass(v)])
        out = out.sort_values(['period_months', 'cycle']).drop(columns=['cycle'])
        return out.reset_index(drop=True)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, supported_periods: tuple[int, ...] = SUPPORTED_PERIODS) -> RateTable:
        """Build a table from (period_months, liquidity, rate_pct) rows."""
        work = df.copy()
        work.columns = [str(c).strip().lower() for c in work.columns]
        missing = [col for col in RATE_COLUMNS if col not in work.columns]
        if missing:
            raise ValueError(f'Missing required rate columns: {missing}')
        work['period_months'] = pd.to_numeric(work['period_months'])
        work['rate_pct'] = pd.to_numeric(work['rate_pct'])
        if work[RATE_COLUMNS].isna().any().any():
            raise ValueError('Rate table contains nulls in required columns.')
        rates: dict[tuple[int, LiquidityClass], float] = {}
        for row in work.itertuples(index=False):
            liquidity_class = LiquidityClass(str(row.liquidity).strip().lower())
            key = (check_period(row.period_months, supported_periods), liquidity_class)
            if key in rates:
                raise ValueError(f'Duplicate rate for period {key[0]} and {key[1].value} liquidity.')
            if float(row.rate_pct) < 0:
                raise ValueError(f'Negative rate for period {key[0]} and {key[1].value} liquidity.')
            rates[key] = float(row.rate_pct)
        return cls(rates=rates, supported_periods=tuple(supported_periods))


@dataclass(frozen=True)
class PartyRates:
    """Flat monthly percentages for the advisor and office legs."""

    advisor_internal_pct: float = 3.0
    advisor_external_pct: float = 2.0
    office_pct: float = 1.0


DEFAULT_RATE_TABLE = RateTable(rates=_DEFAULT_INVESTOR_RATES)
DEFAULT_PARTY_RATES = PartyRates()
