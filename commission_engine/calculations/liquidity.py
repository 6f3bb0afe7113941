"""Liquidity descriptor normalization."""

from __future__ import annotations

from enum import Enum


class LiquidityClass(str, Enum):
    """Investor payout cycle category."""

    MONTHLY = 'monthly'
    SEMIANNUAL = 'semiannual'
    ANNUAL = 'annual'
    BIENNIAL = 'biennial'
    TRIENNIAL = 'triennial'

    @property
    def cycle_months(self) -> int:
        return CYCLE_MONTHS[self]


CYCLE_MONTHS: dict[LiquidityClass, int] = {
    LiquidityClass.MONTHLY: 1,
    LiquidityClass.SEMIANNUAL: 6,
    LiquidityClass.ANNUAL: 12,
    LiquidityClass.BIENNIAL: 24,
    LiquidityClass.TRIENNIAL: 36,
}

# Checked in order; semiannual first so "semiannual" never lands on annual.
_KEYWORDS: tuple[tuple[LiquidityClass, tuple[str, ...]], ...] = (
    (LiquidityClass.SEMIANNUAL, ('semestral', 'semiannual')),
    (LiquidityClass.TRIENNIAL, ('trienal', 'triennial', '36')),
    (LiquidityClass.BIENNIAL, ('bienal', 'biennial', '24')),
    (LiquidityClass.ANNUAL, ('anual', 'annual', 'yearly', '12')),
)


def classify(raw: str | LiquidityClass | None) -> LiquidityClass:
    """Map a free-text liquidity descriptor onto a class.

    Unknown, empty and missing descriptors are monthly.
    """
    if isinstance(raw, LiquidityClass):
        return raw
    text = str(raw or '').strip().lower()
    if not text:
        return LiquidityClass.MONTHLY
    for liquidity_class, keywords in _KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return liquidity_class
    return LiquidityClass.MONTHLY


def cycle_months(raw: str | LiquidityClass | None) -> int:
    """Payout cycle length in months for a descriptor."""
    return classify(raw).cycle_months
