"""Allocation of one monthly cutoff across office, advisor and investor legs."""

from __future__ import annotations

from typing import NamedTuple

from commission_engine.calculations.calendar import DateLike
from commission_engine.calculations.pro_rata import monthly_amount, pro_rata
from commission_engine.models.investment import AdvisorRole
from commission_engine.models.rates import DEFAULT_PARTY_RATES, PartyRates


class LegAmounts(NamedTuple):
    office: float
    advisor: float
    investor: float


def advisor_rate_pct(advisor_role: AdvisorRole | None, party_rates: PartyRates = DEFAULT_PARTY_RATES) -> float:
    """Monthly advisor percentage; zero when the investment has no advisor."""
    if advisor_role is None:
        return 0.0
    if advisor_role == AdvisorRole.INTERNAL:
        return party_rates.advisor_internal_pct
    return party_rates.advisor_external_pct


def office_rate_pct(has_office: bool, party_rates: PartyRates = DEFAULT_PARTY_RATES) -> float:
    return party_rates.office_pct if has_office else 0.0


def _leg(principal: float, rate_pct: float, accrual_start: DateLike | None, cutoff: DateLike | None) -> float:
    if rate_pct == 0.0:
        return 0.0
    if accrual_start is None or cutoff is None:
        return monthly_amount(principal, rate_pct)
    return pro_rata(principal, rate_pct, accrual_start, cutoff)


def split(
    principal: float,
    investor_amount: float,
    *,
    advisor_role: AdvisorRole | None,
    has_office: bool,
    accrual_start: DateLike | None = None,
    cutoff: DateLike | None = None,
    party_rates: PartyRates = DEFAULT_PARTY_RATES,
) -> LegAmounts:
    """Amounts owed to each party for one cutoff.

    Office and advisor legs are flat percentages of principal, pro-rated over
    [accrual_start, cutoff) when a window is given. Absent legs are zero; the
    office leg never depends on the advisor. The investor amount is computed
    by the caller and passed through unchanged.
    """
    office = _leg(principal, office_rate_pct(has_office, party_rates), accrual_start, cutoff)
    advisor = _leg(principal, advisor_rate_pct(advisor_role, party_rates), accrual_start, cutoff)
    return LegAmounts(office=office, advisor=advisor, investor=float(investor_amount))
