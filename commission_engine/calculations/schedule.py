"""Commission schedule builder.

Builds one entry per monthly cutoff over the commitment period:

- office and advisor legs accrue from the start date, pro-rated up to the
  first cutoff and flat afterwards;
- the investor leg only accrues from D+60. Monthly liquidity pays every
  cutoff (pro-rated on the first one after D+60). Longer liquidity cycles
  pay the compounded profit of the cycle at its closing cutoff.
"""

from __future__ import annotations

from datetime import date

from commission_engine.calculations.calendar import (
    investor_start_date,
    nth_cutoff,
    payment_date_for_cutoff,
)
from commission_engine.calculations.compounding import compound, payout_cycles
from commission_engine.calculations.liquidity import LiquidityClass, classify
from commission_engine.calculations.pro_rata import DAYS_PER_MONTH, monthly_amount, pro_rata, pro_rata_days
from commission_engine.calculations.splitter import advisor_rate_pct, office_rate_pct, split
from commission_engine.data.validator import validate_fact
from commission_engine.models.errors import InvalidRateCombination
from commission_engine.models.investment import InvestmentFact
from commission_engine.models.rates import DEFAULT_PARTY_RATES, DEFAULT_RATE_TABLE, PartyRates, RateTable
from commission_engine.models.schedule import CommissionSchedule, ResolvedRates, ScheduleEntry


def _investor_amount(
    *,
    k: int,
    principal: float,
    rate_pct: float,
    liquidity_class: LiquidityClass,
    d60: date,
    previous_cutoff: date,
    cutoff: date,
    payouts: dict[int, int],
) -> tuple[float, bool]:
    """Investor amount at cutoff ``k`` and whether it is the partial first payment."""
    if d60 >= cutoff:
        return 0.0, False
    if liquidity_class != LiquidityClass.MONTHLY:
        months = payouts.get(k)
        if months is None:
            return 0.0, False
        return compound(principal, rate_pct, months), False
    if k > 0 and d60 <= previous_cutoff:
        return monthly_amount(principal, rate_pct), False
    return pro_rata(principal, rate_pct, d60, cutoff), True


def compute_schedule(
    fact: InvestmentFact,
    *,
    rate_table: RateTable = DEFAULT_RATE_TABLE,
    party_rates: PartyRates = DEFAULT_PARTY_RATES,
) -> CommissionSchedule:
    """Compute the full commission schedule of one investment.

    Raises a :class:`~commission_engine.models.errors.CommissionError`
    subclass before computing anything when an input is invalid. Rate table
    errors are re-raised as the same object with the investment id attached.
    """
    valid = validate_fact(fact, rate_table.supported_periods)
    liquidity_class = classify(fact.liquidity)
    try:
        investor_pct = rate_table.rate(valid.commitment_period_months, liquidity_class)
    except InvalidRateCombination as exc:
        exc.investment_id = valid.investment_id
        raise

    rates = ResolvedRates(
        investor_pct=investor_pct,
        advisor_pct=advisor_rate_pct(valid.advisor_role, party_rates),
        office_pct=office_rate_pct(valid.has_office, party_rates),
        liquidity_class=liquidity_class,
        cycle_months=liquidity_class.cycle_months,
    )

    d60 = investor_start_date(valid.start_date)
    payouts = dict(payout_cycles(valid.commitment_period_months, rates.cycle_months))
    first_partial = pro_rata_days(valid.start_date, nth_cutoff(valid.start_date, 0)) < DAYS_PER_MONTH

    entries: list[ScheduleEntry] = []
    previous_cutoff = valid.start_date
    for k in range(valid.commitment_period_months):
        cutoff = nth_cutoff(valid.start_date, k)
        investor, investor_partial = _investor_amount(
            k=k,
            principal=valid.principal,
            rate_pct=investor_pct,
            liquidity_class=liquidity_class,
            d60=d60,
            previous_cutoff=previous_cutoff,
            cutoff=cutoff,
            payouts=payouts,
        )
        legs = split(
            valid.principal,
            investor,
            advisor_role=valid.advisor_role,
            has_office=valid.has_office,
            accrual_start=valid.start_date if k == 0 else None,
            cutoff=cutoff if k == 0 else None,
            party_rates=party_rates,
        )
        entries.append(
            ScheduleEntry(
                index=k,
                cutoff_date=cutoff,
                due_date=payment_date_for_cutoff(cutoff),
                office_amount=legs.office,
                advisor_amount=legs.advisor,
                investor_amount=legs.investor,
                is_pro_rata=k == 0 and first_partial,
                investor_pro_rata=investor_partial,
            )
        )
        previous_cutoff = cutoff

    return CommissionSchedule(
        investment_id=valid.investment_id,
        principal=valid.principal,
        start_date=valid.start_date,
        commitment_period_months=valid.commitment_period_months,
        liquidity_class=liquidity_class,
        rates=rates,
        entries=tuple(entries),
    )
