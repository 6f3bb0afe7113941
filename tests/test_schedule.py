from datetime import date

import pytest

from commission_engine.calculations.compounding import compound
from commission_engine.calculations.liquidity import LiquidityClass
from commission_engine.calculations.schedule import compute_schedule
from commission_engine.models.errors import (
    InvalidAdvisorRole,
    InvalidPrincipal,
    InvalidRateCombination,
    InvalidStartDate,
    UnsupportedPeriod,
)
from commission_engine.models.investment import InvestmentFact
from commission_engine.models.rates import DEFAULT_RATE_TABLE, SUPPORTED_PERIODS, RateTable


def _fact(**overrides) -> InvestmentFact:
    base = dict(
        investment_id='inv-1',
        principal=100000,
        start_date='2025-01-10',
        commitment_period_months=12,
        liquidity='mensal',
        advisor_role='internal',
        advisor_id='adv-1',
        office_id='office-1',
    )
    base.update(overrides)
    return InvestmentFact(**base)


def test_monthly_scenario_office_and_advisor_legs() -> None:
    schedule = compute_schedule(_fact())
    entries = schedule.entries

    assert len(entries) == 12
    assert entries[0].cutoff_date == date(2025, 1, 20)
    assert entries[-1].cutoff_date == date(2025, 12, 20)
    assert entries[0].is_pro_rata
    assert not any(e.is_pro_rata for e in entries[1:])

    assert round(entries[0].office_amount, 2) == 333.33
    assert round(entries[0].advisor_amount, 2) == 1000.00
    assert all(e.office_amount == pytest.approx(1000.0) for e in entries[1:])
    assert all(e.advisor_amount == pytest.approx(3000.0) for e in entries[1:])


def test_monthly_scenario_investor_waits_for_d60() -> None:
    entries = compute_schedule(_fact()).entries
    investor = [e.investor_amount for e in entries]

    # D+60 is 2025-03-11: nothing at the January and February cutoffs,
    # 9 days pro-rated at the March cutoff, full 2.1% afterwards.
    assert investor[0] == 0.0
    assert investor[1] == 0.0
    assert investor[2] == pytest.approx(2100.0 * 9 / 30)
    assert entries[2].investor_pro_rata
    assert all(v == pytest.approx(2100.0) for v in investor[3:])
    assert not any(e.investor_pro_rata for e in entries[3:])


def test_resolved_rates_are_reported() -> None:
    schedule = compute_schedule(_fact())
    assert schedule.rates.investor_pct == 2.1
    assert schedule.rates.advisor_pct == 3.0
    assert schedule.rates.office_pct == 1.0
    assert schedule.rates.liquidity_class == LiquidityClass.MONTHLY
    assert schedule.rates.cycle_months == 1


def test_due_dates_strictly_increase_and_follow_cutoffs() -> None:
    schedule = compute_schedule(_fact(commitment_period_months=36, liquidity='trienal'))
    dues = schedule.due_dates
    assert all(a < b for a, b in zip(dues, dues[1:]))
    assert dues[0] == date(2025, 2, 7)
    assert all(e.due_date > e.cutoff_date for e in schedule.entries)


def test_annual_liquidity_pays_compounded_lumps() -> None:
    fact = _fact(principal=50000, commitment_period_months=24, liquidity='anual', advisor_role='external')
    schedule = compute_schedule(fact)
    investor = [e.investor_amount for e in schedule.entries]

    lump = compound(50000, 2.7, 12)
    assert investor[11] == pytest.approx(lump)
    assert investor[23] == pytest.approx(lump)
    assert sum(1 for v in investor if v) == 2

    assert len(schedule.entries) == 24
    assert all(e.office_amount == pytest.approx(500.0) for e in schedule.entries[1:])
    assert all(e.advisor_amount == pytest.approx(1000.0) for e in schedule.entries[1:])


def test_biennial_on_three_years_pays_remainder_at_end() -> None:
    schedule = compute_schedule(_fact(commitment_period_months=36, liquidity='bienal'))
    investor = [e.investor_amount for e in schedule.entries]
    assert investor[23] == pytest.approx(compound(100000, 3.2, 24))
    assert investor[35] == pytest.approx(compound(100000, 3.2, 12))
    assert sum(1 for v in investor if v) == 2


def test_semiannual_pays_every_six_cutoffs() -> None:
    schedule = compute_schedule(_fact(liquidity='Semestral'))
    paying = [e.index for e in schedule.entries if e.investor_amount]
    assert paying == [5, 11]
    assert schedule.entries[5].investor_amount == pytest.approx(compound(100000, 2.2, 6))


@pytest.mark.parametrize('period', SUPPORTED_PERIODS)
@pytest.mark.parametrize('liquidity', list(LiquidityClass))
def test_every_pair_succeeds_or_fails_per_table(period: int, liquidity: LiquidityClass) -> None:
    fact = _fact(commitment_period_months=period, liquidity=liquidity.value)
    if (period, liquidity) in DEFAULT_RATE_TABLE.rates:
        schedule = compute_schedule(fact)
        assert len(schedule.entries) == period
    else:
        with pytest.raises(InvalidRateCombination):
            compute_schedule(fact)


def test_identical_facts_give_identical_schedules() -> None:
    first = compute_schedule(_fact(liquidity='anual'))
    second = compute_schedule(_fact(liquidity='anual'))
    assert first == second
    assert repr(first) == repr(second)


def test_first_entry_never_exceeds_full_period() -> None:
    for start in ['2025-01-01', '2025-01-19', '2025-01-20', '2025-01-31', '2025-02-20']:
        entries = compute_schedule(_fact(start_date=start)).entries
        assert entries[0].office_amount <= entries[1].office_amount
        assert entries[0].advisor_amount <= entries[1].advisor_amount


def test_start_on_cutoff_day_rolls_to_next_month() -> None:
    entries = compute_schedule(_fact(start_date='2025-01-20')).entries
    assert entries[0].cutoff_date == date(2025, 2, 20)
    assert entries[0].office_amount == pytest.approx(1000.0)
    assert not entries[0].is_pro_rata


def test_full_first_window_is_not_flagged_pro_rata() -> None:
    full = compute_schedule(_fact(start_date='2024-12-21')).entries
    assert full[0].office_amount == pytest.approx(1000.0)
    assert not any(e.is_pro_rata for e in full)

    partial = compute_schedule(_fact(start_date='2024-12-22')).entries
    assert partial[0].is_pro_rata


def test_no_advisor_keeps_office_leg() -> None:
    schedule = compute_schedule(_fact(advisor_role=None, advisor_id=None))
    assert schedule.advisor_total == 0.0
    assert schedule.entries[1].office_amount == pytest.approx(1000.0)
    assert schedule.rates.advisor_pct == 0.0


def test_no_office_and_no_advisor() -> None:
    schedule = compute_schedule(_fact(advisor_role=None, office_id=None))
    assert schedule.office_total == 0.0
    assert schedule.advisor_total == 0.0
    assert schedule.investor_total > 0.0


def test_has_office_flag_overrides_identity() -> None:
    schedule = compute_schedule(_fact(office_id=None, has_office=True))
    assert schedule.entries[1].office_amount == pytest.approx(1000.0)
    schedule = compute_schedule(_fact(office_id='office-1', has_office=False))
    assert schedule.office_total == 0.0


def test_flat_legs_average_back_to_nominal_rate() -> None:
    schedule = compute_schedule(_fact(start_date='2024-12-21'))
    office = [e.office_amount for e in schedule.entries]
    # Start on the 21st accrues a full 30-day first window.
    assert sum(office) / len(office) == pytest.approx(100000 * 0.01)


@pytest.mark.parametrize('principal', [0, -100, 'abc', None, float('nan'), True])
def test_invalid_principal(principal) -> None:
    with pytest.raises(InvalidPrincipal):
        compute_schedule(_fact(principal=principal))


@pytest.mark.parametrize('start', [None, 'not-a-date', 20250110])
def test_invalid_start_date(start) -> None:
    with pytest.raises(InvalidStartDate):
        compute_schedule(_fact(start_date=start))


@pytest.mark.parametrize('period', [0, 1, 18, 48, '12', 12.5])
def test_unsupported_period(period) -> None:
    with pytest.raises(UnsupportedPeriod):
        compute_schedule(_fact(commitment_period_months=period))


def test_invalid_advisor_role() -> None:
    with pytest.raises(InvalidAdvisorRole, match='partner'):
        compute_schedule(_fact(advisor_role='partner'))


def test_errors_carry_investment_id() -> None:
    with pytest.raises(InvalidPrincipal) as excinfo:
        compute_schedule(_fact(investment_id='inv-42', principal=-1))
    assert excinfo.value.investment_id == 'inv-42'
    assert 'inv-42' in str(excinfo.value)


def test_injected_rate_table_is_used() -> None:
    table = RateTable(rates={(12, LiquidityClass.MONTHLY): 1.0})
    schedule = compute_schedule(_fact(), rate_table=table)
    assert schedule.rates.investor_pct == 1.0
    assert schedule.entries[5].investor_amount == pytest.approx(1000.0)


def test_rate_combination_error_carries_investment_id() -> None:
    with pytest.raises(InvalidRateCombination) as excinfo:
        compute_schedule(_fact(investment_id='inv-7', commitment_period_months=3, liquidity='anual'))
    assert excinfo.value.investment_id == 'inv-7'
    assert excinfo.value.period == 3


def test_payable_entries_skip_zero_cutoffs() -> None:
    schedule = compute_schedule(_fact(advisor_role=None, office_id=None))
    payable = schedule.payable_entries()
    assert [e.index for e in payable] == list(range(2, 12))
    assert schedule.investor_total == pytest.approx(sum(e.investor_amount for e in payable))


class _MissingRates:
    supported_periods = SUPPORTED_PERIODS

    def __init__(self) -> None:
        self.error = InvalidRateCombination(12, 'monthly')

    def rate(self, period: int, liquidity: object) -> float:
        raise self.error


def test_rate_table_error_reaches_caller_as_the_same_object() -> None:
    table = _MissingRates()
    with pytest.raises(InvalidRateCombination) as excinfo:
        compute_schedule(_fact(investment_id='inv-8'), rate_table=table)
    assert excinfo.value is table.error
    assert excinfo.value.investment_id == 'inv-8'
