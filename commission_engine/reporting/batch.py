"""Batch schedule computation for reporting callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from commission_engine.calculations.schedule import compute_schedule
from commission_engine.models.errors import CommissionError
from commission_engine.models.investment import InvestmentFact
from commission_engine.models.rates import DEFAULT_PARTY_RATES, DEFAULT_RATE_TABLE, PartyRates, RateTable
from commission_engine.models.schedule import CommissionSchedule
from commission_engine.utils.logging import get_logger

LOGGER = get_logger(__name__)

USER_FACING_FAILURE = 'Could not calculate commission for this investment.'


@dataclass
class BatchResult:
    """Schedules that were built and the investments that were skipped."""

    schedules: list[CommissionSchedule] = field(default_factory=list)
    failures: dict[str, CommissionError] = field(default_factory=dict)

    @property
    def skipped_ids(self) -> list[str]:
        return list(self.failures)


def compute_schedules(
    facts: Iterable[InvestmentFact],
    *,
    rate_table: RateTable = DEFAULT_RATE_TABLE,
    party_rates: PartyRates = DEFAULT_PARTY_RATES,
) -> BatchResult:
    """Compute schedules for many investments, skipping the ones that fail.

    A failing investment never aborts the batch; its error is logged and
    kept in ``failures`` keyed by investment id.
    """
    result = BatchResult()
    for fact in facts:
        try:
            schedule = compute_schedule(fact, rate_table=rate_table, party_rates=party_rates)
        except CommissionError as exc:
            LOGGER.warning('Skipping investment %s: %s', fact.investment_id, exc)
            result.failures[str(fact.investment_id)] = exc
            continue
        result.schedules.append(schedule)
    if result.failures:
        LOGGER.info(
            'Computed %s schedules, skipped %s investments.',
            len(result.schedules),
            len(result.failures),
        )
    return result
