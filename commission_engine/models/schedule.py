"""Commission schedule result types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from commission_engine.calculations.liquidity import LiquidityClass


@dataclass(frozen=True)
class ResolvedRates:
    """Monthly percentages and payout cycle actually applied to an investment."""

    investor_pct: float
    advisor_pct: float
    office_pct: float
    liquidity_class: LiquidityClass
    cycle_months: int


@dataclass(frozen=True)
class ScheduleEntry:
    """One monthly cutoff with the amount owed to each party."""

    index: int
    cutoff_date: date
    due_date: date
    office_amount: float
    advisor_amount: float
    investor_amount: float
    is_pro_rata: bool
    investor_pro_rata: bool = False

    @property
    def total_amount(self) -> float:
        return self.office_amount + self.advisor_amount + self.investor_amount


@dataclass(frozen=True)
class CommissionSchedule:
    """Full commission schedule of one investment, ordered by due date."""

    investment_id: str
    principal: float
    start_date: date
    commitment_period_months: int
    liquidity_class: LiquidityClass
    rates: ResolvedRates
    entries: tuple[ScheduleEntry, ...]

    @property
    def office_total(self) -> float:
        return sum(e.office_amount for e in self.entries)

    @property
    def advisor_total(self) -> float:
        return sum(e.advisor_amount for e in self.entries)

    @property
    def investor_total(self) -> float:
        return sum(e.investor_amount for e in self.entries)

    @property
    def due_dates(self) -> list[date]:
        return [e.due_date for e in self.entries]

    def payable_entries(self) -> list[ScheduleEntry]:
        """Entries with a non-zero amount for at least one party."""
        return [e for e in self.entries if e.total_amount > 0]
