"""Investment fact record consumed by the schedule builder."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

import pandas as pd

from commission_engine.models.errors import InvalidAdvisorRole


class AdvisorRole(str, Enum):
    INTERNAL = 'internal'
    EXTERNAL = 'external'

    @classmethod
    def parse(cls, value: AdvisorRole | str | None, investment_id: str | None = None) -> AdvisorRole | None:
        """Normalize a role value; ``None`` and blank text mean no advisor."""
        if value is None or isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            raise InvalidAdvisorRole(value, investment_id) from None


@dataclass(frozen=True)
class InvestmentFact:
    """Facts about one investment, assembled by the caller from stored records."""

    investment_id: str
    principal: float
    start_date: pd.Timestamp | date | str
    commitment_period_months: int
    liquidity: str | None = None
    advisor_role: AdvisorRole | str | None = None
    advisor_id: str | None = None
    office_id: str | None = None
    has_office: bool | None = None

    @property
    def office_present(self) -> bool:
        if self.has_office is not None:
            return bool(self.has_office)
        return self.office_id is not None and str(self.office_id).strip() != ''
