"""Input-validation errors raised by the commission engine.

Each error rebuilds from its constructor arguments when pickled, so error
kinds survive a trip through a process pool.
"""

from __future__ import annotations


class CommissionError(ValueError):
    """Base class for inputs that cannot produce a commission schedule."""

    def __init__(self, message: str, investment_id: str | None = None):
        self.message = message
        self.investment_id = investment_id
        super().__init__(message)

    def __str__(self) -> str:
        if self.investment_id is not None:
            return f'{self.message} (investment {self.investment_id})'
        return self.message

    def __reduce__(self):
        return type(self), (self.message, self.investment_id)


class UnsupportedPeriod(CommissionError):
    def __init__(self, period: object, supported: tuple[int, ...], investment_id: str | None = None):
        self.period = period
        self.supported = tuple(supported)
        super().__init__(
            f'Unsupported commitment period {period!r}; expected one of {list(supported)}.',
            investment_id,
        )

    def __reduce__(self):
        return type(self), (self.period, self.supported, self.investment_id)


class InvalidRateCombination(CommissionError):
    def __init__(self, period: int, liquidity: str, investment_id: str | None = None):
        self.period = period
        self.liquidity = liquidity
        super().__init__(
            f'No rate defined for commitment period {period} months with {liquidity} liquidity.',
            investment_id,
        )

    def __reduce__(self):
        return type(self), (self.period, self.liquidity, self.investment_id)


class InvalidPrincipal(CommissionError):
    def __init__(self, principal: object, investment_id: str | None = None):
        self.principal = principal
        super().__init__(f'Principal must be a positive number, got {principal!r}.', investment_id)

    def __reduce__(self):
        return type(self), (self.principal, self.investment_id)


class InvalidStartDate(CommissionError):
    def __init__(self, start_date: object, investment_id: str | None = None):
        self.start_date = start_date
        super().__init__(f'Start date is missing or not a calendar date: {start_date!r}.', investment_id)

    def __reduce__(self):
        return type(self), (self.start_date, self.investment_id)


class InvalidAdvisorRole(CommissionError):
    def __init__(self, role: object, investment_id: str | None = None):
        self.role = role
        super().__init__(f'Advisor role must be internal or external, got {role!r}.', investment_id)

    def __reduce__(self):
        return type(self), (self.role, self.investment_id)
