"""Compounded investor payouts for liquidity cycles longer than a month."""

from __future__ import annotations


def compound(principal: float, rate_pct: float, cycle_months: int) -> float:
    """Profit after compounding ``principal`` monthly for ``cycle_months`` months."""
    if cycle_months < 0:
        raise ValueError(f'cycle_months must be non-negative, got {cycle_months}.')
    balance = float(principal)
    for _ in range(int(cycle_months)):
        balance += balance * float(rate_pct) / 100.0
    return balance - float(principal)


def compound_closed_form(principal: float, rate_pct: float, cycle_months: int) -> float:
    """Closed-form equivalent of :func:`compound`, used for cross-checks."""
    return float(principal) * ((1.0 + float(rate_pct) / 100.0) ** int(cycle_months) - 1.0)


def payout_cycles(commitment_months: int, cycle_months: int) -> list[tuple[int, int]]:
    """Return (monthly index, months compounded) for each investor payout.

    Payouts land on every ``cycle_months``-th monthly cutoff. A trailing
    remainder shorter than a cycle compounds for its own length and pays at
    the last cutoff of the commitment.
    """
    if cycle_months <= 0:
        raise ValueError(f'cycle_months must be positive, got {cycle_months}.')
    payouts = [
        (month - 1, cycle_months)
        for month in range(cycle_months, commitment_months + 1, cycle_months)
    ]
    remainder = commitment_months % cycle_months
    if remainder:
        payouts.append((commitment_months - 1, remainder))
    return payouts
