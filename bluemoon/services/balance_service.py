"""Household balance calculation.

Balance = sum(amount) over the household's payments that are pending or overdue.

The balance is derived on every read and never stored, so it always reflects
the latest status transitions. It uses statuses exactly as stored: run the
overdue sweep first if sweep-aware numbers are needed (overdue and pending
count the same here, so only the split changes, not the total).
"""

import logging
from decimal import Decimal
from typing import Iterable, NamedTuple

from bluemoon.models.billing import OUTSTANDING_STATUSES, BillingStatus
from bluemoon.models.household import Household
from bluemoon.models.payment import Payment

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class BalanceBreakdown(NamedTuple):
    """Outstanding amounts split by status."""

    pending: Decimal
    overdue: Decimal

    @property
    def total(self) -> Decimal:
        return self.pending + self.overdue


def compute_balance(payments: Iterable[Payment]) -> Decimal:
    """Sum the amounts of outstanding (pending or overdue) payments.

    Args:
        payments: The household's payments, already loaded

    Returns:
        Outstanding balance; ``Decimal("0")`` when nothing is outstanding
    """
    return sum(
        (Decimal(str(p.amount)) for p in payments if p.status in OUTSTANDING_STATUSES and p.amount),
        ZERO,
    )


def compute_balance_breakdown(payments: Iterable[Payment]) -> BalanceBreakdown:
    """Split the outstanding balance into its pending and overdue parts."""
    pending = ZERO
    overdue = ZERO
    for p in payments:
        if not p.amount:
            continue
        if p.status == BillingStatus.PENDING:
            pending += Decimal(str(p.amount))
        elif p.status == BillingStatus.OVERDUE:
            overdue += Decimal(str(p.amount))
    return BalanceBreakdown(pending=pending, overdue=overdue)


def household_balance(household: Household) -> Decimal:
    """Balance of a household whose ``payments`` relationship is eagerly loaded."""
    return compute_balance(household.payments)


__all__ = [
    "BalanceBreakdown",
    "compute_balance",
    "compute_balance_breakdown",
    "household_balance",
]
