"""Overdue sweep: advance stale pending billing records to overdue.

Two independent sweeps exist, one over payments and one over utility bills.
Each is a single conditional bulk UPDATE::

    UPDATE <table> SET status = 'overdue'
    WHERE status = 'pending' AND due_date < :today

so a sweep either applies completely or not at all, and concurrent or
repeated sweeps converge (the filter excludes rows that already moved).
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bluemoon.errors import StoreUnavailableError
from bluemoon.models.billing import BillingStatus
from bluemoon.models.payment import Payment
from bluemoon.models.utility_bill import UtilityBill
from bluemoon.services.status_lifecycle import start_of_day

logger = logging.getLogger(__name__)


class SweepKind(str, Enum):
    """Which billing table a sweep covers."""

    PAYMENTS = "payments"
    UTILITIES = "utilities"


_SWEEP_TARGETS = {
    SweepKind.PAYMENTS: (Payment, "payments"),
    SweepKind.UTILITIES: (UtilityBill, "utility bills"),
}


@dataclass(frozen=True)
class SweepResult:
    """Outcome of one sweep run. ``count`` is for reporting only."""

    kind: SweepKind
    count: int
    today: date

    @property
    def message(self) -> str:
        label = _SWEEP_TARGETS[self.kind][1]
        return f"Updated {self.count} {label} to overdue"


class OverdueSweepService:
    """Run overdue sweeps against the billing tables."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    async def sweep(self, kind: SweepKind, today: date | datetime | None = None) -> SweepResult:
        """Move every pending record of ``kind`` due before ``today`` to overdue.

        Args:
            kind: Billing table to sweep
            today: Reference date (default: now); time of day is discarded

        Returns:
            SweepResult with the number of records transitioned

        Raises:
            StoreUnavailableError: If the update failed; nothing was changed
        """
        model, label = _SWEEP_TARGETS[SweepKind(kind)]
        reference_day = start_of_day(today)

        stmt = (
            update(model)
            .where(model.status == BillingStatus.PENDING)
            .where(model.due_date < reference_day)
            .values(status=BillingStatus.OVERDUE)
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("overdue_sweep.%s failed: %s", kind.value, e, exc_info=True)
            raise StoreUnavailableError(f"Failed to update overdue {label}") from e

        count = result.rowcount or 0
        logger.info("overdue_sweep.%s: today=%s count=%d", kind.value, reference_day, count)
        return SweepResult(kind=SweepKind(kind), count=count, today=reference_day)

    async def sweep_payments(self, today: date | datetime | None = None) -> SweepResult:
        """Sweep the payments table."""
        return await self.sweep(SweepKind.PAYMENTS, today)

    async def sweep_utility_bills(self, today: date | datetime | None = None) -> SweepResult:
        """Sweep the utility bills table."""
        return await self.sweep(SweepKind.UTILITIES, today)


async def sweep_all(
    session_factory: async_sessionmaker[AsyncSession],
    today: date | datetime | None = None,
    kinds: tuple[SweepKind, ...] = (SweepKind.PAYMENTS, SweepKind.UTILITIES),
) -> list[SweepResult]:
    """Run the requested sweeps one after another, each in its own session.

    A failure in one sweep does not prevent the others from running; the first
    failure is re-raised after all kinds were attempted.
    """
    results: list[SweepResult] = []
    first_error: StoreUnavailableError | None = None
    for kind in kinds:
        async with session_factory() as session:
            try:
                results.append(await OverdueSweepService(session).sweep(kind, today))
            except StoreUnavailableError as e:
                first_error = first_error or e
    if first_error is not None:
        raise first_error
    return results


async def run_periodic_sweeps(
    session_factory: async_sessionmaker[AsyncSession],
    interval_seconds: int,
) -> None:
    """Sweep both tables now and then every ``interval_seconds`` until cancelled.

    Failures are logged and the loop keeps its schedule.
    """
    logger.info("Overdue sweep scheduler started (interval=%ss)", interval_seconds)
    while True:
        try:
            await sweep_all(session_factory)
        except StoreUnavailableError as e:
            logger.warning("Scheduled overdue sweep failed: %s", e.message)
        await asyncio.sleep(interval_seconds)


__all__ = [
    "SweepKind",
    "SweepResult",
    "OverdueSweepService",
    "sweep_all",
    "run_periodic_sweeps",
]
