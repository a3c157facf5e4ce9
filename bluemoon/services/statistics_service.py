"""Dashboard statistics: billing totals by status and collection rates."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bluemoon.models.billing import BillingStatus
from bluemoon.models.household import Household, HouseholdStatus
from bluemoon.models.member import HouseholdMember
from bluemoon.models.payment import Payment
from bluemoon.models.utility_bill import UtilityBill

logger = logging.getLogger(__name__)


@dataclass
class StatusTotals:
    """Record count and amount sum for each billing status."""

    counts: dict[str, int] = field(default_factory=dict)
    amounts: dict[str, Decimal] = field(default_factory=dict)

    @property
    def total_count(self) -> int:
        return sum(self.counts.values())

    @property
    def collection_rate(self) -> int:
        """Paid records as a rounded percentage of all records (0 when empty)."""
        if not self.total_count:
            return 0
        return round(self.counts[BillingStatus.PAID.value] * 100 / self.total_count)

    @property
    def outstanding(self) -> Decimal:
        return self.amounts[BillingStatus.PENDING.value] + self.amounts[BillingStatus.OVERDUE.value]


@dataclass
class Overview:
    total_households: int
    active_households: int
    total_residents: int
    payments: StatusTotals
    utilities: StatusTotals


class StatisticsService:
    """Aggregate figures for the dashboard."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    async def _status_totals(self, status_column, amount_column) -> StatusTotals:
        stmt = select(
            status_column,
            func.count(),
            func.coalesce(func.sum(amount_column), 0),
        ).group_by(status_column)
        result = await self.session.execute(stmt)

        totals = StatusTotals(
            counts={s.value: 0 for s in BillingStatus},
            amounts={s.value: Decimal("0") for s in BillingStatus},
        )
        for status, count, amount in result.all():
            key = BillingStatus(status).value
            totals.counts[key] = count
            totals.amounts[key] = Decimal(str(amount))
        return totals

    async def get_overview(self) -> Overview:
        """Household counts plus payment and utility totals by status."""
        total_households = await self.session.scalar(select(func.count(Household.id)))
        active_households = await self.session.scalar(
            select(func.count(Household.id)).where(Household.status == HouseholdStatus.ACTIVE.value)
        )
        total_residents = await self.session.scalar(select(func.count(HouseholdMember.id)))

        overview = Overview(
            total_households=total_households or 0,
            active_households=active_households or 0,
            total_residents=total_residents or 0,
            payments=await self._status_totals(Payment.status, Payment.amount),
            utilities=await self._status_totals(UtilityBill.status, UtilityBill.total_amount),
        )
        logger.debug(
            "statistics: households=%d payments=%d utilities=%d",
            overview.total_households,
            overview.payments.total_count,
            overview.utilities.total_count,
        )
        return overview


__all__ = ["StatisticsService", "StatusTotals", "Overview"]
