"""Utility bill service: metered charges per household and billing period."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bluemoon.errors import NotFoundError, ValidationError
from bluemoon.models.billing import BillingStatus
from bluemoon.models.household import Household
from bluemoon.models.utility_bill import UtilityBill, UtilityType
from bluemoon.services import commit_or_raise
from bluemoon.services.payment_service import last_day_of_month
from bluemoon.services.query_filters import apply_equals, status_filter
from bluemoon.services.status_lifecycle import apply_status_change, parse_status, start_of_day

logger = logging.getLogger(__name__)

DEFAULT_ELECTRICITY_RATE = Decimal("0.15")
DEFAULT_WATER_RATE = Decimal("1.5")
DUE_DAY_OF_NEXT_MONTH = 15
CENT = Decimal("0.01")


def _decimal(value: Decimal | float | str | None, field: str, default: Decimal | None = None) -> Decimal | None:
    """Parse an optional non-negative number."""
    if value is None or value == "":
        return default
    try:
        parsed = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number") from None
    if not parsed.is_finite() or parsed < 0:
        raise ValidationError(f"{field} must not be negative")
    return parsed


@dataclass
class UtilityCharges:
    """Usage, rates and costs of one bill. Missing costs are usage x rate."""

    electricity_usage: Decimal | float | str | None = None
    electricity_rate: Decimal | float | str | None = None
    electricity_cost: Decimal | float | str | None = None
    water_usage: Decimal | float | str | None = None
    water_rate: Decimal | float | str | None = None
    water_cost: Decimal | float | str | None = None
    internet_cost: Decimal | float | str | None = None
    total_amount: Decimal | float | str | None = None

    def resolve(self) -> dict[str, Decimal]:
        """Fill in defaults and derived costs.

        Returns:
            Column values for a UtilityBill

        Raises:
            ValidationError: If any value is negative or not a number
        """
        e_usage = _decimal(self.electricity_usage, "electricity_usage", Decimal("0"))
        e_rate = _decimal(self.electricity_rate, "electricity_rate", DEFAULT_ELECTRICITY_RATE)
        e_cost = _decimal(self.electricity_cost, "electricity_cost")
        if e_cost is None:
            e_cost = e_usage * e_rate
        w_usage = _decimal(self.water_usage, "water_usage", Decimal("0"))
        w_rate = _decimal(self.water_rate, "water_rate", DEFAULT_WATER_RATE)
        w_cost = _decimal(self.water_cost, "water_cost")
        if w_cost is None:
            w_cost = w_usage * w_rate
        internet = _decimal(self.internet_cost, "internet_cost", Decimal("0"))
        total = _decimal(self.total_amount, "total_amount")
        if total is None:
            total = e_cost + w_cost + internet

        return {
            "electricity_usage": e_usage,
            "electricity_rate": e_rate,
            "electricity_cost": e_cost.quantize(CENT),
            "water_usage": w_usage,
            "water_rate": w_rate,
            "water_cost": w_cost.quantize(CENT),
            "internet_cost": internet.quantize(CENT),
            "total_amount": total.quantize(CENT),
        }


def default_period(today: date) -> tuple[date, date, date]:
    """Current calendar month and a due date on the 15th of the next month."""
    period_start = today.replace(day=1)
    period_end = last_day_of_month(today.year, today.month)
    if today.month == 12:
        due_date = date(today.year + 1, 1, DUE_DAY_OF_NEXT_MONTH)
    else:
        due_date = date(today.year, today.month + 1, DUE_DAY_OF_NEXT_MONTH)
    return period_start, period_end, due_date


def parse_utility_type(value: str | None) -> str:
    if not value:
        return UtilityType.COMBINED.value
    try:
        return UtilityType(value.strip().lower()).value
    except ValueError:
        allowed = ", ".join(t.value for t in UtilityType)
        raise ValidationError(f"Invalid utility type '{value}'. Expected one of: {allowed}") from None


class UtilityBillService:
    """Service for utility bill reads and writes."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    def _with_household(self):
        return (
            select(UtilityBill)
            .options(selectinload(UtilityBill.household))
            .execution_options(populate_existing=True)
        )

    async def list_bills(
        self, status: str | None = None, household_id: int | None = None
    ) -> list[UtilityBill]:
        """List utility bills, most recent due date first.

        Raises:
            ValidationError: If status is not a known status
        """
        stmt = apply_equals(
            self._with_household(),
            {UtilityBill.status: status_filter(status), UtilityBill.household_id: household_id},
        ).order_by(UtilityBill.due_date.desc(), UtilityBill.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_bill(self, bill_id: int) -> UtilityBill:
        """Get a utility bill with its household.

        Raises:
            NotFoundError: If the bill does not exist
        """
        result = await self.session.execute(self._with_household().where(UtilityBill.id == bill_id))
        bill = result.scalar_one_or_none()
        if bill is None:
            raise NotFoundError("Utility bill not found")
        return bill

    async def create_bill(
        self,
        household_id: int,
        month: str,
        charges: UtilityCharges | None = None,
        period_start: date | None = None,
        period_end: date | None = None,
        due_date: date | None = None,
        type: str | None = None,
        status: str | None = None,
        today: date | datetime | None = None,
    ) -> UtilityBill:
        """Create a utility bill for a household.

        Period defaults to the current month and the due date to the 15th of
        the following month.

        Raises:
            ValidationError: For a missing month label, bad numbers, an
                inverted period or a status other than pending/paid
            NotFoundError: If the household does not exist
        """
        if not month or not month.strip():
            raise ValidationError("month is required")
        reference = start_of_day(today)
        default_start, default_end, default_due = default_period(reference)
        period_start = period_start or default_start
        period_end = period_end or default_end
        due_date = due_date or default_due
        if period_end < period_start:
            raise ValidationError("period_end must not be before period_start")

        values = (charges or UtilityCharges()).resolve()
        bill_type = parse_utility_type(type)
        initial_status = parse_status(status) if status else BillingStatus.PENDING
        if initial_status is BillingStatus.OVERDUE:
            raise ValidationError("Status 'overdue' is set by the overdue sweep, not by hand")

        if await self.session.get(Household, household_id) is None:
            raise NotFoundError("Household not found")

        bill = UtilityBill(
            household_id=household_id,
            type=bill_type,
            month=month.strip(),
            period_start=period_start,
            period_end=period_end,
            due_date=due_date,
            status=BillingStatus.PENDING,
            **values,
        )
        if initial_status is BillingStatus.PAID:
            apply_status_change(bill, BillingStatus.PAID, reference)

        self.session.add(bill)
        await commit_or_raise(self.session, "create utility bill")
        logger.info(
            "Created utility bill id=%d household_id=%d month=%s total=%s",
            bill.id,
            household_id,
            bill.month,
            bill.total_amount,
        )
        return await self.get_bill(bill.id)

    async def update_bill(
        self,
        bill_id: int,
        status: str | None = None,
        total_amount: Decimal | float | str | None = None,
        type: str | None = None,
        today: date | datetime | None = None,
    ) -> UtilityBill:
        """Record a bill as paid and/or correct its total or type.

        Raises:
            NotFoundError: If the bill does not exist
            ValidationError: For a disallowed status change or bad values
        """
        bill = await self.get_bill(bill_id)
        corrected_total = _decimal(total_amount, "total_amount")
        if corrected_total is not None:
            bill.total_amount = corrected_total.quantize(CENT)
        if type:
            bill.type = parse_utility_type(type)
        if status:
            apply_status_change(bill, status, today)

        await commit_or_raise(self.session, "update utility bill")
        return await self.get_bill(bill_id)

    async def delete_bill(self, bill_id: int) -> None:
        """Delete a utility bill.

        Raises:
            NotFoundError: If the bill does not exist
        """
        bill = await self.session.get(UtilityBill, bill_id)
        if bill is None:
            raise NotFoundError("Utility bill not found")
        await self.session.delete(bill)
        await commit_or_raise(self.session, "delete utility bill")
        logger.info("Deleted utility bill id=%d", bill_id)


__all__ = ["UtilityBillService", "UtilityCharges", "default_period", "parse_utility_type"]
