"""Payment service: fee charges against households."""

import calendar
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bluemoon.errors import NotFoundError, ValidationError
from bluemoon.models.billing import BillingStatus
from bluemoon.models.fee_category import FeeCategory
from bluemoon.models.household import Household, HouseholdStatus
from bluemoon.models.payment import Payment
from bluemoon.services import commit_or_raise
from bluemoon.services.query_filters import apply_equals, status_filter
from bluemoon.services.status_lifecycle import apply_status_change, parse_status, start_of_day

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_METHOD = "cash"


def parse_amount(value: Decimal | float | str | None, field: str = "amount") -> Decimal:
    """Parse a money amount from a request; it must be greater than zero.

    Raises:
        ValidationError: If the value is missing, not a number, or not positive
    """
    if value is None or value == "":
        raise ValidationError(f"{field} is required")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number") from None
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return amount.quantize(Decimal("0.01"))


def last_day_of_month(year: int, month: int) -> date:
    """Due date used for generated monthly charges."""
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    return date(year, month, calendar.monthrange(year, month)[1])


class PaymentService:
    """Service for payment reads, writes and monthly generation."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    def _with_relations(self):
        return (
            select(Payment)
            .options(selectinload(Payment.household), selectinload(Payment.fee_category))
            .execution_options(populate_existing=True)
        )

    async def list_payments(
        self,
        status: str | None = None,
        household_id: int | None = None,
        category_id: int | None = None,
    ) -> list[Payment]:
        """List payments, most recent due date first.

        Args:
            status: Status filter ("all" or None for every status)
            household_id: Only this household's payments
            category_id: Only this fee category's payments

        Raises:
            ValidationError: If status is not a known status
        """
        stmt = apply_equals(
            self._with_relations(),
            {
                Payment.status: status_filter(status),
                Payment.household_id: household_id,
                Payment.fee_category_id: category_id,
            },
        ).order_by(Payment.due_date.desc(), Payment.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_payment(self, payment_id: int) -> Payment:
        """Get a payment with its household and fee category.

        Raises:
            NotFoundError: If the payment does not exist
        """
        result = await self.session.execute(self._with_relations().where(Payment.id == payment_id))
        payment = result.scalar_one_or_none()
        if payment is None:
            raise NotFoundError("Payment not found")
        return payment

    async def create_payment(
        self,
        household_id: int,
        fee_category_id: int,
        amount: Decimal | float | str,
        due_date: date,
        status: str | None = None,
        payment_method: str | None = None,
        notes: str | None = None,
        today: date | datetime | None = None,
    ) -> Payment:
        """Create a payment, pending by default.

        A payment created as paid is stamped with ``today`` as its paid date.

        Raises:
            ValidationError: For a bad amount, missing due date or a status other
                than pending/paid
            NotFoundError: If the household or fee category does not exist
        """
        parsed_amount = parse_amount(amount)
        if due_date is None:
            raise ValidationError("due_date is required")
        initial_status = parse_status(status) if status else BillingStatus.PENDING
        if initial_status is BillingStatus.OVERDUE:
            raise ValidationError("Status 'overdue' is set by the overdue sweep, not by hand")

        if await self.session.get(Household, household_id) is None:
            raise NotFoundError("Household not found")
        if await self.session.get(FeeCategory, fee_category_id) is None:
            raise NotFoundError("Fee category not found")

        payment = Payment(
            household_id=household_id,
            fee_category_id=fee_category_id,
            amount=parsed_amount,
            due_date=due_date,
            status=BillingStatus.PENDING,
            notes=notes,
        )
        if initial_status is BillingStatus.PAID:
            apply_status_change(payment, BillingStatus.PAID, today)
            payment.payment_method = payment_method or DEFAULT_PAYMENT_METHOD

        self.session.add(payment)
        await commit_or_raise(self.session, "create payment")
        logger.info(
            "Created payment id=%d household_id=%d amount=%s status=%s",
            payment.id,
            household_id,
            parsed_amount,
            payment.status.value,
        )
        return await self.get_payment(payment.id)

    async def update_payment(
        self,
        payment_id: int,
        status: str | None = None,
        amount: Decimal | float | str | None = None,
        notes: str | None = None,
        payment_method: str | None = None,
        today: date | datetime | None = None,
    ) -> Payment:
        """Record a payment (status -> paid) and/or edit amount and notes.

        Raises:
            NotFoundError: If the payment does not exist
            ValidationError: For a disallowed status change or a bad amount
        """
        payment = await self.get_payment(payment_id)

        if amount is not None:
            payment.amount = parse_amount(amount)
        if notes is not None:
            payment.notes = notes
        if status and apply_status_change(payment, status, today):
            payment.payment_method = payment_method or DEFAULT_PAYMENT_METHOD

        await commit_or_raise(self.session, "update payment")
        return await self.get_payment(payment_id)

    async def delete_payment(self, payment_id: int) -> None:
        """Delete a payment.

        Raises:
            NotFoundError: If the payment does not exist
        """
        payment = await self.session.get(Payment, payment_id)
        if payment is None:
            raise NotFoundError("Payment not found")
        await self.session.delete(payment)
        await commit_or_raise(self.session, "delete payment")
        logger.info("Deleted payment id=%d", payment_id)

    async def generate_monthly_payments(
        self,
        fee_category_id: int,
        month: int | None = None,
        year: int | None = None,
        today: date | datetime | None = None,
    ) -> int:
        """Charge a fee category to every active household for one month.

        Each payment is pending, for the category amount, due on the last day
        of the month. All payments are created in one transaction.

        Args:
            fee_category_id: Fee category to charge
            month: Month number 1-12 (default: current month)
            year: Year (default: current year)
            today: Reference date for the defaults

        Returns:
            Number of payments created

        Raises:
            NotFoundError: If the fee category does not exist
        """
        reference = start_of_day(today)
        due_date = last_day_of_month(year or reference.year, month or reference.month)

        category = await self.session.get(FeeCategory, fee_category_id)
        if category is None:
            raise NotFoundError("Fee category not found")

        result = await self.session.execute(
            select(Household.id).where(Household.status == HouseholdStatus.ACTIVE.value)
        )
        household_ids = list(result.scalars().all())

        self.session.add_all(
            Payment(
                household_id=household_id,
                fee_category_id=category.id,
                amount=category.amount,
                due_date=due_date,
                status=BillingStatus.PENDING,
            )
            for household_id in household_ids
        )
        await commit_or_raise(self.session, "generate payments")

        logger.info(
            "Generated %d payments for category=%s due=%s",
            len(household_ids),
            category.name,
            due_date,
        )
        return len(household_ids)


__all__ = ["PaymentService", "parse_amount", "last_day_of_month", "DEFAULT_PAYMENT_METHOD"]
