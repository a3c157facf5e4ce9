"""Household service: reads with derived balance, creation and cascading delete."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bluemoon.errors import ConflictError, NotFoundError, StoreUnavailableError, ValidationError
from bluemoon.models.household import Household, HouseholdStatus
from bluemoon.models.payment import Payment
from bluemoon.services import commit_or_raise
from bluemoon.services.balance_service import household_balance
from bluemoon.services.query_filters import apply_equals, icontains_any, plain_filter

logger = logging.getLogger(__name__)


@dataclass
class HouseholdView:
    """A household together with its derived values."""

    household: Household
    residents: int
    balance: Decimal


class HouseholdService:
    """Service for household reads and writes."""

    def __init__(self, session: AsyncSession):
        """Initialize with database session."""
        self.session = session

    async def get_household_detail(self, household_id: int) -> HouseholdView:
        """Load a household with all owned records and compute its balance.

        Args:
            household_id: Household ID

        Returns:
            HouseholdView with member count and outstanding balance

        Raises:
            NotFoundError: If the household does not exist
        """
        stmt = (
            select(Household)
            .where(Household.id == household_id)
            .options(
                selectinload(Household.members),
                selectinload(Household.payments).selectinload(Payment.fee_category),
                selectinload(Household.utility_bills),
                selectinload(Household.parking_slots),
            )
        )
        result = await self.session.execute(stmt)
        household = result.scalar_one_or_none()
        if household is None:
            raise NotFoundError("Household not found")

        return HouseholdView(
            household=household,
            residents=len(household.members),
            balance=household_balance(household),
        )

    async def list_households(
        self, status: str | None = None, search: str | None = None
    ) -> list[HouseholdView]:
        """List households ordered by unit, each with residents and balance.

        Args:
            status: Household status filter ("all" or None for every household)
            search: Case-insensitive substring over unit, owner name and email
        """
        stmt = (
            select(Household)
            .options(selectinload(Household.members), selectinload(Household.payments))
            .order_by(Household.unit.asc())
        )
        stmt = apply_equals(stmt, {Household.status: plain_filter(status)})
        search = plain_filter(search)
        if search:
            stmt = stmt.where(
                icontains_any(search, Household.unit, Household.owner_name, Household.email)
            )

        result = await self.session.execute(stmt)
        return [
            HouseholdView(household=h, residents=len(h.members), balance=household_balance(h))
            for h in result.scalars().all()
        ]

    async def create_household(
        self,
        unit: str,
        owner_name: str,
        phone: str,
        email: str,
        area: Decimal | None = None,
        floor: int | None = None,
        move_in_date: date | None = None,
    ) -> Household:
        """Register a new active household.

        Raises:
            ValidationError: If a required field is blank
            ConflictError: If the unit label is already taken
        """
        required = {"unit": unit, "owner_name": owner_name, "phone": phone, "email": email}
        missing = [name for name, value in required.items() if not value or not str(value).strip()]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        unit = unit.strip()
        existing = await self.session.execute(select(Household.id).where(Household.unit == unit))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("Unit already exists")

        household = Household(
            unit=unit,
            owner_name=owner_name.strip(),
            phone=phone.strip(),
            email=email.strip(),
            status=HouseholdStatus.ACTIVE.value,
            area=area,
            floor=floor,
            move_in_date=move_in_date,
        )
        self.session.add(household)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Unit already exists") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to create household %s: %s", unit, e, exc_info=True)
            raise StoreUnavailableError("Failed to create household") from e

        await self.session.refresh(household)
        logger.info("Created household id=%d unit=%s", household.id, household.unit)
        return household

    async def delete_household(self, household_id: int) -> None:
        """Delete a household together with everything it owns.

        Raises:
            NotFoundError: If the household does not exist
        """
        stmt = (
            select(Household)
            .where(Household.id == household_id)
            .options(
                selectinload(Household.members),
                selectinload(Household.payments),
                selectinload(Household.utility_bills),
                selectinload(Household.parking_slots),
            )
        )
        result = await self.session.execute(stmt)
        household = result.scalar_one_or_none()
        if household is None:
            raise NotFoundError("Household not found")

        await self.session.delete(household)
        await commit_or_raise(self.session, "delete household")
        logger.info("Deleted household id=%d unit=%s", household_id, household.unit)


__all__ = ["HouseholdService", "HouseholdView"]
