"""Schemas for household endpoints."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from bluemoon.schemas.common import ApiModel
from bluemoon.schemas.payments import FeeCategoryRef


class HouseholdSummary(ApiModel):
    """Household row in the list view, with derived residents and balance."""

    id: int
    unit: str
    owner_name: str
    phone: str | None = None
    email: str | None = None
    status: str
    area: Decimal | None = None
    floor: int | None = None
    move_in_date: date | None = None
    residents: int = 0
    balance: Decimal = Decimal("0")


class MemberItem(ApiModel):
    id: int
    name: str
    id_number: str
    date_of_birth: date | None = None


class HouseholdPaymentItem(ApiModel):
    id: int
    fee_category_id: int
    amount: Decimal
    due_date: date
    status: str
    paid_date: date | None = None
    payment_method: str | None = None
    fee_category: FeeCategoryRef | None = None


class HouseholdUtilityItem(ApiModel):
    id: int
    type: str
    month: str
    due_date: date
    total_amount: Decimal
    status: str
    paid_date: date | None = None


class ParkingSlotItem(ApiModel):
    id: int
    slot_number: str
    type: str
    license_plate: str | None = None
    status: str
    monthly_fee: Decimal


class HouseholdDetail(HouseholdSummary):
    """GET /households/{id}: the household with everything it owns."""

    created_at: datetime
    members: list[MemberItem] = []
    payments: list[HouseholdPaymentItem] = []
    utility_bills: list[HouseholdUtilityItem] = []
    parking_slots: list[ParkingSlotItem] = []


class CreateHouseholdPayload(ApiModel):
    """Request body for POST /households."""

    unit: str = Field(..., min_length=1)
    owner_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    area: Decimal | None = Field(None, gt=0)
    floor: int | None = None
    move_in_date: date | None = None
