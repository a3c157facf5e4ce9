"""Schemas for payment endpoints."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from bluemoon.schemas.common import ApiModel, HouseholdRef


class FeeCategoryRef(ApiModel):
    id: int
    name: str


class PaymentResponse(ApiModel):
    """A payment with its household and fee category."""

    id: int
    household_id: int
    fee_category_id: int
    amount: Decimal
    due_date: date
    status: str
    paid_date: date | None = None
    payment_method: str | None = None
    notes: str | None = None
    household: HouseholdRef | None = None
    fee_category: FeeCategoryRef | None = None
    created_at: datetime
    updated_at: datetime


class CreatePaymentPayload(ApiModel):
    """Request body for POST /payments."""

    household_id: int = Field(..., description="Household charged")
    fee_category_id: int = Field(..., description="Fee category")
    amount: Decimal = Field(..., gt=0, description="Amount due")
    due_date: date = Field(..., description="Due date")
    status: str | None = Field(None, description="pending (default) or paid")
    payment_method: str | None = Field(None, description="Used when created as paid")
    notes: str | None = None


class UpdatePaymentPayload(ApiModel):
    """Request body for PUT /payments/{id}."""

    status: str | None = Field(None, description="Set to 'paid' to record the payment")
    amount: Decimal | None = Field(None, gt=0)
    payment_method: str | None = None
    notes: str | None = None


class GeneratePaymentsPayload(ApiModel):
    """Request body for POST /payments/generate."""

    fee_category_id: int
    month: int | None = Field(None, ge=1, le=12, description="1-12, default current month")
    year: int | None = Field(None, ge=2000, le=2100, description="Default current year")
