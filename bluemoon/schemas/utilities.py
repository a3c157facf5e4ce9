"""Schemas for utility bill endpoints."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from bluemoon.schemas.common import ApiModel, HouseholdRef


class UtilityBillResponse(ApiModel):
    id: int
    household_id: int
    type: str
    month: str
    period_start: date
    period_end: date
    due_date: date
    electricity_usage: Decimal
    electricity_rate: Decimal
    electricity_cost: Decimal
    water_usage: Decimal
    water_rate: Decimal
    water_cost: Decimal
    internet_cost: Decimal
    total_amount: Decimal
    status: str
    paid_date: date | None = None
    household: HouseholdRef | None = None
    created_at: datetime
    updated_at: datetime


class CreateUtilityBillPayload(ApiModel):
    """Request body for POST /utilities. Missing costs are computed from usage x rate."""

    household_id: int
    month: str = Field(..., min_length=1, description="Billing period label, e.g. 'December 2025'")
    type: str | None = None
    period_start: date | None = None
    period_end: date | None = None
    due_date: date | None = None
    electricity_usage: Decimal | None = Field(None, ge=0)
    electricity_rate: Decimal | None = Field(None, ge=0)
    electricity_cost: Decimal | None = Field(None, ge=0)
    water_usage: Decimal | None = Field(None, ge=0)
    water_rate: Decimal | None = Field(None, ge=0)
    water_cost: Decimal | None = Field(None, ge=0)
    internet_cost: Decimal | None = Field(None, ge=0)
    total_amount: Decimal | None = Field(None, ge=0)
    status: str | None = None


class UpdateUtilityBillPayload(ApiModel):
    """Request body for PUT /utilities/{id}."""

    status: str | None = Field(None, description="Set to 'paid' to record the payment")
    total_amount: Decimal | None = Field(None, ge=0)
    type: str | None = None
