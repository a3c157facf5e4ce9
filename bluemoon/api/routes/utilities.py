"""Utility bill endpoints, including the utility bills overdue sweep."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bluemoon.api.routes.sweeps import run_sweep
from bluemoon.schemas.common import CountResponse, MessageResponse
from bluemoon.schemas.utilities import (
    CreateUtilityBillPayload,
    UpdateUtilityBillPayload,
    UtilityBillResponse,
)
from bluemoon.services import get_async_session
from bluemoon.services.overdue_sweep import SweepKind
from bluemoon.services.utility_service import UtilityBillService, UtilityCharges

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/utilities", tags=["utilities"])


@router.post("/update-overdue", response_model=CountResponse)
async def update_overdue_utilities(session: AsyncSession = Depends(get_async_session)):
    """Move pending utility bills whose due date has passed to overdue."""
    return await run_sweep(session, SweepKind.UTILITIES)


@router.get("/update-overdue", response_model=CountResponse)
async def update_overdue_utilities_get(session: AsyncSession = Depends(get_async_session)):
    """GET alias of the utility bills sweep (cron-friendly)."""
    return await run_sweep(session, SweepKind.UTILITIES)


@router.get("", response_model=list[UtilityBillResponse])
async def list_utility_bills(
    status_: str | None = Query(None, alias="status"),
    household_id: int | None = Query(None, alias="householdId"),
    session: AsyncSession = Depends(get_async_session),
) -> list[UtilityBillResponse]:
    bills = await UtilityBillService(session).list_bills(status=status_, household_id=household_id)
    return [UtilityBillResponse.model_validate(b) for b in bills]


@router.post("", response_model=UtilityBillResponse, status_code=status.HTTP_201_CREATED)
async def create_utility_bill(
    payload: CreateUtilityBillPayload, session: AsyncSession = Depends(get_async_session)
) -> UtilityBillResponse:
    """Create a utility bill; costs missing from the payload are computed."""
    charges = UtilityCharges(
        electricity_usage=payload.electricity_usage,
        electricity_rate=payload.electricity_rate,
        electricity_cost=payload.electricity_cost,
        water_usage=payload.water_usage,
        water_rate=payload.water_rate,
        water_cost=payload.water_cost,
        internet_cost=payload.internet_cost,
        total_amount=payload.total_amount,
    )
    bill = await UtilityBillService(session).create_bill(
        household_id=payload.household_id,
        month=payload.month,
        charges=charges,
        period_start=payload.period_start,
        period_end=payload.period_end,
        due_date=payload.due_date,
        type=payload.type,
        status=payload.status,
    )
    return UtilityBillResponse.model_validate(bill)


@router.get("/{bill_id}", response_model=UtilityBillResponse)
async def get_utility_bill(
    bill_id: int, session: AsyncSession = Depends(get_async_session)
) -> UtilityBillResponse:
    bill = await UtilityBillService(session).get_bill(bill_id)
    return UtilityBillResponse.model_validate(bill)


@router.put("/{bill_id}", response_model=UtilityBillResponse)
async def update_utility_bill(
    bill_id: int,
    payload: UpdateUtilityBillPayload,
    session: AsyncSession = Depends(get_async_session),
) -> UtilityBillResponse:
    """Record a bill as paid, or correct its total or type."""
    bill = await UtilityBillService(session).update_bill(
        bill_id, status=payload.status, total_amount=payload.total_amount, type=payload.type
    )
    return UtilityBillResponse.model_validate(bill)


@router.delete("/{bill_id}", response_model=MessageResponse)
async def delete_utility_bill(
    bill_id: int, session: AsyncSession = Depends(get_async_session)
) -> MessageResponse:
    await UtilityBillService(session).delete_bill(bill_id)
    return MessageResponse(message="Utility bill deleted successfully")
