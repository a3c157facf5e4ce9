"""Household endpoints: list and detail with derived balance, create, delete."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bluemoon.schemas.common import MessageResponse
from bluemoon.schemas.households import CreateHouseholdPayload, HouseholdDetail, HouseholdSummary
from bluemoon.services import get_async_session
from bluemoon.services.household_service import HouseholdService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/households", tags=["households"])


@router.get("", response_model=list[HouseholdSummary])
async def list_households(
    status_: str | None = Query(None, alias="status"),
    search: str | None = Query(None),
    session: AsyncSession = Depends(get_async_session),
) -> list[HouseholdSummary]:
    """List households by unit with resident count and outstanding balance."""
    views = await HouseholdService(session).list_households(status=status_, search=search)
    return [
        HouseholdSummary.model_validate(view.household).model_copy(
            update={"residents": view.residents, "balance": view.balance}
        )
        for view in views
    ]


@router.post("", response_model=HouseholdSummary, status_code=status.HTTP_201_CREATED)
async def create_household(
    payload: CreateHouseholdPayload, session: AsyncSession = Depends(get_async_session)
) -> HouseholdSummary:
    household = await HouseholdService(session).create_household(
        unit=payload.unit,
        owner_name=payload.owner_name,
        phone=payload.phone,
        email=payload.email,
        area=payload.area,
        floor=payload.floor,
        move_in_date=payload.move_in_date,
    )
    return HouseholdSummary.model_validate(household)


@router.get("/{household_id}", response_model=HouseholdDetail)
async def get_household(
    household_id: int, session: AsyncSession = Depends(get_async_session)
) -> HouseholdDetail:
    """Household with members, payments, bills and parking, plus residents and balance.

    The balance is recomputed from the payments on every call.
    """
    view = await HouseholdService(session).get_household_detail(household_id)
    return HouseholdDetail.model_validate(view.household).model_copy(
        update={"residents": view.residents, "balance": view.balance}
    )


@router.delete("/{household_id}", response_model=MessageResponse)
async def delete_household(
    household_id: int, session: AsyncSession = Depends(get_async_session)
) -> MessageResponse:
    """Delete a household and everything it owns."""
    await HouseholdService(session).delete_household(household_id)
    return MessageResponse(message="Household deleted successfully")
