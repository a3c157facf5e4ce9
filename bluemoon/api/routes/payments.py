"""Payment endpoints, including the payments overdue sweep."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bluemoon.api.routes.sweeps import run_sweep
from bluemoon.schemas.common import CountResponse, MessageResponse
from bluemoon.schemas.payments import (
    CreatePaymentPayload,
    GeneratePaymentsPayload,
    PaymentResponse,
    UpdatePaymentPayload,
)
from bluemoon.services import get_async_session
from bluemoon.services.overdue_sweep import SweepKind
from bluemoon.services.payment_service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/update-overdue", response_model=CountResponse)
async def update_overdue_payments(session: AsyncSession = Depends(get_async_session)):
    """Move pending payments whose due date has passed to overdue."""
    return await run_sweep(session, SweepKind.PAYMENTS)


@router.get("/update-overdue", response_model=CountResponse)
async def update_overdue_payments_get(session: AsyncSession = Depends(get_async_session)):
    """GET alias of the payments sweep, for schedulers that can only issue GETs."""
    return await run_sweep(session, SweepKind.PAYMENTS)


@router.post("/generate", response_model=CountResponse)
async def generate_payments(
    payload: GeneratePaymentsPayload, session: AsyncSession = Depends(get_async_session)
) -> CountResponse:
    """Charge a fee category to every active household for one month."""
    count = await PaymentService(session).generate_monthly_payments(
        fee_category_id=payload.fee_category_id,
        month=payload.month,
        year=payload.year,
    )
    return CountResponse(message=f"Created {count} payments", count=count)


@router.get("", response_model=list[PaymentResponse])
async def list_payments(
    status_: str | None = Query(None, alias="status"),
    household_id: int | None = Query(None, alias="householdId"),
    category_id: int | None = Query(None, alias="categoryId"),
    session: AsyncSession = Depends(get_async_session),
) -> list[PaymentResponse]:
    """List payments, optionally filtered by status, household and fee category."""
    payments = await PaymentService(session).list_payments(
        status=status_, household_id=household_id, category_id=category_id
    )
    return [PaymentResponse.model_validate(p) for p in payments]


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_payment(
    payload: CreatePaymentPayload, session: AsyncSession = Depends(get_async_session)
) -> PaymentResponse:
    """Create a payment (pending unless created as paid)."""
    payment = await PaymentService(session).create_payment(
        household_id=payload.household_id,
        fee_category_id=payload.fee_category_id,
        amount=payload.amount,
        due_date=payload.due_date,
        status=payload.status,
        payment_method=payload.payment_method,
        notes=payload.notes,
    )
    return PaymentResponse.model_validate(payment)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: int, session: AsyncSession = Depends(get_async_session)
) -> PaymentResponse:
    payment = await PaymentService(session).get_payment(payment_id)
    return PaymentResponse.model_validate(payment)


@router.put("/{payment_id}", response_model=PaymentResponse)
async def update_payment(
    payment_id: int,
    payload: UpdatePaymentPayload,
    session: AsyncSession = Depends(get_async_session),
) -> PaymentResponse:
    """Record a payment as paid, or edit its amount and notes."""
    payment = await PaymentService(session).update_payment(
        payment_id,
        status=payload.status,
        amount=payload.amount,
        notes=payload.notes,
        payment_method=payload.payment_method,
    )
    return PaymentResponse.model_validate(payment)


@router.delete("/{payment_id}", response_model=MessageResponse)
async def delete_payment(
    payment_id: int, session: AsyncSession = Depends(get_async_session)
) -> MessageResponse:
    await PaymentService(session).delete_payment(payment_id)
    return MessageResponse(message="Payment deleted successfully")
