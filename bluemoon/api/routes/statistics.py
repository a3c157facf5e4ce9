"""Dashboard statistics endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bluemoon.models.billing import BillingStatus
from bluemoon.schemas.statistics import StatisticsResponse, StatusBreakdown
from bluemoon.services import get_async_session
from bluemoon.services.statistics_service import StatisticsService, StatusTotals

router = APIRouter(prefix="/statistics", tags=["statistics"])


def _breakdown(totals: StatusTotals) -> StatusBreakdown:
    return StatusBreakdown(
        total=totals.total_count,
        pending=totals.counts[BillingStatus.PENDING.value],
        overdue=totals.counts[BillingStatus.OVERDUE.value],
        paid=totals.counts[BillingStatus.PAID.value],
        pending_amount=totals.amounts[BillingStatus.PENDING.value],
        overdue_amount=totals.amounts[BillingStatus.OVERDUE.value],
        paid_amount=totals.amounts[BillingStatus.PAID.value],
        outstanding_amount=totals.outstanding,
        collection_rate=totals.collection_rate,
    )


@router.get("", response_model=StatisticsResponse)
async def get_statistics(session: AsyncSession = Depends(get_async_session)) -> StatisticsResponse:
    overview = await StatisticsService(session).get_overview()
    return StatisticsResponse(
        total_households=overview.total_households,
        active_households=overview.active_households,
        total_residents=overview.total_residents,
        payments=_breakdown(overview.payments),
        utilities=_breakdown(overview.utilities),
    )
