"""Overdue sweep endpoints shared by the payments and utilities routers."""

import logging

from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from bluemoon.errors import StoreUnavailableError, error_response
from bluemoon.schemas.common import CountResponse
from bluemoon.services.overdue_sweep import OverdueSweepService, SweepKind

logger = logging.getLogger(__name__)


async def run_sweep(session: AsyncSession, kind: SweepKind) -> CountResponse | JSONResponse:
    """Run one sweep and shape the HTTP answer.

    A failed sweep changed nothing and reports a count of 0 with status 503.
    """
    try:
        result = await OverdueSweepService(session).sweep(kind)
    except StoreUnavailableError as e:
        body = error_response(e)
        body["count"] = 0
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return CountResponse(message=result.message, count=result.count)
