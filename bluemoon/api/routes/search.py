"""Global search endpoint."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bluemoon.errors import SearchUnavailableError
from bluemoon.schemas.search import SearchResponse, SearchResultItem
from bluemoon.services import get_session_factory
from bluemoon.services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse)
async def search(
    q: str = Query("", description="Search text (at least 2 characters)"),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SearchResponse:
    """Search households, members and parking slots.

    Search is advisory: when the store is unavailable or the search
    fails internally the answer is an empty
    list with status 200, the same as no matches.
    """
    try:
        results = await SearchService(session_factory).search(q)
    except SearchUnavailableError:
        return SearchResponse(results=[])
    except Exception:
        logger.error("search failed for q=%r", q, exc_info=True)
        return SearchResponse(results=[])
    return SearchResponse(results=[SearchResultItem(**r.to_dict()) for r in results])
