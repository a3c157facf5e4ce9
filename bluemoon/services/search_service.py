"""Global search across households, members and parking slots.

One query fans out into three independent lookups that run concurrently, each
in its own session and each capped at ``PER_SOURCE_LIMIT`` rows. Results are
merged in fixed source order (households, members, parking slots), not by
relevance, and the merged list is cut to ``TOTAL_LIMIT`` entries.
"""

import asyncio
import logging
from dataclasses import asdict, dataclass
from typing import Awaitable, Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from bluemoon.errors import SearchUnavailableError
from bluemoon.models.household import Household
from bluemoon.models.member import HouseholdMember
from bluemoon.models.parking_slot import ParkingSlot
from bluemoon.services.query_filters import icontains_any

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
PER_SOURCE_LIMIT = 5
TOTAL_LIMIT = 10


@dataclass(frozen=True)
class SearchResult:
    """One search hit in the shape every source is normalized to."""

    type: str
    id: int
    title: str
    subtitle: str
    view: str

    def to_dict(self) -> dict:
        return asdict(self)


def household_result(household: Household) -> SearchResult:
    return SearchResult(
        type="household",
        id=household.id,
        title=f"Unit {household.unit}",
        subtitle=household.owner_name,
        view="households",
    )


def member_result(member: HouseholdMember) -> SearchResult:
    return SearchResult(
        type="member",
        id=member.id,
        title=member.name,
        subtitle=f"Unit {member.household.unit} • ID: {member.id_number}",
        view="demography",
    )


def parking_result(slot: ParkingSlot) -> SearchResult:
    owner = slot.household.owner_name if slot.household else "No owner"
    plate = slot.license_plate or "No plate"
    return SearchResult(
        type="parking",
        id=slot.id,
        title=f"Slot {slot.slot_number}",
        subtitle=f"{owner} • {plate}",
        view="parking",
    )


class SearchService:
    """Cross-entity search aggregator."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize with a session factory.

        Each branch opens its own session because one AsyncSession can not run
        statements concurrently.
        """
        self.session_factory = session_factory

    async def search(self, query: str | None) -> list[SearchResult]:
        """Search households, members and parking slots for ``query``.

        Args:
            query: Free text, matched as given; fewer than 2 characters returns
                no results

        Returns:
            Up to 10 results: households first, then members, then parking slots

        Raises:
            SearchUnavailableError: If all three lookups failed
        """
        query = query or ""
        if len(query) < MIN_QUERY_LENGTH:
            return []

        branches: list[tuple[str, Callable[[str], Awaitable[list[SearchResult]]]]] = [
            ("households", self._search_households),
            ("members", self._search_members),
            ("parking", self._search_parking),
        ]
        outcomes = await asyncio.gather(
            *(branch(query) for _, branch in branches),
            return_exceptions=True,
        )

        merged: list[SearchResult] = []
        failures = 0
        for (name, _), outcome in zip(branches, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                failures += 1
                logger.warning("search.%s failed: %s", name, outcome, exc_info=outcome)
                continue
            merged.extend(outcome)

        if failures == len(branches):
            logger.error("search: all %d lookups failed for query=%r", failures, query)
            raise SearchUnavailableError()

        logger.debug("search: query=%r results=%d failures=%d", query, len(merged), failures)
        return merged[:TOTAL_LIMIT]

    async def _search_households(self, query: str) -> list[SearchResult]:
        stmt = (
            select(Household)
            .where(
                icontains_any(
                    query, Household.unit, Household.owner_name, Household.email, Household.phone
                )
            )
            .order_by(Household.unit.asc())
            .limit(PER_SOURCE_LIMIT)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [household_result(h) for h in result.scalars().all()]

    async def _search_members(self, query: str) -> list[SearchResult]:
        stmt = (
            select(HouseholdMember)
            .where(icontains_any(query, HouseholdMember.name, HouseholdMember.id_number))
            .options(selectinload(HouseholdMember.household))
            .order_by(HouseholdMember.name.asc())
            .limit(PER_SOURCE_LIMIT)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [member_result(m) for m in result.scalars().all()]

    async def _search_parking(self, query: str) -> list[SearchResult]:
        stmt = (
            select(ParkingSlot)
            .where(icontains_any(query, ParkingSlot.slot_number, ParkingSlot.license_plate))
            .options(selectinload(ParkingSlot.household))
            .order_by(ParkingSlot.slot_number.asc())
            .limit(PER_SOURCE_LIMIT)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [parking_result(s) for s in result.scalars().all()]


__all__ = [
    "MIN_QUERY_LENGTH",
    "PER_SOURCE_LIMIT",
    "TOTAL_LIMIT",
    "SearchResult",
    "SearchService",
]
