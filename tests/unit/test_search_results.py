"""Unit tests for search result shaping and the short-query rule."""

from unittest.mock import MagicMock

import pytest

from bluemoon.models import Household, HouseholdMember, ParkingSlot
from bluemoon.services.search_service import (
    SearchService,
    household_result,
    member_result,
    parking_result,
)


class TestResultShapes:
    def test_household_result(self):
        household = Household(id=7, unit="101", owner_name="Doctor Who")
        result = household_result(household)
        assert result.to_dict() == {
            "type": "household",
            "id": 7,
            "title": "Unit 101",
            "subtitle": "Doctor Who",
            "view": "households",
        }

    def test_member_result_embeds_unit_and_document_number(self):
        member = HouseholdMember(id=3, name="Clara Oswald", id_number="001234567890")
        member.household = Household(id=7, unit="101", owner_name="Doctor Who")
        result = member_result(member)
        assert result.type == "member"
        assert result.title == "Clara Oswald"
        assert result.subtitle == "Unit 101 • ID: 001234567890"
        assert result.view == "demography"

    def test_parking_result_with_household(self):
        slot = ParkingSlot(id=4, slot_number="A-12", license_plate="101-XY")
        slot.household = Household(id=7, unit="101", owner_name="Doctor Who")
        result = parking_result(slot)
        assert result.title == "Slot A-12"
        assert result.subtitle == "Doctor Who • 101-XY"
        assert result.view == "parking"

    def test_parking_result_without_household_or_plate(self):
        slot = ParkingSlot(id=5, slot_number="B-01", license_plate=None)
        result = parking_result(slot)
        assert result.subtitle == "No owner • No plate"


class TestShortQueries:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "a", None, " "])
    async def test_short_query_returns_nothing_without_touching_the_store(self, query):
        session_factory = MagicMock()
        results = await SearchService(session_factory).search(query)
        assert results == []
        session_factory.assert_not_called()
