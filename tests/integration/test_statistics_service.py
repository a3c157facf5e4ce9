"""Integration tests for dashboard statistics."""

from datetime import date
from decimal import Decimal

import pytest

from bluemoon.models import BillingStatus
from bluemoon.services.statistics_service import StatisticsService


class TestOverview:
    @pytest.mark.asyncio
    async def test_empty_database(self, db_session):
        overview = await StatisticsService(db_session).get_overview()

        assert overview.total_households == 0
        assert overview.payments.total_count == 0
        assert overview.payments.collection_rate == 0
        assert overview.utilities.outstanding == Decimal("0")

    @pytest.mark.asyncio
    async def test_totals_by_status(self, db_session, seed):
        household = await seed.household(unit="101")
        await seed.household(unit="202", status="inactive")
        await seed.member(household, "Amy Pond", "ID-001")
        category = await seed.fee_category()
        await seed.payment(household, category, amount="50.00")
        await seed.payment(
            household, category, amount="20.00", due_date=date(2025, 1, 31), status=BillingStatus.OVERDUE
        )
        await seed.payment(household, category, amount="30.00", status=BillingStatus.PAID)
        await seed.utility_bill(household, total_amount="42.00", status=BillingStatus.PAID)

        overview = await StatisticsService(db_session).get_overview()

        assert overview.total_households == 2
        assert overview.active_households == 1
        assert overview.total_residents == 1
        assert overview.payments.counts == {"pending": 1, "overdue": 1, "paid": 1}
        assert overview.payments.amounts["paid"] == Decimal("30.00")
        assert overview.payments.outstanding == Decimal("70.00")
        assert overview.payments.collection_rate == 33
        assert overview.utilities.collection_rate == 100
