"""Integration tests for utility bill creation and recording."""

from datetime import date
from decimal import Decimal

import pytest

from bluemoon.errors import NotFoundError, ValidationError
from bluemoon.models import BillingStatus
from bluemoon.services.utility_service import UtilityBillService, UtilityCharges

TODAY = date(2025, 6, 10)


class TestCreateBill:
    @pytest.mark.asyncio
    async def test_costs_and_defaults(self, db_session, seed):
        household = await seed.household()

        bill = await UtilityBillService(db_session).create_bill(
            household.id,
            "June 2025",
            UtilityCharges(electricity_usage=200, water_usage=10, internet_cost="25"),
            today=TODAY,
        )

        assert bill.status is BillingStatus.PENDING
        assert bill.type == "combined"
        assert bill.period_start == date(2025, 6, 1)
        assert bill.period_end == date(2025, 6, 30)
        assert bill.due_date == date(2025, 7, 15)
        assert bill.electricity_cost == Decimal("30.00")
        assert bill.water_cost == Decimal("15.00")
        assert bill.total_amount == Decimal("70.00")
        assert bill.household.unit == "101"

    @pytest.mark.asyncio
    async def test_december_bill_is_due_in_january(self, db_session, seed):
        household = await seed.household()

        bill = await UtilityBillService(db_session).create_bill(
            household.id, "December 2025", today=date(2025, 12, 3)
        )

        assert bill.due_date == date(2026, 1, 15)
        assert bill.total_amount == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_inverted_period(self, db_session, seed):
        household = await seed.household()

        with pytest.raises(ValidationError, match="period_end"):
            await UtilityBillService(db_session).create_bill(
                household.id,
                "June 2025",
                period_start=date(2025, 6, 30),
                period_end=date(2025, 6, 1),
            )

    @pytest.mark.asyncio
    async def test_unknown_household(self, db_session):
        with pytest.raises(NotFoundError, match="Household not found"):
            await UtilityBillService(db_session).create_bill(999, "June 2025")


class TestUpdateBill:
    @pytest.mark.asyncio
    async def test_record_bill_as_paid(self, db_session, seed):
        household = await seed.household()
        pending = await seed.utility_bill(household, due_date=date(2025, 6, 15))

        bill = await UtilityBillService(db_session).update_bill(pending.id, status="paid", today=TODAY)

        assert bill.status is BillingStatus.PAID
        assert bill.paid_date == TODAY

    @pytest.mark.asyncio
    async def test_overdue_can_not_be_set_by_hand(self, db_session, seed):
        household = await seed.household()
        pending = await seed.utility_bill(household)

        with pytest.raises(ValidationError, match="overdue sweep"):
            await UtilityBillService(db_session).update_bill(pending.id, status="overdue")

    @pytest.mark.asyncio
    async def test_missing_bill(self, db_session):
        service = UtilityBillService(db_session)

        with pytest.raises(NotFoundError, match="Utility bill not found"):
            await service.update_bill(999, status="paid")
        with pytest.raises(NotFoundError, match="Utility bill not found"):
            await service.delete_bill(999)


class TestListBills:
    @pytest.mark.asyncio
    async def test_status_filter(self, db_session, seed):
        household = await seed.household()
        await seed.utility_bill(household, status=BillingStatus.PAID)
        overdue = await seed.utility_bill(
            household, due_date=date(2025, 5, 15), status=BillingStatus.OVERDUE
        )

        bills = await UtilityBillService(db_session).list_bills(status="overdue")

        assert [b.id for b in bills] == [overdue.id]


class TestCorrectTotal:
    @pytest.mark.asyncio
    async def test_total_can_be_corrected_to_zero(self, db_session, seed):
        household = await seed.household()
        pending = await seed.utility_bill(household, total_amount="42.00")

        bill = await UtilityBillService(db_session).update_bill(pending.id, total_amount="0")

        assert bill.total_amount == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_negative_total_is_rejected(self, db_session, seed):
        household = await seed.household()
        pending = await seed.utility_bill(household)

        with pytest.raises(ValidationError, match="total_amount must not be negative"):
            await UtilityBillService(db_session).update_bill(pending.id, total_amount="-1")
