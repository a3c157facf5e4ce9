"""Integration tests for the overdue sweep against a real database."""

from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import select

from bluemoon.models import BillingStatus, Payment, UtilityBill
from bluemoon.services.overdue_sweep import OverdueSweepService, SweepKind, sweep_all

TODAY = date(2025, 6, 15)
YESTERDAY = TODAY - timedelta(days=1)


async def statuses(session_factory, model) -> dict[int, BillingStatus]:
    async with session_factory() as session:
        result = await session.execute(select(model.id, model.status))
        return dict(result.all())


class TestPaymentSweep:
    @pytest.mark.asyncio
    async def test_past_due_pending_payment_becomes_overdue(self, db_session, session_factory, seed):
        household = await seed.household()
        category = await seed.fee_category()
        stale = await seed.payment(household, category, due_date=YESTERDAY)

        result = await OverdueSweepService(db_session).sweep_payments(TODAY)

        assert result.count == 1
        assert result.message == "Updated 1 payments to overdue"
        assert (await statuses(session_factory, Payment))[stale.id] is BillingStatus.OVERDUE

    @pytest.mark.asyncio
    async def test_second_run_changes_nothing(self, db_session, session_factory, seed):
        household = await seed.household()
        category = await seed.fee_category()
        stale = await seed.payment(household, category, due_date=YESTERDAY)
        service = OverdueSweepService(db_session)

        await service.sweep_payments(TODAY)
        second = await service.sweep_payments(TODAY)

        assert second.count == 0
        assert (await statuses(session_factory, Payment))[stale.id] is BillingStatus.OVERDUE

    @pytest.mark.asyncio
    async def test_payment_due_today_stays_pending(self, db_session, session_factory, seed):
        household = await seed.household()
        category = await seed.fee_category()
        due_today = await seed.payment(household, category, due_date=TODAY)

        result = await OverdueSweepService(db_session).sweep_payments(
            datetime(2025, 6, 15, 23, 59)
        )

        assert result.count == 0
        assert result.today == TODAY
        assert (await statuses(session_factory, Payment))[due_today.id] is BillingStatus.PENDING

    @pytest.mark.asyncio
    async def test_paid_and_overdue_payments_are_untouched(self, db_session, session_factory, seed):
        household = await seed.household()
        category = await seed.fee_category()
        paid = await seed.payment(
            household, category, due_date=YESTERDAY, status=BillingStatus.PAID, paid_date=YESTERDAY
        )
        overdue = await seed.payment(household, category, due_date=YESTERDAY, status=BillingStatus.OVERDUE)

        result = await OverdueSweepService(db_session).sweep_payments(TODAY)

        assert result.count == 0
        current = await statuses(session_factory, Payment)
        assert current[paid.id] is BillingStatus.PAID
        assert current[overdue.id] is BillingStatus.OVERDUE

    @pytest.mark.asyncio
    async def test_payment_sweep_leaves_utility_bills_alone(self, db_session, session_factory, seed):
        household = await seed.household()
        bill = await seed.utility_bill(household, due_date=YESTERDAY)

        result = await OverdueSweepService(db_session).sweep_payments(TODAY)

        assert result.count == 0
        assert (await statuses(session_factory, UtilityBill))[bill.id] is BillingStatus.PENDING


class TestUtilitySweep:
    @pytest.mark.asyncio
    async def test_past_due_pending_bill_becomes_overdue(self, db_session, session_factory, seed):
        household = await seed.household()
        stale = await seed.utility_bill(household, due_date=YESTERDAY)
        current = await seed.utility_bill(household, due_date=TODAY)

        result = await OverdueSweepService(db_session).sweep_utility_bills(TODAY)

        assert result.count == 1
        assert result.message == "Updated 1 utility bills to overdue"
        now = await statuses(session_factory, UtilityBill)
        assert now[stale.id] is BillingStatus.OVERDUE
        assert now[current.id] is BillingStatus.PENDING

    @pytest.mark.asyncio
    async def test_sweep_by_kind_value(self, db_session, seed):
        household = await seed.household()
        await seed.utility_bill(household, due_date=YESTERDAY)

        result = await OverdueSweepService(db_session).sweep(SweepKind("utilities"), TODAY)

        assert result.kind is SweepKind.UTILITIES
        assert result.count == 1


class TestSweepAll:
    @pytest.mark.asyncio
    async def test_sweeps_both_tables(self, session_factory, seed):
        household = await seed.household()
        category = await seed.fee_category()
        await seed.payment(household, category, due_date=YESTERDAY)
        await seed.payment(household, category, due_date=YESTERDAY - timedelta(days=30))
        await seed.utility_bill(household, due_date=YESTERDAY)

        results = await sweep_all(session_factory, today=TODAY)

        assert [(r.kind, r.count) for r in results] == [
            (SweepKind.PAYMENTS, 2),
            (SweepKind.UTILITIES, 1),
        ]

    @pytest.mark.asyncio
    async def test_only_requested_kinds_run(self, session_factory, seed):
        household = await seed.household()
        bill = await seed.utility_bill(household, due_date=YESTERDAY)

        results = await sweep_all(session_factory, today=TODAY, kinds=(SweepKind.PAYMENTS,))

        assert [r.kind for r in results] == [SweepKind.PAYMENTS]
        assert (await statuses(session_factory, UtilityBill))[bill.id] is BillingStatus.PENDING
