"""Pytest configuration and shared fixtures.

Every test gets a fresh file-backed SQLite database under tmp_path so that
concurrent sessions (search fan-out) see the same committed data.
"""

import os

# Set test database URL BEFORE any imports from bluemoon
# so the module-level engine never touches a real database file
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from bluemoon.api.app import app  # noqa: E402
from bluemoon.models import (  # noqa: E402
    Base,
    BillingStatus,
    FeeCategory,
    Household,
    HouseholdMember,
    ParkingSlot,
    Payment,
    UtilityBill,
)
from bluemoon.services import get_async_session, get_session_factory  # noqa: E402


def store_down_error() -> OperationalError:
    """The error SQLAlchemy raises when the database can not be reached."""
    return OperationalError("SELECT 1", {}, Exception("database is unavailable"))


@pytest.fixture
def store_error():
    """Factory for database-unavailable errors, for use as a mock side effect."""
    return store_down_error


@pytest.fixture
async def engine(tmp_path):
    """Async engine bound to a fresh SQLite file with all tables created."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test_bluemoon.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Provide a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def broken_session():
    """An AsyncSession stand-in whose every statement fails like a lost connection."""
    session = AsyncMock(spec=AsyncSession)
    session.execute.side_effect = store_down_error()
    session.get.side_effect = store_down_error()
    session.scalar.side_effect = store_down_error()
    return session


@pytest.fixture
def broken_session_factory(broken_session):
    """Session factory handing out sessions that can not reach the database."""

    def factory():
        context = MagicMock()
        context.__aenter__.return_value = broken_session
        context.__aexit__.return_value = False
        return context

    return factory


@pytest.fixture
async def client(session_factory):
    """Provide an HTTP client for the app wired to the test database."""

    async def override_get_async_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client

    app.dependency_overrides.clear()


class Seeder:
    """Insert rows directly, bypassing the services under test."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _save(self, obj):
        self.session.add(obj)
        await self.session.commit()
        return obj

    async def household(self, unit: str = "101", owner_name: str = "Doctor Who", **fields) -> Household:
        fields.setdefault("phone", "0900000" + unit.zfill(3)[-3:])
        fields.setdefault("email", f"unit{unit}@bluemoon.test")
        return await self._save(Household(unit=unit, owner_name=owner_name, **fields))

    async def fee_category(
        self, name: str = "Management Fee", amount: Decimal = Decimal("150.00")
    ) -> FeeCategory:
        return await self._save(FeeCategory(name=name, amount=amount, frequency="monthly"))

    async def payment(
        self,
        household: Household,
        category: FeeCategory,
        amount: Decimal | str = "50.00",
        due_date: date | None = None,
        status: BillingStatus = BillingStatus.PENDING,
        paid_date: date | None = None,
    ) -> Payment:
        if status is BillingStatus.PAID and paid_date is None:
            paid_date = date.today()
        return await self._save(
            Payment(
                household_id=household.id,
                fee_category_id=category.id,
                amount=Decimal(str(amount)),
                due_date=due_date or date.today(),
                status=status,
                paid_date=paid_date,
            )
        )

    async def utility_bill(
        self,
        household: Household,
        total_amount: Decimal | str = "42.00",
        due_date: date | None = None,
        status: BillingStatus = BillingStatus.PENDING,
    ) -> UtilityBill:
        due = due_date or date.today()
        return await self._save(
            UtilityBill(
                household_id=household.id,
                month=due.strftime("%B %Y"),
                period_start=due.replace(day=1),
                period_end=due,
                due_date=due,
                total_amount=Decimal(str(total_amount)),
                status=status,
                paid_date=date.today() if status is BillingStatus.PAID else None,
            )
        )

    async def member(self, household: Household, name: str, id_number: str) -> HouseholdMember:
        return await self._save(
            HouseholdMember(household_id=household.id, name=name, id_number=id_number)
        )

    async def parking_slot(
        self,
        slot_number: str,
        license_plate: str | None = None,
        household: Household | None = None,
    ) -> ParkingSlot:
        return await self._save(
            ParkingSlot(
                slot_number=slot_number,
                license_plate=license_plate,
                household_id=household.id if household else None,
                status="occupied" if household else "available",
                monthly_fee=Decimal("20.00"),
            )
        )


@pytest.fixture
async def seed(session_factory):
    """Seeder on its own session, separate from the session under test."""
    async with session_factory() as session:
        yield Seeder(session)


@pytest.fixture
def store_down(client, broken_session):
    """Route every request session to a database that can not be reached."""

    async def override_get_async_session():
        yield broken_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    return broken_session
