"""UtilityBill ORM model for metered electricity, water and internet charges."""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bluemoon.models import Base, BaseModel
from bluemoon.models.billing import BillingStatus, billing_status_type


class UtilityType(str, Enum):
    """What a utility bill covers."""

    ELECTRICITY = "electricity"
    WATER = "water"
    INTERNET = "internet"
    COMBINED = "combined"
    """Electricity, water and internet on one bill"""


class UtilityBill(Base, BaseModel):
    """
    Monthly utility bill for a household.

    Follows the same status lifecycle as Payment with its own state per bill.
    Costs are kept as a breakdown (usage x rate per meter plus a flat internet
    charge) and total_amount is the amount due.
    """

    __tablename__ = "utility_bills"

    household_id: Mapped[int] = mapped_column(
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UtilityType.COMBINED.value,
    )
    month: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        comment="Billing period label, e.g. 'December 2025'",
    )
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)

    electricity_usage: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    electricity_rate: Mapped[Decimal] = mapped_column(Numeric(10, 4), default=Decimal("0.15"), nullable=False)
    electricity_cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    water_usage: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    water_rate: Mapped[Decimal] = mapped_column(Numeric(10, 4), default=Decimal("1.5"), nullable=False)
    water_cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    internet_cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"), nullable=False)

    status: Mapped[BillingStatus] = mapped_column(
        billing_status_type(),
        nullable=False,
        default=BillingStatus.PENDING,
    )
    paid_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    household: Mapped["Household"] = relationship(  # noqa: F821
        "Household",
        back_populates="utility_bills",
    )

    __table_args__ = (
        Index("idx_utility_status_due", "status", "due_date"),
        Index("idx_utility_household_status", "household_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<UtilityBill(id={self.id}, household_id={self.household_id}, month={self.month}, "
            f"total_amount={self.total_amount}, status={self.status})>"
        )


__all__ = ["UtilityBill", "UtilityType"]
