"""Household ORM model: the aggregate root of the apartment back office."""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Date, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bluemoon.models import Base, BaseModel


class HouseholdStatus(str, Enum):
    """Occupancy status of a household."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Household(Base, BaseModel):
    """
    An apartment unit and the people, charges and parking attached to it.

    Members, payments, utility bills and parking slots belong to exactly one
    household and are deleted with it. The outstanding balance is never stored
    here; it is recomputed from the payments on every read.
    """

    __tablename__ = "households"

    unit: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        comment="Unit label, e.g. '101'",
    )
    owner_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=HouseholdStatus.ACTIVE.value,
        index=True,
    )
    area: Mapped[Decimal | None] = mapped_column(
        Numeric(8, 2),
        nullable=True,
        comment="Floor area in square meters",
    )
    floor: Mapped[int | None] = mapped_column(Integer, nullable=True)
    move_in_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships (cascade: the household owns these records)
    members: Mapped[list["HouseholdMember"]] = relationship(  # noqa: F821
        "HouseholdMember",
        back_populates="household",
        cascade="all, delete-orphan",
    )
    payments: Mapped[list["Payment"]] = relationship(  # noqa: F821
        "Payment",
        back_populates="household",
        cascade="all, delete-orphan",
        order_by="Payment.due_date.desc()",
    )
    utility_bills: Mapped[list["UtilityBill"]] = relationship(  # noqa: F821
        "UtilityBill",
        back_populates="household",
        cascade="all, delete-orphan",
        order_by="UtilityBill.due_date.desc()",
    )
    parking_slots: Mapped[list["ParkingSlot"]] = relationship(  # noqa: F821
        "ParkingSlot",
        back_populates="household",
        cascade="all",
    )

    __table_args__ = (Index("idx_household_owner_name", "owner_name"),)

    def __repr__(self) -> str:
        return f"<Household(id={self.id}, unit={self.unit}, owner_name={self.owner_name})>"


__all__ = ["Household", "HouseholdStatus"]
