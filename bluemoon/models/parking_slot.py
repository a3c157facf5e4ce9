"""ParkingSlot ORM model."""

from decimal import Decimal
from enum import Enum

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bluemoon.models import Base, BaseModel


class VehicleType(str, Enum):
    """Vehicle class a slot is sized for."""

    CAR = "car"
    MOTORCYCLE = "motorcycle"
    BICYCLE = "bicycle"


class SlotStatus(str, Enum):
    """Whether the slot is assigned to a household."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"


class ParkingSlot(Base, BaseModel):
    """A numbered parking slot, optionally assigned to a household."""

    __tablename__ = "parking_slots"

    slot_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default=VehicleType.CAR.value)
    license_plate: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SlotStatus.AVAILABLE.value,
    )
    monthly_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))

    household_id: Mapped[int | None] = mapped_column(
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
        comment="Assigned household (null while the slot is available)",
    )
    household: Mapped["Household | None"] = relationship(  # noqa: F821
        "Household",
        back_populates="parking_slots",
    )

    def __repr__(self) -> str:
        return (
            f"<ParkingSlot(id={self.id}, slot_number={self.slot_number}, "
            f"license_plate={self.license_plate}, household_id={self.household_id})>"
        )


__all__ = ["ParkingSlot", "SlotStatus", "VehicleType"]
