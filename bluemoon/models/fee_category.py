"""FeeCategory ORM model for recurring fees charged to households."""

from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bluemoon.models import Base, BaseModel


class FeeFrequency(str, Enum):
    """How often a fee category is charged."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    ONE_TIME = "one-time"


class FeeCategory(Base, BaseModel):
    """A named recurring fee (management fee, service fee, maintenance fund)."""

    __tablename__ = "fee_categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Default amount charged per household",
    )
    frequency: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=FeeFrequency.MONTHLY.value,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    payments: Mapped[list["Payment"]] = relationship(  # noqa: F821
        "Payment",
        back_populates="fee_category",
    )

    def __repr__(self) -> str:
        return f"<FeeCategory(id={self.id}, name={self.name}, amount={self.amount})>"


__all__ = ["FeeCategory", "FeeFrequency"]
