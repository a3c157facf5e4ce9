"""Payment ORM model: a fee charged to a household."""

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bluemoon.models import Base, BaseModel
from bluemoon.models.billing import BillingStatus, billing_status_type


class Payment(Base, BaseModel):
    """
    A charge of one fee category against one household.

    Lifecycle: created pending with a due date, moved to overdue only by the
    overdue sweep, moved to paid only by an explicit recording that also sets
    paid_date.
    """

    __tablename__ = "payments"

    household_id: Mapped[int] = mapped_column(
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    fee_category_id: Mapped[int] = mapped_column(
        ForeignKey("fee_categories.id"),
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[BillingStatus] = mapped_column(
        billing_status_type(),
        nullable=False,
        default=BillingStatus.PENDING,
    )
    paid_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    payment_method: Mapped[str | None] = mapped_column(
        String(30),
        nullable=True,
        comment="cash, bank transfer, ... (set when paid)",
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    household: Mapped["Household"] = relationship(  # noqa: F821
        "Household",
        back_populates="payments",
    )
    fee_category: Mapped["FeeCategory"] = relationship(  # noqa: F821
        "FeeCategory",
        back_populates="payments",
    )

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_payment_amount_non_negative"),
        # The overdue sweep filters on exactly these two columns
        Index("idx_payment_status_due", "status", "due_date"),
        Index("idx_payment_household_status", "household_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Payment(id={self.id}, household_id={self.household_id}, amount={self.amount}, "
            f"due_date={self.due_date}, status={self.status})>"
        )


__all__ = ["Payment"]
