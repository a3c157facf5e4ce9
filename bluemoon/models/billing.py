"""Status space shared by every billing record (payments and utility bills)."""

from enum import Enum

from sqlalchemy import Enum as SAEnum


class BillingStatus(str, Enum):
    """Lifecycle status of a billing record."""

    PENDING = "pending"
    """Created and not yet due, or due and not yet swept"""

    OVERDUE = "overdue"
    """Past due date while still unpaid (set only by the overdue sweep)"""

    PAID = "paid"
    """Settled; paid_date is set"""


OUTSTANDING_STATUSES = (BillingStatus.PENDING, BillingStatus.OVERDUE)


def billing_status_type() -> SAEnum:
    """Column type storing BillingStatus by value ("pending", not "PENDING")."""
    return SAEnum(
        BillingStatus,
        name="billing_status",
        native_enum=False,
        length=20,
        values_callable=lambda enum_cls: [member.value for member in enum_cls],
    )


__all__ = ["BillingStatus", "OUTSTANDING_STATUSES", "billing_status_type"]
