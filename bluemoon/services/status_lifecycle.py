"""Status lifecycle rules for billing records (payments and utility bills).

A billing record moves through three states::

    pending --(due date passed, overdue sweep)--> overdue
    pending | overdue --(explicit recording)--> paid

Paid is terminal and nothing ever moves a record back to pending. The only
automatic transition is pending -> overdue. Nothing here touches the
database; callers persist the result.
"""

import logging
from datetime import date, datetime
from typing import Any

from bluemoon.errors import ValidationError
from bluemoon.models.billing import BillingStatus

logger = logging.getLogger(__name__)


def start_of_day(moment: date | datetime | None = None) -> date:
    """Normalize a reference instant to its calendar day.

    Any time-of-day component is discarded so that ``due_date < today`` gives
    the same answer whichever hour the caller runs at.

    Args:
        moment: Reference date or datetime (default: now, local time)

    Returns:
        The calendar date of ``moment``
    """
    if moment is None:
        return datetime.now().date()
    if isinstance(moment, datetime):
        return moment.date()
    return moment


def parse_status(value: str | BillingStatus) -> BillingStatus:
    """Parse a status string from a request.

    Raises:
        ValidationError: If the value is not a known status
    """
    if isinstance(value, BillingStatus):
        return value
    try:
        return BillingStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in BillingStatus)
        raise ValidationError(f"Invalid status '{value}'. Expected one of: {allowed}") from None


def next_status(record: Any, as_of: date | datetime) -> BillingStatus:
    """Return the status a billing record should have at ``as_of``.

    ``pending`` becomes ``overdue`` once the due date is strictly before the
    reference day; every other status is returned unchanged.

    Args:
        record: Object with ``status`` and ``due_date`` attributes
        as_of: Reference instant (normalized to start of day)

    Returns:
        The current or advanced status
    """
    current = parse_status(record.status)
    if current is BillingStatus.PENDING and record.due_date < start_of_day(as_of):
        return BillingStatus.OVERDUE
    return current


def apply_status_change(
    record: Any,
    new_status: str | BillingStatus,
    on_date: date | datetime | None = None,
) -> bool:
    """Record an explicit status change on a billing record.

    Marking a record paid sets ``paid_date``. ``overdue`` can not be set by hand
    since only the overdue sweep produces it, and no record returns to pending.

    Args:
        record: Payment or UtilityBill instance
        new_status: Requested status
        on_date: Date the payment was received (default: today)

    Returns:
        True if the record changed, False for a no-op

    Raises:
        ValidationError: If the requested transition is not allowed
    """
    target = parse_status(new_status)
    current = parse_status(record.status)

    if target is current:
        return False

    if target is BillingStatus.OVERDUE:
        raise ValidationError("Status 'overdue' is set by the overdue sweep, not by hand")
    if target is BillingStatus.PENDING:
        raise ValidationError(f"A {current.value} record can not return to pending")

    record.status = BillingStatus.PAID
    record.paid_date = start_of_day(on_date)

    logger.debug(
        "status_change: %s id=%s %s -> %s",
        type(record).__name__,
        getattr(record, "id", None),
        current.value,
        target.value,
    )
    return True


__all__ = ["start_of_day", "parse_status", "next_status", "apply_status_change"]
