"""Shared filter helpers for list and search queries."""

from typing import Any

from sqlalchemy import Select, or_
from sqlalchemy.sql.elements import ColumnElement

from bluemoon.models.billing import BillingStatus
from bluemoon.services.status_lifecycle import parse_status

# Query-string value meaning "no filter" in list endpoints
ALL = "all"


def status_filter(value: str | None) -> BillingStatus | None:
    """Parse an optional ``status`` query parameter.

    Empty and ``"all"`` mean no filter.

    Raises:
        ValidationError: If the value is not a known status
    """
    if value is None or not value.strip() or value.strip().lower() == ALL:
        return None
    return parse_status(value)


def plain_filter(value: str | None) -> str | None:
    """Normalize an optional string filter (``status=all`` for households, slot type, ...)."""
    if value is None or not value.strip() or value.strip().lower() == ALL:
        return None
    return value.strip()


def apply_equals(stmt: Select, filters: dict[Any, Any]) -> Select:
    """Add ``column == value`` conditions for every filter whose value is not None."""
    for column, value in filters.items():
        if value is not None:
            stmt = stmt.where(column == value)
    return stmt


def icontains_any(query: str, *columns: Any) -> ColumnElement[bool]:
    """Case-insensitive substring match of ``query`` against any of ``columns``.

    LIKE wildcards in the query are escaped so they match literally.
    """
    if not columns:
        raise ValueError("icontains_any needs at least one column")
    return or_(*(column.icontains(query, autoescape=True) for column in columns))


__all__ = [
    "ALL",
    "status_filter",
    "plain_filter",
    "apply_equals",
    "icontains_any",
]
