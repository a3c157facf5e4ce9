"""Schemas for the statistics endpoint."""

from decimal import Decimal

from bluemoon.schemas.common import ApiModel


class StatusBreakdown(ApiModel):
    """Counts and amounts per billing status."""

    total: int
    pending: int
    overdue: int
    paid: int
    pending_amount: Decimal
    overdue_amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    collection_rate: int


class StatisticsResponse(ApiModel):
    total_households: int
    active_households: int
    total_residents: int
    payments: StatusBreakdown
    utilities: StatusBreakdown
