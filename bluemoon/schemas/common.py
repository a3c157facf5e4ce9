"""Shared schema base and small response bodies."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python, readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(ApiModel):
    """Plain confirmation message."""

    message: str


class CountResponse(ApiModel):
    """Result of a bulk operation (overdue sweep, monthly generation)."""

    message: str
    count: int = Field(..., ge=0)


class HouseholdRef(ApiModel):
    """Compact household reference embedded in billing records."""

    id: int
    unit: str
    owner_name: str
