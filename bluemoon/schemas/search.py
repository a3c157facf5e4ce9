"""Schemas for the global search endpoint."""

from typing import Literal

from bluemoon.schemas.common import ApiModel


class SearchResultItem(ApiModel):
    type: Literal["household", "member", "parking"]
    id: int
    title: str
    subtitle: str
    view: Literal["households", "demography", "parking"]


class SearchResponse(ApiModel):
    results: list[SearchResultItem] = []
