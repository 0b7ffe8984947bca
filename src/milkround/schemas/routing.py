"""Route sequence API schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class RouteStopModel(BaseModel):
    sequence: int
    customer_id: str
    customer_name: str
    address: str


class RouteOrderResponse(BaseModel):
    stops: List[RouteStopModel]


class SuggestedOrderRequest(BaseModel):
    names: List[str] = Field(..., description="Customer display names in the desired visiting order.")
