"""Dashboard API schemas."""

from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel


class TrendPointModel(BaseModel):
    date: date
    litres: float


class DashboardResponse(BaseModel):
    date: date
    delivered_today: float
    revenue_today: float
    active_customers: int
    pending_collections: float
    last_seven_days: List[TrendPointModel]


class InsightResponse(BaseModel):
    date: date
    insight: str
