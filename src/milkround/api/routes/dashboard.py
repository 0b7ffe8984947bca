"""Dashboard endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from ...schemas.dashboard import DashboardResponse, InsightResponse
from ...services.assistant import request_insight
from ...store import MilkRoundStore
from ..deps import get_store

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
async def get_dashboard(
    day: date | None = Query(default=None, alias="date"),
    store: MilkRoundStore = Depends(get_store),
) -> DashboardResponse:
    return DashboardResponse(**store.dashboard(day or date.today()))


@router.post("/insight", response_model=InsightResponse, status_code=status.HTTP_200_OK)
async def get_insight(
    day: date | None = Query(default=None, alias="date"),
    store: MilkRoundStore = Depends(get_store),
) -> InsightResponse:
    stats = store.dashboard(day or date.today())
    insight = await request_insight(
        store.assistant,
        stats["delivered_today"],
        stats["revenue_today"],
        stats["active_customers"],
    )
    return InsightResponse(date=stats["date"], insight=insight)
