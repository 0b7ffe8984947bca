"""Daily delivery endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import Shift
from ...schemas.deliveries import (
    DeliveryAdjustRequest,
    DeliveryDayResponse,
    DeliveryLogModel,
    DeliverySheetResponse,
    DeliveryToggleRequest,
)
from ...store import MilkRoundStore
from ..deps import get_store

router = APIRouter(prefix="/deliveries", tags=["deliveries"])


@router.get("", response_model=DeliveryDayResponse, status_code=status.HTTP_200_OK)
async def list_deliveries(
    day: date = Query(..., alias="date"),
    store: MilkRoundStore = Depends(get_store),
) -> DeliveryDayResponse:
    return DeliveryDayResponse(
        date=day,
        entries=[DeliveryLogModel.model_validate(entry) for entry in store.ledger.entries_for_date(day)],
        daily_total=store.ledger.daily_total(day),
    )


@router.get("/sheet", response_model=DeliverySheetResponse, status_code=status.HTTP_200_OK)
async def delivery_sheet(
    day: date = Query(..., alias="date"),
    shift: Shift = Query(default=Shift.MORNING),
    store: MilkRoundStore = Depends(get_store),
) -> DeliverySheetResponse:
    return DeliverySheetResponse.model_validate(store.delivery_sheet(day, shift))


@router.post("/toggle", response_model=DeliveryLogModel, status_code=status.HTTP_200_OK)
async def toggle_delivery(
    payload: DeliveryToggleRequest, store: MilkRoundStore = Depends(get_store)
) -> DeliveryLogModel:
    entry = store.toggle_delivery(payload.customer_id, payload.date, payload.shift)
    return DeliveryLogModel.model_validate(entry)


@router.post("/adjust", response_model=DeliveryLogModel, status_code=status.HTTP_200_OK)
async def adjust_delivery(
    payload: DeliveryAdjustRequest, store: MilkRoundStore = Depends(get_store)
) -> DeliveryLogModel:
    entry = store.adjust_delivery(payload.customer_id, payload.date, payload.delta, payload.shift)
    return DeliveryLogModel.model_validate(entry)


@router.get("/orphans", status_code=status.HTTP_200_OK)
async def orphaned_records(store: MilkRoundStore = Depends(get_store)) -> dict:
    """Deliveries and payments still referencing removed customers."""
    orphans = store.orphaned_entries()
    return {
        "deliveries": [DeliveryLogModel.model_validate(entry).model_dump(mode="json") for entry in orphans["deliveries"]],
        "payments": [
            {"id": payment.id, "customer_id": payment.customer_id, "amount": payment.amount}
            for payment in orphans["payments"]
        ],
    }
