"""Route sequence endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...schemas.routing import RouteOrderResponse, RouteStopModel, SuggestedOrderRequest
from ...services.assistant import request_route_order
from ...store import MilkRoundStore
from ..deps import get_store

router = APIRouter(prefix="/route", tags=["route"])


def _order_response(store: MilkRoundStore) -> RouteOrderResponse:
    return RouteOrderResponse(
        stops=[
            RouteStopModel(
                sequence=index,
                customer_id=customer.id,
                customer_name=customer.name,
                address=customer.address,
            )
            for index, customer in enumerate(store.sequencer.snapshot(), start=1)
        ]
    )


@router.get("", response_model=RouteOrderResponse, status_code=status.HTTP_200_OK)
async def get_route(store: MilkRoundStore = Depends(get_store)) -> RouteOrderResponse:
    return _order_response(store)


@router.post("/order", response_model=RouteOrderResponse, status_code=status.HTTP_200_OK)
async def set_route_order(
    payload: SuggestedOrderRequest, store: MilkRoundStore = Depends(get_store)
) -> RouteOrderResponse:
    store.apply_route_suggestion(payload.names)
    return _order_response(store)


@router.post("/optimize", response_model=RouteOrderResponse, status_code=status.HTTP_200_OK)
async def optimize_route(store: MilkRoundStore = Depends(get_store)) -> RouteOrderResponse:
    """Ask the assistant for a visiting order and merge it into the current one.

    Customers added or removed while the request is in flight are handled
    by the merge; a failed request leaves the order unchanged.
    """
    snapshot = store.sequencer.snapshot()
    names = await request_route_order(store.assistant, snapshot)
    store.apply_route_suggestion(names)
    return _order_response(store)
