"""Customer registry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from ...schemas.customers import CustomerCreate, CustomerListResponse, CustomerModel, CustomerUpdate
from ...store import MilkRoundStore
from ..deps import get_store

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=CustomerListResponse, status_code=status.HTTP_200_OK)
async def list_customers(
    q: str | None = Query(default=None, description="Case-insensitive match on name, mobile or address"),
    store: MilkRoundStore = Depends(get_store),
) -> CustomerListResponse:
    customers = store.registry.search(q or "")
    return CustomerListResponse(
        items=[CustomerModel.model_validate(customer) for customer in customers],
        total=len(customers),
    )


@router.post("", response_model=CustomerModel, status_code=status.HTTP_201_CREATED)
async def create_customer(payload: CustomerCreate, store: MilkRoundStore = Depends(get_store)) -> CustomerModel:
    customer = store.add_customer(**payload.model_dump())
    return CustomerModel.model_validate(customer)


@router.get("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
async def get_customer(customer_id: str, store: MilkRoundStore = Depends(get_store)) -> CustomerModel:
    return CustomerModel.model_validate(store.registry.get(customer_id))


@router.patch("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
async def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    store: MilkRoundStore = Depends(get_store),
) -> CustomerModel:
    customer = store.edit_customer(customer_id, payload.model_dump(exclude_unset=True))
    return CustomerModel.model_validate(customer)


@router.delete("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
async def delete_customer(
    customer_id: str,
    confirm: bool = Query(default=False, description="Must be true to delete the customer"),
    store: MilkRoundStore = Depends(get_store),
) -> CustomerModel:
    """Delete a customer. Their deliveries and payments are kept."""
    return CustomerModel.model_validate(store.remove_customer(customer_id, confirm=confirm))
