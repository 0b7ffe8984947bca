"""Customer API schemas."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..models.domain import SubscriptionType


class CustomerCreate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    address: str
    mobile: str
    default_quantity: float
    price_per_litre: float
    balance: float = 0.0
    is_active: bool = True
    subscription_type: SubscriptionType = SubscriptionType.DAILY
    coordinates: Optional[Tuple[float, float]] = None


class CustomerUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied.

    Balance is not editable; it moves only through payments.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    name: Optional[str] = None
    address: Optional[str] = None
    mobile: Optional[str] = None
    default_quantity: Optional[float] = None
    price_per_litre: Optional[float] = None
    is_active: Optional[bool] = None
    subscription_type: Optional[SubscriptionType] = None
    coordinates: Optional[Tuple[float, float]] = None


class CustomerModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    address: str
    mobile: str
    default_quantity: float
    price_per_litre: float
    balance: float
    is_active: bool
    subscription_type: SubscriptionType
    coordinates: Optional[Tuple[float, float]] = None


class CustomerListResponse(BaseModel):
    items: List[CustomerModel]
    total: int
