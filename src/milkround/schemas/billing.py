"""Billing and payment API schemas."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import PaymentMethod


class PaymentCreate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    customer_id: str
    date: date
    amount: float
    method: PaymentMethod = PaymentMethod.CASH
    settle: bool = Field(default=True, description="Reduce the customer's balance immediately.")


class PaymentModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    date: date
    amount: float
    method: PaymentMethod
    settled: bool = False


class BillModel(BaseModel):
    customer_id: str
    month: str
    quantity: float
    amount: float


class StatementResponse(BaseModel):
    customer_id: str
    customer_name: str
    bill: BillModel
    balance: float
    total_due: float
    due_date: date


class BillingLineModel(BaseModel):
    customer_id: str
    customer_name: str
    is_active: bool
    quantity: Optional[float] = None
    amount: Optional[float] = None
    total_due: Optional[float] = None
    error: Optional[str] = None


class BillingRunResponse(BaseModel):
    month: str
    due_date: date
    lines: List[BillingLineModel]
    total_amount: float


class BillMessageResponse(BaseModel):
    customer_id: str
    month: str
    message: str
    superseded: bool
