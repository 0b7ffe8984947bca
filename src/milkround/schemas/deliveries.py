"""Delivery ledger API schemas."""

from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import Shift
from .customers import CustomerModel


class DeliveryToggleRequest(BaseModel):
    customer_id: str
    date: date
    shift: Shift = Shift.MORNING


class DeliveryAdjustRequest(BaseModel):
    customer_id: str
    date: date
    shift: Shift = Shift.MORNING
    delta: float = Field(..., description="Litres to add (negative to remove). The result never drops below zero.")


class DeliveryLogModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    date: date
    quantity: float
    is_delivered: bool
    shift: Shift


class DeliveryDayResponse(BaseModel):
    date: date
    entries: List[DeliveryLogModel]
    daily_total: float


class SheetRowModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sequence: int
    customer: CustomerModel
    quantity: float
    is_delivered: bool
    has_entry: bool


class DeliverySheetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    shift: Shift
    rows: List[SheetRowModel]
    daily_total: float
