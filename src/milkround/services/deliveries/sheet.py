"""Daily delivery sheet: the round in visiting order with the day's entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

from ...models.domain import Customer, Shift
from ..customers.registry import CustomerRegistry
from ..routing.sequencer import RouteSequencer
from .ledger import DeliveryLedger


@dataclass(slots=True)
class SheetRow:
    sequence: int
    customer: Customer
    quantity: float
    is_delivered: bool
    has_entry: bool


@dataclass(slots=True)
class DeliverySheet:
    date: date
    shift: Shift
    rows: List[SheetRow]
    daily_total: float


def build_delivery_sheet(
    registry: CustomerRegistry,
    ledger: DeliveryLedger,
    sequencer: RouteSequencer,
    day: date,
    shift: Shift = Shift.MORNING,
) -> DeliverySheet:
    shift = Shift(shift)
    rows: list[SheetRow] = []
    for index, customer_id in enumerate(sequencer.visible_order(), start=1):
        customer = registry.get(customer_id)
        entry = ledger.get_entry(customer_id, day, shift)
        rows.append(
            SheetRow(
                sequence=index,
                customer=customer,
                quantity=entry.quantity if entry else customer.default_quantity,
                is_delivered=entry.is_delivered if entry else False,
                has_entry=entry is not None,
            )
        )
    return DeliverySheet(date=day, shift=shift, rows=rows, daily_total=ledger.daily_total(day))
