"""Delivery ledger keyed by customer, date and shift."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterator

from ...models.domain import BillingMonth, DeliveryLog, Shift

logger = logging.getLogger(__name__)

LedgerKey = tuple[str, date, Shift]


def _log_id(customer_id: str, day: date, shift: Shift) -> str:
    return f"log-{day.isoformat()}-{customer_id}-{shift.value.lower()}"


class DeliveryLedger:
    """Upsert log of per-day deliveries.

    Each ``(customer_id, date, shift)`` key maps to at most one entry. An
    entry moves between three states: absent, delivered and skipped
    (present with ``is_delivered=False``). Toggling flips delivered and
    skipped; adjusting quantity only ever creates delivered entries and
    never changes the flag of an existing one. Entries are never deleted.
    """

    def __init__(self) -> None:
        self._entries: dict[LedgerKey, DeliveryLog] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DeliveryLog]:
        return iter(list(self._entries.values()))

    def get_entry(self, customer_id: str, day: date, shift: Shift = Shift.MORNING) -> DeliveryLog | None:
        return self._entries.get((customer_id, day, Shift(shift)))

    def _create(self, customer_id: str, day: date, shift: Shift, quantity: float) -> DeliveryLog:
        entry = DeliveryLog(
            id=_log_id(customer_id, day, shift),
            customer_id=customer_id,
            date=day,
            quantity=quantity,
            is_delivered=True,
            shift=shift,
        )
        self._entries[entry.key] = entry
        return entry

    def toggle_delivered(
        self,
        customer_id: str,
        day: date,
        shift: Shift,
        default_quantity: float,
    ) -> DeliveryLog:
        shift = Shift(shift)
        entry = self._entries.get((customer_id, day, shift))
        if entry is None:
            entry = self._create(customer_id, day, shift, default_quantity)
            logger.debug("Created delivered entry %s (%.2f)", entry.id, entry.quantity)
            return entry
        entry.is_delivered = not entry.is_delivered
        logger.debug("Toggled %s to delivered=%s", entry.id, entry.is_delivered)
        return entry

    def adjust_quantity(
        self,
        customer_id: str,
        day: date,
        shift: Shift,
        delta: float,
        default_quantity: float,
    ) -> DeliveryLog:
        shift = Shift(shift)
        entry = self._entries.get((customer_id, day, shift))
        if entry is None:
            entry = self._create(customer_id, day, shift, max(0.0, default_quantity + delta))
            logger.debug("Created delivered entry %s via adjustment (%.2f)", entry.id, entry.quantity)
            return entry
        entry.quantity = max(0.0, entry.quantity + delta)
        logger.debug("Adjusted %s to %.2f", entry.id, entry.quantity)
        return entry

    def entries_for_date(self, day: date) -> list[DeliveryLog]:
        return [entry for entry in self._entries.values() if entry.date == day]

    def entries_for_range(self, customer_id: str, month: BillingMonth | str) -> list[DeliveryLog]:
        """Delivered entries of one customer within ``month``."""
        month = BillingMonth.parse(month)
        return [
            entry
            for entry in self._entries.values()
            if entry.customer_id == customer_id and entry.is_delivered and month.contains(entry.date)
        ]

    def entries_for_customer(self, customer_id: str) -> list[DeliveryLog]:
        return [entry for entry in self._entries.values() if entry.customer_id == customer_id]

    def daily_total(self, day: date) -> float:
        return sum(
            (entry.quantity for entry in self._entries.values() if entry.date == day and entry.is_delivered),
            0.0,
        )
