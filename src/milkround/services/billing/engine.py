"""Monthly bill derivation and balance settlement."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ...config import settings
from ...errors import InvalidRateError, ValidationError
from ...models.domain import Bill, BillingMonth, Customer, Payment
from ..deliveries.ledger import DeliveryLedger

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BillingLine:
    """One customer's row in a monthly billing run."""

    customer: Customer
    month: BillingMonth
    bill: Optional[Bill]
    total_due: Optional[float]
    due_date: date
    error: Optional[str] = None


class BillingEngine:
    """Derives bills from the ledger at the customer's current rate.

    Nothing is cached: every call re-reads the ledger.
    """

    def __init__(self, ledger: DeliveryLedger, *, due_day: int | None = None) -> None:
        self.ledger = ledger
        self.due_day = due_day if due_day is not None else settings.due_day_of_month

    def compute_monthly_bill(self, customer: Customer, month: BillingMonth | str) -> Bill:
        month = BillingMonth.parse(month)
        if not (math.isfinite(customer.price_per_litre) and customer.price_per_litre > 0):
            raise InvalidRateError(customer.id, customer.price_per_litre)
        entries = self.ledger.entries_for_range(customer.id, month)
        quantity = sum((entry.quantity for entry in entries), 0.0)
        return Bill(
            customer_id=customer.id,
            month=month,
            quantity=quantity,
            amount=quantity * customer.price_per_litre,
        )

    def compute_total_due(self, bill: Bill, customer: Customer, due_date: date | None = None) -> float:
        """Current charge plus any amount already owed.

        Advances (negative balances) are not netted against the charge.
        ``due_date`` is accepted for the message collaborator and does not
        affect the figure.
        """
        return bill.amount + max(customer.balance, 0.0)

    def due_date_for(self, month: BillingMonth | str) -> date:
        following = BillingMonth.parse(month).following()
        return date(following.year, following.month, self.due_day)

    def apply_payment(self, customer: Customer, payment: Payment) -> Customer:
        """Reduce the balance by the payment; it may go negative (an advance)."""
        if payment.customer_id != customer.id:
            raise ValidationError(
                f"Payment {payment.id} belongs to '{payment.customer_id}', not '{customer.id}'."
            )
        if not (math.isfinite(payment.amount) and payment.amount > 0):
            raise ValidationError(f"Payment amount must be positive, got {payment.amount!r}.")
        customer.balance -= payment.amount
        logger.info(
            "Applied payment %s to %s; balance now %.2f", payment.id, customer.id, customer.balance
        )
        return customer

    def run_month(self, customers: Iterable[Customer], month: BillingMonth | str) -> list[BillingLine]:
        """Bill every customer for ``month``; a bad rate only fails its own line."""
        month = BillingMonth.parse(month)
        due_date = self.due_date_for(month)
        lines: list[BillingLine] = []
        for customer in customers:
            try:
                bill = self.compute_monthly_bill(customer, month)
            except InvalidRateError as exc:
                logger.warning("Skipping bill for %s: %s", customer.id, exc)
                lines.append(
                    BillingLine(
                        customer=customer,
                        month=month,
                        bill=None,
                        total_due=None,
                        due_date=due_date,
                        error=str(exc),
                    )
                )
                continue
            lines.append(
                BillingLine(
                    customer=customer,
                    month=month,
                    bill=bill,
                    total_due=self.compute_total_due(bill, customer, due_date),
                    due_date=due_date,
                )
            )
        return lines
