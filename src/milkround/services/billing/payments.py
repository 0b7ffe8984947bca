"""Record of money received from customers."""

from __future__ import annotations

import logging
import math
import uuid
from datetime import date

from ...errors import NotFoundError, ValidationError
from ...models.domain import BillingMonth, Payment, PaymentMethod

logger = logging.getLogger(__name__)


class PaymentBook:
    """Append-only list of payments.

    Recording a payment does not touch the customer's balance; settlement is
    a separate step (see ``BillingEngine.apply_payment``).
    """

    def __init__(self) -> None:
        self._payments: list[Payment] = []
        self._settled: set[str] = set()

    def __len__(self) -> int:
        return len(self._payments)

    def record(
        self,
        customer_id: str,
        day: date,
        amount: float,
        method: PaymentMethod | str = PaymentMethod.CASH,
    ) -> Payment:
        if (
            isinstance(amount, bool)
            or not isinstance(amount, (int, float))
            or not (math.isfinite(amount) and amount > 0)
        ):
            raise ValidationError(f"Payment amount must be positive, got {amount!r}.")
        try:
            method = PaymentMethod(method)
        except ValueError as exc:
            raise ValidationError(f"Unknown payment method {method!r}.") from exc
        payment = Payment(
            id=f"p-{uuid.uuid4().hex[:12]}",
            customer_id=customer_id,
            date=day,
            amount=amount,
            method=method,
        )
        self._payments.append(payment)
        logger.info("Recorded %s payment %s of %.2f for %s", method.value, payment.id, amount, customer_id)
        return payment

    def get(self, payment_id: str) -> Payment:
        for payment in self._payments:
            if payment.id == payment_id:
                return payment
        raise NotFoundError(f"Payment '{payment_id}' not found.")

    def mark_settled(self, payment_id: str) -> None:
        if payment_id in self._settled:
            raise ValidationError(f"Payment '{payment_id}' has already been settled.")
        self._settled.add(payment_id)

    def is_settled(self, payment_id: str) -> bool:
        return payment_id in self._settled

    def all(self) -> list[Payment]:
        return list(self._payments)

    def for_customer(self, customer_id: str) -> list[Payment]:
        return [payment for payment in self._payments if payment.customer_id == customer_id]

    def for_month(self, month: BillingMonth | str) -> list[Payment]:
        month = BillingMonth.parse(month)
        return [payment for payment in self._payments if month.contains(payment.date)]
