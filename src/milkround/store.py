"""Top-level store owning every collection; all mutations go through it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from .config import settings
from .errors import ValidationError
from .models.domain import Bill, BillingMonth, Customer, DeliveryLog, Payment, PaymentMethod, Shift
from .services.assistant import GeminiClient, MessageDesk, NullAssistant
from .services.billing.engine import BillingEngine, BillingLine
from .services.billing.payments import PaymentBook
from .services.customers.registry import CustomerRegistry
from .services.dashboard import compute_dashboard
from .services.deliveries.ledger import DeliveryLedger
from .services.deliveries.sheet import DeliverySheet, build_delivery_sheet
from .services.routing.sequencer import RouteSequencer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MonthlyStatement:
    customer: Customer
    bill: Bill
    total_due: float
    due_date: date


def build_assistant() -> Any:
    """Gemini when an API key is configured, otherwise a collaborator that always fails."""
    if not settings.gemini_api_key:
        logger.info("Gemini API key not configured; text features will use fallbacks")
        return NullAssistant()
    return GeminiClient()


class MilkRoundStore:
    def __init__(self, assistant: Any | None = None) -> None:
        self.registry = CustomerRegistry()
        self.ledger = DeliveryLedger()
        self.payments = PaymentBook()
        self.billing = BillingEngine(self.ledger)
        self.sequencer = RouteSequencer(self.registry)
        self.assistant = assistant if assistant is not None else build_assistant()
        self.messages = MessageDesk(self.assistant)

    # Customers

    def add_customer(self, **fields: Any) -> Customer:
        customer = self.registry.add(**fields)
        self.sequencer.sync()
        return customer

    def edit_customer(self, customer_id: str, patch: Mapping[str, Any]) -> Customer:
        return self.registry.edit(customer_id, patch)

    def remove_customer(self, customer_id: str, *, confirm: bool = False) -> Customer:
        customer = self.registry.remove(customer_id, confirm=confirm)
        self.sequencer.sync()
        return customer

    # Deliveries

    def toggle_delivery(self, customer_id: str, day: date, shift: Shift | str = Shift.MORNING) -> DeliveryLog:
        customer = self.registry.get(customer_id)
        return self.ledger.toggle_delivered(customer.id, day, Shift(shift), customer.default_quantity)

    def adjust_delivery(
        self, customer_id: str, day: date, delta: float, shift: Shift | str = Shift.MORNING
    ) -> DeliveryLog:
        customer = self.registry.get(customer_id)
        return self.ledger.adjust_quantity(customer.id, day, Shift(shift), delta, customer.default_quantity)

    def delivery_sheet(self, day: date, shift: Shift | str = Shift.MORNING) -> DeliverySheet:
        return build_delivery_sheet(self.registry, self.ledger, self.sequencer, day, Shift(shift))

    # Payments and billing

    def receive_payment(
        self,
        customer_id: str,
        day: date,
        amount: float,
        method: PaymentMethod | str = PaymentMethod.CASH,
        *,
        settle: bool = True,
    ) -> Payment:
        customer = self.registry.get(customer_id)
        payment = self.payments.record(customer.id, day, amount, method)
        if settle:
            self.payments.mark_settled(payment.id)
            self.billing.apply_payment(customer, payment)
        return payment

    def settle_payment(self, payment_id: str) -> Customer:
        """Apply a previously recorded, unsettled payment to its customer's balance."""
        payment = self.payments.get(payment_id)
        customer = self.registry.get(payment.customer_id)
        if self.payments.is_settled(payment.id):
            raise ValidationError(f"Payment '{payment_id}' has already been settled.")
        self.billing.apply_payment(customer, payment)
        self.payments.mark_settled(payment.id)
        return customer

    def monthly_statement(self, customer_id: str, month: BillingMonth | str) -> MonthlyStatement:
        customer = self.registry.get(customer_id)
        month = BillingMonth.parse(month)
        bill = self.billing.compute_monthly_bill(customer, month)
        due_date = self.billing.due_date_for(month)
        return MonthlyStatement(
            customer=customer,
            bill=bill,
            total_due=self.billing.compute_total_due(bill, customer, due_date),
            due_date=due_date,
        )

    def billing_run(self, month: BillingMonth | str) -> list[BillingLine]:
        return self.billing.run_month(self.registry.all(), month)

    # Route

    def apply_route_suggestion(self, names: list[str]) -> list[str]:
        return self.sequencer.apply_suggested_order(names)

    # Reporting

    def dashboard(self, today: date) -> dict[str, Any]:
        return compute_dashboard(self.registry, self.ledger, today)

    def orphaned_entries(self) -> dict[str, list]:
        """Ledger entries and payments whose customer has been removed."""
        return {
            "deliveries": [entry for entry in self.ledger if entry.customer_id not in self.registry],
            "payments": [payment for payment in self.payments.all() if payment.customer_id not in self.registry],
        }
