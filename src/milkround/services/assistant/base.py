"""Collaborator interfaces and their mandatory fallbacks."""

from __future__ import annotations

import logging
from datetime import date
from typing import Protocol, Sequence

from ...config import settings
from ...errors import ExternalServiceError
from ...models.domain import BillingMonth, Customer

logger = logging.getLogger(__name__)

BILL_MESSAGE_TEMPLATE = "Hello {name}, your bill for {month} is {amount}. Please pay by {due_date}. Thanks!"


class MessageGenerator(Protocol):
    def generate_message(
        self, customer: Customer, total_due: float, due_date: date, month: BillingMonth
    ) -> str: ...


class RouteSuggester(Protocol):
    def suggest_order(self, customers: Sequence[Customer]) -> list[str]: ...


class InsightSummarizer(Protocol):
    def summarize(self, total_quantity: float, total_revenue: float, customer_count: int) -> str: ...


class NullAssistant:
    """Collaborator used when no text service is configured; every call fails."""

    def generate_message(self, customer, total_due, due_date, month) -> str:
        raise ExternalServiceError("No text generation service configured.")

    def suggest_order(self, customers) -> list[str]:
        raise ExternalServiceError("No route suggestion service configured.")

    def summarize(self, total_quantity, total_revenue, customer_count) -> str:
        raise ExternalServiceError("No insight service configured.")


def format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}"


def fallback_bill_message(customer: Customer, total_due: float, due_date: date, month: BillingMonth | str) -> str:
    return BILL_MESSAGE_TEMPLATE.format(
        name=customer.name,
        month=str(month),
        amount=format_amount(total_due),
        due_date=due_date.isoformat(),
    )


def generate_bill_message(
    generator: MessageGenerator,
    customer: Customer,
    total_due: float,
    due_date: date,
    month: BillingMonth | str,
) -> str:
    """Ask the collaborator for a bill message, falling back to the fixed template."""
    month = BillingMonth.parse(month)
    try:
        text = generator.generate_message(customer, total_due, due_date, month)
    except Exception as exc:
        logger.warning(f"Bill message generation failed for {customer.id}: {exc}. Using template.")
        return fallback_bill_message(customer, total_due, due_date, month)
    if not isinstance(text, str) or not text.strip():
        logger.warning(f"Empty bill message for {customer.id}. Using template.")
        return fallback_bill_message(customer, total_due, due_date, month)
    return text.strip()


def suggest_route_order(suggester: RouteSuggester, customers: Sequence[Customer]) -> list[str]:
    """Ask the collaborator for a visiting order; on failure keep the current one."""
    current = [customer.name for customer in customers]
    try:
        names = suggester.suggest_order(list(customers))
    except Exception as exc:
        logger.warning(f"Route suggestion failed: {exc}. Keeping current order.")
        return current
    if not isinstance(names, (list, tuple)) or not all(isinstance(name, str) for name in names):
        logger.warning("Route suggestion returned an unusable payload. Keeping current order.")
        return current
    return list(names)


def business_insight(
    summarizer: InsightSummarizer,
    total_quantity: float,
    total_revenue: float,
    customer_count: int,
) -> str:
    try:
        text = summarizer.summarize(total_quantity, total_revenue, customer_count)
    except Exception as exc:
        logger.warning(f"Insight generation failed: {exc}. Using placeholder.")
        return settings.insight_placeholder
    if not isinstance(text, str) or not text.strip():
        return settings.insight_placeholder
    return text.strip()
