"""Non-blocking collaborator requests with last-request-wins bookkeeping."""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ...models.domain import BillingMonth, Customer
from .base import (
    InsightSummarizer,
    MessageGenerator,
    RouteSuggester,
    business_insight,
    generate_bill_message,
    suggest_route_order,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MessageResult:
    customer_id: str
    ticket: int
    text: str
    superseded: bool


class MessageDesk:
    """Runs bill-message requests off the event loop.

    Each request for a customer gets a new ticket. A response whose ticket
    is no longer the customer's newest is returned marked ``superseded``
    and is not kept as the customer's latest message.
    """

    def __init__(self, generator: MessageGenerator) -> None:
        self.generator = generator
        self._tickets = itertools.count(1)
        self._newest: dict[str, int] = {}
        self._latest: dict[str, MessageResult] = {}

    def issue(self, customer_id: str) -> int:
        ticket = next(self._tickets)
        self._newest[customer_id] = ticket
        return ticket

    def settle(self, customer_id: str, ticket: int, text: str) -> MessageResult:
        superseded = self._newest.get(customer_id) != ticket
        result = MessageResult(customer_id=customer_id, ticket=ticket, text=text, superseded=superseded)
        if superseded:
            logger.info(f"Discarding stale bill message for {customer_id} (ticket {ticket})")
        else:
            self._latest[customer_id] = result
        return result

    def latest(self, customer_id: str) -> MessageResult | None:
        return self._latest.get(customer_id)

    async def request(
        self,
        customer: Customer,
        total_due: float,
        due_date: date,
        month: BillingMonth,
    ) -> MessageResult:
        ticket = self.issue(customer.id)
        text = await asyncio.to_thread(
            generate_bill_message, self.generator, customer, total_due, due_date, month
        )
        return self.settle(customer.id, ticket, text)


async def request_route_order(suggester: RouteSuggester, customers: Sequence[Customer]) -> list[str]:
    return await asyncio.to_thread(suggest_route_order, suggester, list(customers))


async def request_insight(
    summarizer: InsightSummarizer, total_quantity: float, total_revenue: float, customer_count: int
) -> str:
    return await asyncio.to_thread(business_insight, summarizer, total_quantity, total_revenue, customer_count)
