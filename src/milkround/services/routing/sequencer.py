"""Visiting order of customers on the round."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import Customer
from ..customers.registry import CustomerRegistry

logger = logging.getLogger(__name__)


class RouteSequencer:
    """Ordered list of customer ids, starting from registry order.

    The sequence may hold inactive ids; they are hidden from
    ``visible_order`` but keep their place in case the customer returns.
    """

    def __init__(self, registry: CustomerRegistry) -> None:
        self.registry = registry
        self._order: list[str] = [customer.id for customer in registry]

    def sync(self) -> list[str]:
        """Drop ids no longer registered and append newly registered ones."""
        known = {customer.id for customer in self.registry}
        order = [cid for cid in self._order if cid in known]
        seen = set(order)
        order.extend(customer.id for customer in self.registry if customer.id not in seen)
        self._order = order
        return list(self._order)

    def order(self) -> list[str]:
        return self.sync()

    def visible_order(self) -> list[str]:
        self.sync()
        return [cid for cid in self._order if self.registry.get(cid).is_active]

    def snapshot(self) -> list[Customer]:
        """Active customers in visible order, as sent to a suggestion service."""
        return [self.registry.get(cid) for cid in self.visible_order()]

    def apply_suggested_order(self, names: Sequence[str]) -> list[str]:
        """Reorder active customers by display name.

        A name shared by several active customers means the one registered
        first. Unknown and repeated names are ignored; active customers the
        suggestion leaves out follow in their previous relative order.
        Inactive ids go last, in their previous relative order. The set of
        ids is unchanged.
        """
        self.sync()
        active_ids = [cid for cid in self._order if self.registry.get(cid).is_active]
        active_set = set(active_ids)
        inactive_ids = [cid for cid in self._order if cid not in active_set]

        name_to_id: dict[str, str] = {}
        for customer in self.registry.active():
            name_to_id.setdefault(customer.name, customer.id)

        placed: list[str] = []
        placed_set: set[str] = set()
        dropped = 0
        for name in names:
            cid = name_to_id.get(name) if isinstance(name, str) else None
            if cid is None:
                dropped += 1
                continue
            if cid in placed_set:
                continue
            placed.append(cid)
            placed_set.add(cid)

        remainder = [cid for cid in active_ids if cid not in placed_set]
        if dropped:
            logger.info("Ignored %d unknown names in suggested order", dropped)
        if remainder:
            logger.debug("Appending %d customers missing from suggested order", len(remainder))

        self._order = placed + remainder + inactive_ids
        return self.visible_order()
