"""Customer registry: the single owner of customer records."""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import fields, replace
from typing import Any, Iterator, Mapping

from ...errors import NotFoundError, ValidationError
from ...models.domain import Customer, SubscriptionType

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("name", "address", "mobile")
_POSITIVE_FIELDS = ("default_quantity", "price_per_litre")
_EDITABLE_FIELDS = frozenset(field.name for field in fields(Customer)) - {"id", "balance"}


def _new_customer_id() -> str:
    return f"c-{uuid.uuid4().hex[:12]}"


def validate_customer(customer: Customer) -> None:
    """Raise ``ValidationError`` if the record breaks a registry invariant."""
    for name in _TEXT_FIELDS:
        value = getattr(customer, name)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"Customer {name} must not be empty.")
    for name in _POSITIVE_FIELDS:
        value = getattr(customer, name)
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or not (math.isfinite(value) and value > 0)
        ):
            raise ValidationError(f"Customer {name} must be a positive number, got {value!r}.")
    if (
        isinstance(customer.balance, bool)
        or not isinstance(customer.balance, (int, float))
        or not math.isfinite(customer.balance)
    ):
        raise ValidationError(f"Customer balance must be a number, got {customer.balance!r}.")
    if not isinstance(customer.is_active, bool):
        raise ValidationError(f"Customer is_active must be true or false, got {customer.is_active!r}.")
    if not isinstance(customer.subscription_type, SubscriptionType):
        raise ValidationError(f"Unknown subscription type {customer.subscription_type!r}.")


class CustomerRegistry:
    """Ordered set of customers keyed by id.

    Iteration and search follow insertion order.
    """

    def __init__(self) -> None:
        self._customers: dict[str, Customer] = {}

    def __len__(self) -> int:
        return len(self._customers)

    def __iter__(self) -> Iterator[Customer]:
        return iter(list(self._customers.values()))

    def __contains__(self, customer_id: object) -> bool:
        return customer_id in self._customers

    def add(
        self,
        *,
        name: str,
        address: str,
        mobile: str,
        default_quantity: float,
        price_per_litre: float,
        balance: float = 0.0,
        is_active: bool = True,
        subscription_type: SubscriptionType | str = SubscriptionType.DAILY,
        coordinates: tuple[float, float] | None = None,
    ) -> Customer:
        customer = Customer(
            id=_new_customer_id(),
            name=name.strip() if isinstance(name, str) else name,
            address=address.strip() if isinstance(address, str) else address,
            mobile=mobile.strip() if isinstance(mobile, str) else mobile,
            default_quantity=default_quantity,
            price_per_litre=price_per_litre,
            balance=balance,
            is_active=is_active,
            subscription_type=_coerce_subscription(subscription_type),
            coordinates=coordinates,
        )
        validate_customer(customer)
        while customer.id in self._customers:
            customer.id = _new_customer_id()
        self._customers[customer.id] = customer
        logger.info("Added customer %s (%s)", customer.id, customer.name)
        return customer

    def get(self, customer_id: str) -> Customer:
        customer = self._customers.get(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer '{customer_id}' not found.")
        return customer

    def find(self, customer_id: str) -> Customer | None:
        return self._customers.get(customer_id)

    def edit(self, customer_id: str, patch: Mapping[str, Any]) -> Customer:
        """Merge ``patch`` onto the customer; the whole record is validated first."""
        current = self.get(customer_id)
        if "id" in patch:
            raise ValidationError("Customer id cannot be changed.")
        if "balance" in patch:
            raise ValidationError("Customer balance changes only through payments.")
        unknown = set(patch) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown customer fields: {', '.join(sorted(unknown))}.")
        if not patch:
            return current

        changes = dict(patch)
        if "subscription_type" in changes:
            changes["subscription_type"] = _coerce_subscription(changes["subscription_type"])
        for name in _TEXT_FIELDS:
            if isinstance(changes.get(name), str):
                changes[name] = changes[name].strip()
        updated = replace(current, **changes)
        validate_customer(updated)
        self._customers[customer_id] = updated
        logger.info("Edited customer %s: %s", customer_id, ", ".join(sorted(changes)))
        return updated

    def remove(self, customer_id: str, *, confirm: bool = False) -> Customer:
        """Delete a customer. Ledger entries and payments are left in place."""
        if not confirm:
            raise ValidationError("Removing a customer requires confirmation.")
        customer = self.get(customer_id)
        del self._customers[customer_id]
        logger.info("Removed customer %s (%s)", customer_id, customer.name)
        return customer

    def search(self, query: str) -> list[Customer]:
        needle = (query or "").strip().lower()
        if not needle:
            return self.all()
        return [
            customer
            for customer in self._customers.values()
            if needle in customer.name.lower()
            or needle in customer.mobile.lower()
            or needle in customer.address.lower()
        ]

    def all(self) -> list[Customer]:
        return list(self._customers.values())

    def active(self) -> list[Customer]:
        return [customer for customer in self._customers.values() if customer.is_active]


def _coerce_subscription(value: SubscriptionType | str) -> SubscriptionType:
    if isinstance(value, SubscriptionType):
        return value
    try:
        return SubscriptionType(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown subscription type {value!r}.") from exc
