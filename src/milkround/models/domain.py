"""Domain models for customers, deliveries, payments and bills."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from ..errors import ValidationError

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


class SubscriptionType(str, Enum):
    DAILY = "Daily"
    ALTERNATE = "Alternate Days"
    CUSTOM = "Custom"


class Shift(str, Enum):
    MORNING = "Morning"
    EVENING = "Evening"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    UPI = "UPI"
    TRANSFER = "Transfer"


@dataclass(slots=True)
class Customer:
    """A household on the round with its standing order and running balance.

    ``balance`` is positive when the customer owes money and negative when
    they have paid in advance.
    """

    id: str
    name: str
    address: str
    mobile: str
    default_quantity: float
    price_per_litre: float
    balance: float = 0.0
    is_active: bool = True
    subscription_type: SubscriptionType = SubscriptionType.DAILY
    coordinates: Optional[tuple[float, float]] = None


@dataclass(slots=True)
class DeliveryLog:
    """One delivery record for a customer on a date and shift."""

    id: str
    customer_id: str
    date: date
    quantity: float
    is_delivered: bool
    shift: Shift = Shift.MORNING

    @property
    def key(self) -> tuple[str, date, Shift]:
        return (self.customer_id, self.date, self.shift)


@dataclass(slots=True)
class Payment:
    id: str
    customer_id: str
    date: date
    amount: float
    method: PaymentMethod = PaymentMethod.CASH


@dataclass(frozen=True, slots=True)
class BillingMonth:
    """Calendar month a bill is scoped to, written ``YYYY-MM``."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {self.month}.")
        if not 1 <= self.year <= 9999:
            raise ValidationError(f"Year out of range: {self.year}.")

    @classmethod
    def parse(cls, value: str | BillingMonth) -> BillingMonth:
        if isinstance(value, BillingMonth):
            return value
        match = _MONTH_PATTERN.match(str(value).strip())
        if not match:
            raise ValidationError(f"Month must be written as YYYY-MM, got {value!r}.")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def of(cls, day: date) -> BillingMonth:
        return cls(day.year, day.month)

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def following(self) -> BillingMonth:
        if self.month == 12:
            return BillingMonth(self.year + 1, 1)
        return BillingMonth(self.year, self.month + 1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(slots=True)
class Bill:
    """Derived monthly aggregate; recomputed on demand, never stored."""

    customer_id: str
    month: BillingMonth
    quantity: float
    amount: float
