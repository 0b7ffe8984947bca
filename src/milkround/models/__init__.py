"""Domain model exports."""

from .domain import (
    Bill,
    BillingMonth,
    Customer,
    DeliveryLog,
    Payment,
    PaymentMethod,
    Shift,
    SubscriptionType,
)

__all__ = [
    "Bill",
    "BillingMonth",
    "Customer",
    "DeliveryLog",
    "Payment",
    "PaymentMethod",
    "Shift",
    "SubscriptionType",
]
