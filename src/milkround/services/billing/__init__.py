"""Billing and payment services."""

from .engine import BillingEngine, BillingLine
from .payments import PaymentBook

__all__ = ["BillingEngine", "BillingLine", "PaymentBook"]
