"""Customer service helpers."""

from .registry import CustomerRegistry, validate_customer

__all__ = ["CustomerRegistry", "validate_customer"]
