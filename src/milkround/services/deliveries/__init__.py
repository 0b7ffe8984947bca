"""Delivery ledger and daily sheet."""

from .ledger import DeliveryLedger
from .sheet import DeliverySheet, SheetRow, build_delivery_sheet

__all__ = ["DeliveryLedger", "DeliverySheet", "SheetRow", "build_delivery_sheet"]
