"""Route group exports."""

from . import billing, customers, dashboard, deliveries, health, routes

__all__ = ["billing", "customers", "dashboard", "deliveries", "health", "routes"]
