"""Dashboard figures for a single day."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict

from .customers.registry import CustomerRegistry
from .deliveries.ledger import DeliveryLedger

TREND_DAYS = 7


def compute_dashboard(registry: CustomerRegistry, ledger: DeliveryLedger, today: date) -> Dict[str, Any]:
    """Today's volume and revenue, open collections and a seven-day volume trend.

    Only delivered entries count, for volume and revenue alike; a skipped
    entry contributes nothing even though its quantity is kept. Revenue uses
    each customer's current rate. Entries whose customer has been removed
    count towards volume but not revenue.
    """
    revenue = 0.0
    for entry in ledger.entries_for_date(today):
        if not entry.is_delivered:
            continue
        customer = registry.find(entry.customer_id)
        if customer is None:
            continue
        revenue += entry.quantity * customer.price_per_litre

    trend = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        trend.append({"date": day, "litres": ledger.daily_total(day)})

    return {
        "date": today,
        "delivered_today": ledger.daily_total(today),
        "revenue_today": revenue,
        "active_customers": len(registry.active()),
        "pending_collections": sum((c.balance for c in registry if c.balance > 0), 0.0),
        "last_seven_days": trend,
    }
