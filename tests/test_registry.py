from dataclasses import astuple

import pytest

from milkround.errors import NotFoundError, ValidationError
from milkround.models.domain import SubscriptionType
from milkround.services.customers.registry import CustomerRegistry


def _add(registry: CustomerRegistry, name: str = "Rahul", **overrides):
    fields = {
        "name": name,
        "address": f"{name} House, MG Road",
        "mobile": "9876543210",
        "default_quantity": 1.0,
        "price_per_litre": 60.0,
    }
    fields.update(overrides)
    return registry.add(**fields)


def test_add_assigns_unique_ids_and_defaults_active():
    registry = CustomerRegistry()
    first = _add(registry, "Sharma Ji")
    second = _add(registry, "Anjali Verma")

    assert first.id != second.id
    assert first.is_active is True
    assert first.subscription_type is SubscriptionType.DAILY
    assert [c.id for c in registry] == [first.id, second.id]


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "  "},
        {"address": ""},
        {"mobile": ""},
        {"default_quantity": 0},
        {"price_per_litre": -5},
        {"default_quantity": float("nan")},
        {"price_per_litre": float("inf")},
        {"price_per_litre": float("nan")},
        {"balance": float("nan")},
        {"balance": float("-inf")},
    ],
)
def test_add_rejects_invalid_fields(overrides):
    registry = CustomerRegistry()
    with pytest.raises(ValidationError):
        _add(registry, **overrides)
    assert len(registry) == 0


def test_edit_merges_patch():
    registry = CustomerRegistry()
    customer = _add(registry, "Mrs. Iyer")

    updated = registry.edit(customer.id, {"price_per_litre": 65.0, "subscription_type": "Alternate Days"})

    assert updated.id == customer.id
    assert updated.price_per_litre == 65.0
    assert updated.subscription_type is SubscriptionType.ALTERNATE
    assert registry.get(customer.id).price_per_litre == 65.0


def test_edit_with_empty_patch_leaves_record_identical():
    registry = CustomerRegistry()
    customer = _add(registry, "Mrs. Iyer", balance=-200.0)
    before = astuple(customer)

    result = registry.edit(customer.id, {})

    assert astuple(result) == before
    assert result == customer


def test_edit_rejects_id_change_and_bad_values_without_partial_update():
    registry = CustomerRegistry()
    customer = _add(registry, "Anjali")

    with pytest.raises(ValidationError):
        registry.edit(customer.id, {"id": "other"})
    with pytest.raises(ValidationError):
        registry.edit(customer.id, {"name": "New Name", "default_quantity": -1})

    stored = registry.get(customer.id)
    assert stored.name == "Anjali"
    assert stored.default_quantity == 1.0


def test_edit_does_not_touch_balance():
    registry = CustomerRegistry()
    customer = _add(registry, "Sharma Ji", balance=450.0)

    with pytest.raises(ValidationError):
        registry.edit(customer.id, {"balance": 0})
    with pytest.raises(ValidationError):
        registry.edit(customer.id, {"balance": 0, "name": "Sharma"})
    with pytest.raises(ValidationError):
        registry.edit(customer.id, {"price_per_litre": float("nan")})

    stored = registry.get(customer.id)
    assert stored.balance == 450.0
    assert stored.name == "Sharma Ji"
    assert stored.price_per_litre == 60.0


def test_edit_unknown_customer():
    registry = CustomerRegistry()
    with pytest.raises(NotFoundError):
        registry.edit("missing", {"name": "X"})


def test_remove_requires_confirmation():
    registry = CustomerRegistry()
    customer = _add(registry, "Rahul")

    with pytest.raises(ValidationError):
        registry.remove(customer.id)
    assert customer.id in registry

    registry.remove(customer.id, confirm=True)
    assert customer.id not in registry
    with pytest.raises(NotFoundError):
        registry.remove(customer.id, confirm=True)


def test_search_is_case_insensitive_and_keeps_order():
    registry = CustomerRegistry()
    a = _add(registry, "Sharma Ji", address="102 Rose Apartments")
    _add(registry, "Anjali", address="Plot 45, Green Valley", mobile="9898989898")
    c = _add(registry, "Rose Mary", address="Temple Street")

    assert [x.id for x in registry.search("rose")] == [a.id, c.id]
    assert [x.name for x in registry.search("98989")] == ["Anjali"]
    assert len(registry.search("")) == 3
