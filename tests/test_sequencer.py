from collections import Counter

import pytest

from milkround.services.customers.registry import CustomerRegistry
from milkround.services.routing.sequencer import RouteSequencer


def _registry(*names: str) -> CustomerRegistry:
    registry = CustomerRegistry()
    for name in names:
        registry.add(
            name=name,
            address=f"{name} Street",
            mobile="9000000000",
            default_quantity=1.0,
            price_per_litre=60.0,
        )
    return registry


def _names(registry: CustomerRegistry, ids: list[str]) -> list[str]:
    return [registry.get(cid).name for cid in ids]


def test_initial_order_follows_registry():
    registry = _registry("A", "B", "C")
    sequencer = RouteSequencer(registry)
    assert _names(registry, sequencer.visible_order()) == ["A", "B", "C"]


def test_suggestion_with_unknown_name_appends_remainder():
    registry = _registry("A", "Z")
    sequencer = RouteSequencer(registry)

    result = sequencer.apply_suggested_order(["Z", "Unknown"])

    assert _names(registry, result) == ["Z", "A"]


def test_identity_suggestion_leaves_order_unchanged():
    registry = _registry("A", "B", "C")
    sequencer = RouteSequencer(registry)
    before = sequencer.visible_order()

    sequencer.apply_suggested_order(["A", "B", "C"])

    assert sequencer.visible_order() == before


@pytest.mark.parametrize(
    "names",
    [[], ["C", "C", "A"], ["Ghost", "B"], ["C", "B", "A", "D", "Extra"]],
)
def test_suggestion_preserves_active_id_multiset(names):
    registry = _registry("A", "B", "C", "D")
    sequencer = RouteSequencer(registry)
    before = Counter(sequencer.visible_order())

    after = sequencer.apply_suggested_order(names)

    assert Counter(after) == before


def test_inactive_customers_hidden_but_kept():
    registry = _registry("A", "B", "C")
    sequencer = RouteSequencer(registry)
    b = registry.search("B")[0]
    registry.edit(b.id, {"is_active": False})

    assert _names(registry, sequencer.visible_order()) == ["A", "C"]
    sequencer.apply_suggested_order(["C", "B", "A"])
    assert _names(registry, sequencer.visible_order()) == ["C", "A"]

    registry.edit(b.id, {"is_active": True})
    assert _names(registry, sequencer.visible_order()) == ["C", "A", "B"]


def test_registry_drift_is_absorbed():
    registry = _registry("A", "B")
    sequencer = RouteSequencer(registry)
    snapshot = [c.name for c in sequencer.snapshot()]

    a = registry.search("A")[0]
    registry.remove(a.id, confirm=True)
    registry.add(name="New", address="X", mobile="1", default_quantity=1.0, price_per_litre=50.0)

    result = sequencer.apply_suggested_order(list(reversed(snapshot)))

    assert _names(registry, result) == ["B", "New"]


def test_duplicate_name_resolves_to_first_registered_customer():
    registry = _registry("X", "X", "Y")
    first_x, second_x, y = list(registry)
    sequencer = RouteSequencer(registry)

    registry.edit(first_x.id, {"is_active": False})
    sequencer.apply_suggested_order(["X", "Y"])
    registry.edit(first_x.id, {"is_active": True})
    assert sequencer.visible_order() == [second_x.id, y.id, first_x.id]

    result = sequencer.apply_suggested_order(["Y", "X"])

    assert result == [y.id, first_x.id, second_x.id]
