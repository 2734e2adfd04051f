"""Unit tests for BasketStore and its derived state."""

import random

import pytest

from storefront.domain.events import BASKET_CHANGED, EventBus
from storefront.domain.store.basket_store import BasketStore
from storefront.domain.store.catalog_store import CatalogStore
from tests.fakes import make_product


def _setup(products=None) -> tuple[BasketStore, CatalogStore, list]:
    """Build a basket over a catalog of A (100) and B (priceless) by default."""
    if products is None:
        products = [make_product("A", 100), make_product("B", None)]
    bus = EventBus()
    catalog = CatalogStore(bus)
    catalog.replace(products)
    changes = []
    bus.on(BASKET_CHANGED, changes.append)
    return BasketStore(bus, catalog), catalog, changes


class TestScenario:

    def test_add_remove_clear_with_priceless_item(self):
        basket, _, changes = _setup()

        assert basket.add("A") is True
        assert (basket.total, basket.item_count) == (100, 1)

        assert basket.add("B") is True
        assert (basket.total, basket.item_count) == (100, 2)

        assert basket.remove("A") is True
        assert (basket.total, basket.item_count) == (0, 1)

        basket.clear()
        assert (basket.total, basket.item_count) == (0, 0)
        assert basket.is_empty
        assert len(changes) == 4


class TestAdd:

    def test_emits_full_state(self):
        basket, _, changes = _setup()
        basket.add("A")

        state = changes[-1]
        assert state.item_ids == ("A",)
        assert state.items[0].title == "Product A"
        assert state.total == 100
        assert state.item_count == 1
        assert state.is_empty is False

    def test_add_is_idempotent(self):
        basket, _, changes = _setup()
        assert basket.add("A") is True
        before = basket.state

        assert basket.add("A") is False
        assert basket.state == before
        assert len(changes) == 1

    def test_unknown_id_rejected_silently(self):
        basket, _, changes = _setup()
        assert basket.add("ghost") is False
        assert changes == []
        assert basket.is_empty

    def test_insertion_order_kept(self):
        basket, _, _ = _setup([make_product(i) for i in "cab"])
        for product_id in "bca":
            basket.add(product_id)
        assert basket.item_ids == ["b", "c", "a"]


class TestRemove:

    def test_absent_id_returns_false_without_event(self):
        basket, _, changes = _setup()
        basket.add("A")
        changes.clear()

        assert basket.remove("B") is False
        assert changes == []
        assert basket.item_ids == ["A"]


class TestClear:

    def test_clear_on_empty_basket_still_emits(self):
        basket, _, changes = _setup()
        basket.clear()
        assert len(changes) == 1
        assert changes[0].is_empty


class TestQueries:

    def test_has(self):
        basket, _, _ = _setup()
        basket.add("A")
        assert basket.has("A")
        assert not basket.has("B")

    def test_item_ids_is_a_copy(self):
        basket, _, _ = _setup()
        basket.add("A")
        basket.item_ids.append("B")
        assert basket.item_ids == ["A"]


class TestTotalInvariant:

    @pytest.mark.parametrize("seed", range(5))
    def test_total_matches_present_items_for_random_sequences(self, seed):
        rng = random.Random(seed)
        prices = {str(i): rng.choice([None, 0, 50, 120, 750, 1300]) for i in range(8)}
        basket, _, _ = _setup([make_product(pid, price) for pid, price in prices.items()])

        for _ in range(60):
            product_id = rng.choice(list(prices) + ["missing"])
            if rng.random() < 0.6:
                basket.add(product_id)
            else:
                basket.remove(product_id)

            ids = basket.item_ids
            assert basket.total == sum(prices[i] or 0 for i in ids)
            assert basket.item_count == len(ids) == len(set(ids))
            assert basket.is_empty == (not ids)


class TestUpdateTotals:

    def test_catalog_refresh_does_not_change_total_by_itself(self):
        basket, catalog, _ = _setup()
        basket.add("A")

        catalog.replace([make_product("A", 250), make_product("B", None)])

        assert basket.total == 100

    def test_explicit_recompute_picks_up_new_prices(self):
        basket, catalog, changes = _setup()
        basket.add("A")
        catalog.replace([make_product("A", 250, title="Renamed")])
        changes.clear()

        state = basket.update_totals(catalog)

        assert state.total == 250
        assert state.items[0].title == "Renamed"
        assert len(changes) == 1

    def test_vanished_products_are_dropped(self):
        basket, catalog, _ = _setup()
        basket.add("A")
        basket.add("B")
        catalog.replace([make_product("B", 40)])

        basket.update_totals()

        assert basket.item_ids == ["B"]
        assert basket.total == 40

    def test_no_event_when_nothing_changed(self):
        basket, _, changes = _setup()
        basket.add("A")
        changes.clear()

        basket.update_totals()

        assert changes == []


class TestSnapshot:

    def test_serialize_layout(self):
        basket, _, _ = _setup()
        basket.add("A")
        basket.add("B")
        assert basket.serialize() == {
            "itemIds": ["A", "B"],
            "total": 100,
            "itemCount": 2,
            "isEmpty": False,
        }

    def test_restore_reproduces_equivalent_basket(self):
        basket, catalog, _ = _setup()
        basket.add("B")
        basket.add("A")
        snapshot = basket.serialize()

        bus = EventBus()
        other = BasketStore(bus, catalog)
        other.restore(snapshot)

        assert other.item_ids == ["B", "A"]
        assert other.total == basket.total

    def test_restore_drops_vanished_ids(self):
        basket, _, changes = _setup()
        state = basket.restore({"itemIds": ["gone", "A"], "total": 9999})

        assert state.item_ids == ("A",)
        assert state.total == 100
        assert changes[-1] == state

    def test_restore_ignores_cached_fields(self):
        basket, _, _ = _setup()
        basket.restore({"itemIds": ["A", "A"], "total": 1, "itemCount": 7, "isEmpty": True})
        assert basket.item_ids == ["A"]
        assert basket.item_count == 1
        assert not basket.is_empty

    def test_restore_replaces_current_contents(self):
        basket, _, _ = _setup()
        basket.add("A")
        basket.restore({"itemIds": ["B"]})
        assert basket.item_ids == ["B"]

    def test_restore_without_item_ids(self):
        basket, _, _ = _setup()
        basket.add("A")
        basket.restore({})
        assert basket.is_empty
