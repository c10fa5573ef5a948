import pytest

from food_ordering.core.errors import CartItemNotFound, InvalidCartItems, MenuItemNotFound
from food_ordering.models import CartEntry, MenuItemPatch


def test_empty_cart(services):
    assert services.cart.get_cart("alice") == []


def test_set_cart_snapshots_catalog(services, menu):
    entries = services.cart.set_cart("alice", [
        {"menuItemId": "1", "quantity": 2},
        {"menuItemId": "2", "quantity": "1"},
    ])
    assert entries == [
        CartEntry(menu_item_id="1", quantity=2, name="Kung Pao Chicken", price=14.5),
        CartEntry(menu_item_id="2", quantity=1, name="Spring Rolls", price=6.0),
    ]
    assert services.cart.get_cart("alice") == entries


def test_price_change_does_not_touch_cart(services, menu):
    services.cart.set_cart("alice", [{"menuItemId": "1", "quantity": 1}])
    services.catalog.update("1", MenuItemPatch(price=20))
    assert services.cart.get_cart("alice")[0].price == 14.5


def test_set_cart_merges_duplicates(services, menu):
    entries = services.cart.set_cart("alice", [
        {"menuItemId": "1", "quantity": 1},
        {"menuItemId": "2", "quantity": 1},
        {"menuItemId": "1", "quantity": 3},
    ])
    assert [(e.menu_item_id, e.quantity) for e in entries] == [("1", 4), ("2", 1)]


def test_empty_list_clears_cart(services, menu):
    services.cart.set_cart("alice", [{"menuItemId": "1", "quantity": 1}])
    assert services.cart.set_cart("alice", []) == []
    assert services.cart.get_cart("alice") == []
    assert not services.stores.carts.has_record("alice")


@pytest.mark.parametrize("items", [[], (), None, "abc", {}, 42])
def test_store_set_with_empty_or_non_list_deletes_record(services, menu, items):
    services.cart.set_cart("alice", [{"menuItemId": "1", "quantity": 1}])
    services.stores.carts.set("alice", items)
    assert services.cart.get_cart("alice") == []
    assert not services.stores.carts.has_record("alice")


def test_null_payload_is_rejected_by_service(services, menu):
    with pytest.raises(InvalidCartItems):
        services.cart.set_cart("alice", None)


@pytest.mark.parametrize("raw", [
    "not a list",
    {"menuItemId": "1"},
    [{"menuItemId": "99", "quantity": 1}],
    [{"menuItemId": "1", "quantity": 0}],
    [{"menuItemId": "1", "quantity": 1.5}],
    [{"quantity": 1}],
    ["1"],
    [{"menuItemId": "1", "quantity": 1}, {"menuItemId": "1", "quantity": -1}],
])
def test_set_cart_rejects_invalid_entries(services, menu, raw):
    services.cart.set_cart("alice", [{"menuItemId": "2", "quantity": 1}])
    with pytest.raises(InvalidCartItems):
        services.cart.set_cart("alice", raw)
    assert [e.menu_item_id for e in services.cart.get_cart("alice")] == ["2"]


def test_deleted_items_hidden_but_record_kept(services, menu):
    services.cart.set_cart("alice", [
        {"menuItemId": "1", "quantity": 1},
        {"menuItemId": "2", "quantity": 1},
    ])
    services.catalog.delete("1")
    assert [e.menu_item_id for e in services.cart.get_cart("alice")] == ["2"]
    assert len(services.stores.carts.get("alice")) == 2


def test_add_item_merges(services, menu):
    services.cart.add_item("alice", "1")
    services.cart.add_item("alice", "2", 2)
    entries = services.cart.add_item("alice", 1, "3")
    assert [(e.menu_item_id, e.quantity) for e in entries] == [("1", 4), ("2", 2)]


def test_add_item_errors(services, menu):
    with pytest.raises(MenuItemNotFound):
        services.cart.add_item("alice", "42")
    with pytest.raises(InvalidCartItems):
        services.cart.add_item("alice", "1", 0)
    assert services.cart.get_cart("alice") == []


def test_set_item_quantity(services, menu):
    services.cart.set_cart("alice", [
        {"menuItemId": "1", "quantity": 1},
        {"menuItemId": "2", "quantity": 1},
    ])
    entries = services.cart.set_item_quantity("alice", "1", 5)
    assert entries[0].quantity == 5
    entries = services.cart.set_item_quantity("alice", "2", 0)
    assert [e.menu_item_id for e in entries] == ["1"]
    services.cart.set_item_quantity("alice", "1", 0)
    assert not services.stores.carts.has_record("alice")


def test_set_item_quantity_errors(services, menu):
    services.cart.add_item("alice", "1")
    with pytest.raises(CartItemNotFound):
        services.cart.set_item_quantity("alice", "2", 1)
    with pytest.raises(InvalidCartItems):
        services.cart.set_item_quantity("alice", "1", -1)


def test_carts_are_per_user(services, menu):
    services.cart.add_item("alice", "1")
    assert services.cart.get_cart("bob") == []
