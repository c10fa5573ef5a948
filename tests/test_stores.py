import threading

from food_ordering.core.config import Settings
from food_ordering.models import CartEntry, MenuCategory, OrderItem, OrderStatus, Role
from food_ordering.seed import DEFAULT_MENU
from food_ordering.stores import build_stores
from food_ordering.stores.memory import (
    MemoryCartStore,
    MemoryCatalogStore,
    MemoryIdentityStore,
    MemoryOrderStore,
)


def test_admin_is_provisioned():
    store = MemoryIdentityStore()
    assert store.get_user("admin").role == Role.ADMIN
    assert store.stats() == {"users": 1, "sessions": 0}


def test_sessions_are_opaque_and_unique():
    store = MemoryIdentityStore()
    tokens = {store.create_session("admin").token for _ in range(50)}
    assert len(tokens) == 50
    assert not any("admin" in t for t in tokens)


def test_catalog_ids_never_reused():
    store = MemoryCatalogStore()
    first = store.create_item("A", 1.0, "a", MenuCategory.MAIN)
    second = store.create_item("B", 2.0, "b", MenuCategory.SIDE)
    assert store.delete_item(second.id)
    third = store.create_item("C", 3.0, "c", MenuCategory.DRINK)
    assert [first.id, second.id, third.id] == ["1", "2", "3"]


def test_catalog_returns_copies():
    store = MemoryCatalogStore()
    item = store.create_item("A", 1.0, "a", MenuCategory.MAIN)
    item.name = "mutated"
    assert store.get_item(item.id).name == "A"


def test_cart_store_is_sparse():
    store = MemoryCartStore()
    entry = CartEntry(menu_item_id="1", quantity=1, name="A", price=1.0)
    store.set("alice", [entry])
    assert store.get("alice") == [entry]
    store.set("alice", [])
    assert not store.has_record("alice")
    store.set("alice", [entry])
    store.clear("alice")
    assert store.get("alice") == []
    assert store.stats() == {"carts": 0}


def test_order_store_status_update_and_filters():
    store = MemoryOrderStore()
    first = store.create_order("alice", [OrderItem("1", 1)], 1.0)
    store.create_order("bob", [OrderItem("1", 2)], 2.0)
    updated = store.update_status(first.id, OrderStatus.READY)
    assert updated.status == OrderStatus.READY
    assert first.status == OrderStatus.PENDING
    assert [o.owner for o in store.list_orders(owner="bob")] == ["bob"]
    assert [o.id for o in store.list_orders(status=OrderStatus.READY)] == [first.id]
    assert store.update_status("99", OrderStatus.READY) is None


def test_concurrent_order_ids_are_unique_and_dense():
    store = MemoryOrderStore()
    ids = []
    lock = threading.Lock()

    def worker():
        for _ in range(100):
            order = store.create_order("alice", [OrderItem("1", 1)], 1.0)
            with lock:
                ids.append(int(order.id))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(ids) == list(range(1, 801))


def test_build_stores_seeds_menu():
    stores = build_stores(Settings(seed_menu=True))
    items = stores.catalog.list_items()
    assert len(items) == len(DEFAULT_MENU)
    assert items[0].name == "Kung Pao Chicken"
    assert {i.category for i in items} == set(MenuCategory)
    assert stores.stats()["menu_items"] == len(DEFAULT_MENU)


def test_build_stores_are_independent():
    a = build_stores(Settings(seed_menu=False))
    b = build_stores(Settings(seed_menu=False))
    a.catalog.create_item("A", 1.0, "a", MenuCategory.MAIN)
    assert b.catalog.list_items() == []
