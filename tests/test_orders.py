import pytest

from food_ordering.core.config import Settings
from food_ordering.core.errors import (
    CannotCancel,
    InvalidOrderItems,
    InvalidStatus,
    InvalidStatusForUser,
    InvalidTransition,
    OrderNotFound,
)
from food_ordering.models import MenuItemPatch, OrderItem, OrderStatus
from food_ordering.services import build_services

ITEMS = [{"menuItemId": "1", "quantity": 2}, {"menuItemId": "2", "quantity": 1}]


@pytest.fixture
def order(services, menu):
    return services.orders.place_order("alice", ITEMS)


class TestPlaceOrder:
    def test_total_is_rounded_once(self, order):
        assert order.total_price == 35.00
        assert order.status == OrderStatus.PENDING
        assert order.owner == "alice"
        assert order.items == (OrderItem("1", 2), OrderItem("2", 1))
        assert order.created_at.tzinfo is not None

    def test_compute_total_single_final_rounding(self, services, stores):
        from food_ordering.models import MenuCategory

        item = stores.catalog.create_item("Tea", 0.1, "Cup", MenuCategory.DRINK)
        items = [OrderItem(item.id, 1)] * 3
        # 0.1 * 3 summed as floats is 0.30000000000000004
        assert services.orders.compute_total(items) == 0.3

    def test_uses_current_catalog_price(self, services, menu):
        services.catalog.update("1", MenuItemPatch(price=10))
        order = services.orders.place_order("alice", [{"menuItemId": "1", "quantity": 3}])
        assert order.total_price == 30.0

    def test_clears_cart(self, services, menu):
        services.cart.set_cart("alice", ITEMS)
        services.cart.set_cart("bob", ITEMS)
        services.orders.place_order("alice", ITEMS)
        assert services.cart.get_cart("alice") == []
        assert len(services.cart.get_cart("bob")) == 2

    @pytest.mark.parametrize("raw", [
        None,
        [],
        "1",
        [{"menuItemId": "99", "quantity": 1}],
        [{"menuItemId": "1", "quantity": 0}],
        [{"menuItemId": "1", "quantity": -2}],
        [{"menuItemId": "1", "quantity": 2.5}],
        [{"menuItemId": "1"}],
        [{"quantity": 1}],
        [{"menuItemId": "1", "quantity": 1}, {"menuItemId": "404", "quantity": 1}],
    ])
    def test_invalid_items_create_nothing(self, services, menu, raw):
        services.cart.set_cart("alice", ITEMS)
        with pytest.raises(InvalidOrderItems) as exc:
            services.orders.place_order("alice", raw)
        assert exc.value.code == "invalid-order-items"
        assert services.orders.list_all() == []
        assert len(services.cart.get_cart("alice")) == 2

    def test_order_survives_menu_item_deletion(self, services, order):
        services.catalog.delete("1")
        kept = services.orders.get_own("alice", order.id)
        assert kept.items == order.items
        assert kept.total_price == 35.0

    def test_ids_strictly_increase(self, services, menu):
        ids = [
            int(services.orders.place_order("alice", ITEMS).id)
            for _ in range(5)
        ]
        assert ids == sorted(set(ids))
        assert ids[0] == 1


class TestCustomerView:
    def test_list_own(self, services, order):
        services.orders.place_order("bob", ITEMS)
        assert [o.id for o in services.orders.list_own("alice")] == [order.id]

    def test_foreign_order_is_not_found(self, services, order):
        with pytest.raises(OrderNotFound):
            services.orders.get_own("bob", order.id)
        with pytest.raises(OrderNotFound):
            services.orders.get_own("alice", "999")

    def test_cancel_pending(self, services, order):
        canceled = services.orders.cancel_own("alice", order.id, "canceled")
        assert canceled.status == OrderStatus.CANCELED

    def test_cancel_foreign_order(self, services, order):
        with pytest.raises(OrderNotFound):
            services.orders.cancel_own("bob", order.id, "canceled")
        assert services.orders.get_own("alice", order.id).status == OrderStatus.PENDING

    @pytest.mark.parametrize("status", ["completed", "preparing", "pending", None, "CANCELED"])
    def test_customer_may_only_request_cancel(self, services, order, status):
        with pytest.raises(InvalidStatusForUser):
            services.orders.cancel_own("alice", order.id, status)

    @pytest.mark.parametrize("status", ["preparing", "ready", "completed", "canceled"])
    def test_cannot_cancel_after_pending(self, services, order, status):
        services.orders.set_status_as_admin(order.id, status)
        with pytest.raises(CannotCancel):
            services.orders.cancel_own("alice", order.id, "canceled")


class TestAdminView:
    def test_any_status_from_any_status(self, services, order):
        for status in ["completed", "pending", "canceled", "ready", "preparing"]:
            updated = services.orders.set_status_as_admin(order.id, status)
            assert updated.status == OrderStatus(status)

    def test_invalid_status_checked_before_lookup(self, services, order):
        with pytest.raises(InvalidStatus):
            services.orders.set_status_as_admin("999", "shipped")
        with pytest.raises(OrderNotFound):
            services.orders.set_status_as_admin("999", "ready")

    def test_list_all_with_filter(self, services, order):
        second = services.orders.place_order("bob", ITEMS)
        services.orders.set_status_as_admin(second.id, "ready")
        assert [o.id for o in services.orders.list_all()] == [order.id, second.id]
        assert [o.id for o in services.orders.list_all("ready")] == [second.id]
        with pytest.raises(InvalidStatus):
            services.orders.list_all("lost")

    def test_list_all_with_empty_filter_returns_everything(self, services, order):
        assert [o.id for o in services.orders.list_all("")] == [order.id]


class TestEnforcedTransitions:
    @pytest.fixture
    def strict(self, stores):
        return build_services(stores, Settings(seed_menu=False, enforce_admin_transitions=True))

    def test_forward_moves_allowed(self, strict, order):
        assert strict.orders.set_status_as_admin(order.id, "preparing").status == OrderStatus.PREPARING
        assert strict.orders.set_status_as_admin(order.id, "completed").status == OrderStatus.COMPLETED

    def test_terminal_orders_are_frozen(self, strict, order):
        strict.orders.set_status_as_admin(order.id, "completed")
        with pytest.raises(InvalidTransition) as exc:
            strict.orders.set_status_as_admin(order.id, "pending")
        assert exc.value.code == "invalid-transition"

    def test_backwards_rejected(self, strict, order):
        strict.orders.set_status_as_admin(order.id, "ready")
        with pytest.raises(InvalidTransition):
            strict.orders.set_status_as_admin(order.id, "preparing")

    def test_same_status_is_noop(self, strict, order):
        assert strict.orders.set_status_as_admin(order.id, "pending").status == OrderStatus.PENDING
