"""
Shared fixtures.

Unit tests get fresh stores/services with an empty catalog; API tests get a
TestClient over the real app with the process-wide stores reset (and the demo
menu seeded) before each test.
"""

import pytest
from fastapi.testclient import TestClient

from food_ordering.core.config import Settings
from food_ordering.main import app
from food_ordering.models import MenuCategory
from food_ordering.services import build_services, reset_services
from food_ordering.stores import build_stores


@pytest.fixture
def settings():
    return Settings(seed_menu=False, enforce_admin_transitions=False)


@pytest.fixture
def stores(settings):
    return build_stores(settings)


@pytest.fixture
def services(stores, settings):
    return build_services(stores, settings)


@pytest.fixture
def menu(stores):
    """Two known items: id "1" at 14.50 and id "2" at 6.00."""
    chicken = stores.catalog.create_item(
        name="Kung Pao Chicken",
        price=14.5,
        description="Diced chicken with peanuts.",
        category=MenuCategory.MAIN,
    )
    rolls = stores.catalog.create_item(
        name="Spring Rolls",
        price=6.0,
        description="Crispy vegetable rolls.",
        category=MenuCategory.SIDE,
    )
    return {"chicken": chicken, "rolls": rolls}


@pytest.fixture
def alice(services):
    return services.identity.register("alice")


# =============================================================================
# API FIXTURES
# =============================================================================

@pytest.fixture
def client():
    reset_services()
    yield TestClient(app)
    reset_services()


def _login(username: str) -> TestClient:
    c = TestClient(app)
    if username != "admin":
        c.post("/api/users", json={"username": username})
    resp = c.post("/api/sessions", json={"username": username})
    assert resp.status_code == 200, resp.text
    return c


@pytest.fixture
def customer(client):
    return _login("alice")


@pytest.fixture
def other_customer(client):
    return _login("bob")


@pytest.fixture
def admin(client):
    return _login("admin")
