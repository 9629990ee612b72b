from __future__ import annotations

import pytest

from solarkit.catalog import DEFAULT_PRODUCTS
from solarkit.sizing import ApplianceLoad
from solarkit.store import InMemoryDocumentStore
from solarkit.storefront import Identity, Role, UserProfile


@pytest.fixture
def household() -> list[ApplianceLoad]:
    return [
        ApplianceLoad(name="LED", wattage_watts=12, quantity=10, hours_per_day=6),
        ApplianceLoad(name="Fan", wattage_watts=75, quantity=4, hours_per_day=12),
        ApplianceLoad(name="Fridge", wattage_watts=250, quantity=1, hours_per_day=24),
    ]


@pytest.fixture
def store() -> InMemoryDocumentStore:
    s = InMemoryDocumentStore()
    for product in DEFAULT_PRODUCTS:
        s.set("products", product.id, product.to_document())
    return s


@pytest.fixture
def admin() -> UserProfile:
    return UserProfile(uid="admin-1", email="ops@example.com", display_name="Ops", role=Role.ADMIN)


@pytest.fixture
def customer() -> UserProfile:
    return UserProfile(uid="user-1", email="asha@example.com", display_name="Asha", role=Role.USER)


@pytest.fixture
def customer_identity() -> Identity:
    return Identity(uid="user-1", email="asha@example.com", display_name="Asha")
