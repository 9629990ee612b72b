import math

import pytest

from solarkit.store import InMemoryDocumentStore
from solarkit.storefront import (
    AuthorizationError,
    CatalogAdmin,
    Identity,
    InvalidPrice,
    NotFound,
    ProductDraft,
    register_user,
)
from solarkit.storefront.admin import split_features


def test_seed_is_idempotent(admin):
    catalog = CatalogAdmin(InMemoryDocumentStore())
    assert catalog.seed_defaults(admin) == 4
    assert catalog.seed_defaults(admin) == 0
    assert [p.capacity for p in catalog.list_products()] == ["1kW", "3kW", "5kW", "10kW"]


def test_add_product_derives_emi_and_savings(store, admin):
    catalog = CatalogAdmin(store)
    draft = ProductDraft(name="2kW Kit", capacity_kw=2, price=120000, features="Panels, Inverter,, ")
    product = catalog.add_product(admin, draft)
    assert product.emi == 4000
    assert product.savings == 3000
    assert product.features == ["Panels", "Inverter"]
    assert catalog.get_product(product.id).name == "2kW Kit"
    assert [p.capacity for p in catalog.list_products()][:2] == ["1kW", "2kW"]


def test_update_price_recomputes_emi(store, admin):
    catalog = CatalogAdmin(store)
    updated = catalog.update_price(admin, "solar-3kw", 180000)
    assert updated.emi == 6000
    assert catalog.get_product("solar-3kw").price == 180000
    for price in (0, math.nan, math.inf):
        with pytest.raises(InvalidPrice):
            catalog.update_price(admin, "solar-3kw", price)
    assert catalog.get_product("solar-3kw").price == 180000


def test_toggle_and_delete(store, admin):
    catalog = CatalogAdmin(store)
    assert not catalog.toggle_stock(admin, "solar-1kw").in_stock
    assert catalog.toggle_stock(admin, "solar-1kw").in_stock

    catalog.delete_product(admin, "solar-10kw")
    with pytest.raises(NotFound):
        catalog.get_product("solar-10kw")
    with pytest.raises(NotFound):
        catalog.delete_product(admin, "solar-10kw")


def test_customers_cannot_edit_catalog(store, customer):
    catalog = CatalogAdmin(store)
    with pytest.raises(AuthorizationError):
        catalog.toggle_stock(customer, "solar-1kw")
    with pytest.raises(AuthorizationError):
        catalog.seed_defaults(customer)


def test_list_users(store, admin):
    register_user(store, Identity(uid="u-1", email="a@example.com"))
    register_user(store, Identity(uid="u-2", email="b@example.com"))
    assert {u.uid for u in CatalogAdmin(store).list_users(admin)} == {"u-1", "u-2"}
    assert len(CatalogAdmin(store).list_users(admin, limit=1)) == 1


def test_split_features():
    assert split_features("") == []
    assert split_features(" a ,b") == ["a", "b"]
