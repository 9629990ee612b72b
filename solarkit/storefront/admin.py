"""
Admin Back Office
=================

Catalog maintenance and user listing for administrators.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from pydantic import BaseModel, Field, PositiveFloat

from ..catalog.products import (
    DEFAULT_PRODUCTS,
    Product,
    StockStatus,
    list_price_emi,
    rated_monthly_savings,
    sort_by_capacity,
)
from ..sizing.config import CatalogConfig
from ..store.base import DocumentStore
from .accounts import USERS, Role, UserProfile, now_ms, require_role
from .errors import InvalidPrice, NotFound
from .quotes import PRODUCTS

logger = logging.getLogger(__name__)


class ProductDraft(BaseModel):
    """Admin form input for a new kit."""
    name: str = Field(..., min_length=1)
    capacity_kw: PositiveFloat
    price: PositiveFloat
    image: str = ""
    description: str = ""
    features: str = Field("", description="Comma separated feature list.")
    quantity: int = Field(0, ge=0)
    stock_status: StockStatus = StockStatus.IN_STOCK


def split_features(raw: str) -> List[str]:
    return [f.strip() for f in raw.split(",") if f.strip()]


class CatalogAdmin:
    """Admin-gated catalog operations."""

    def __init__(self, store: DocumentStore, config: Optional[CatalogConfig] = None):
        self.store = store
        self.config = config or CatalogConfig()

    def list_products(self) -> List[Product]:
        docs = self.store.query(PRODUCTS)
        return sort_by_capacity(Product.from_document(d.id, d.data) for d in docs)

    def get_product(self, product_id: str) -> Product:
        doc = self.store.get(PRODUCTS, product_id)
        if doc is None:
            raise NotFound(f"Product {product_id} not found")
        return Product.from_document(doc.id, doc.data)

    def seed_defaults(self, admin: Optional[UserProfile]) -> int:
        """Write the default kits that are not in the store yet."""
        require_role(admin, Role.ADMIN)
        added = 0
        for product in DEFAULT_PRODUCTS:
            if self.store.get(PRODUCTS, product.id) is None:
                self.store.set(PRODUCTS, product.id, product.to_document())
                added += 1
        logger.info("Seeded %d default products", added)
        return added

    def add_product(self, admin: Optional[UserProfile], draft: ProductDraft) -> Product:
        require_role(admin, Role.ADMIN)
        product = Product(
            name=draft.name,
            capacity_kw=draft.capacity_kw,
            price=draft.price,
            emi=list_price_emi(draft.price, self.config),
            savings=rated_monthly_savings(draft.price, self.config),
            image=draft.image,
            description=draft.description,
            features=split_features(draft.features),
            quantity=draft.quantity,
            stock_status=draft.stock_status,
            updated_at=now_ms(),
        )
        product.id = self.store.add(PRODUCTS, product.to_document())
        logger.info("Added product %s (%s)", product.id, product.name)
        return product

    def update_price(self, admin: Optional[UserProfile], product_id: str, price: float) -> Product:
        """Change the list price; the advertised EMI follows it."""
        require_role(admin, Role.ADMIN)
        if not math.isfinite(price) or price <= 0:
            raise InvalidPrice(f"price must be a positive amount (got {price})")
        product = self.get_product(product_id)
        fields = {"price": float(price), "emi": list_price_emi(price, self.config), "updated_at": now_ms()}
        self.store.update(PRODUCTS, product_id, fields)
        return product.model_copy(update=fields)

    def toggle_stock(self, admin: Optional[UserProfile], product_id: str) -> Product:
        require_role(admin, Role.ADMIN)
        product = self.get_product(product_id)
        status = StockStatus.OUT_OF_STOCK if product.in_stock else StockStatus.IN_STOCK
        self.store.update(PRODUCTS, product_id, {"stock_status": status.value, "updated_at": now_ms()})
        return product.model_copy(update={"stock_status": status})

    def delete_product(self, admin: Optional[UserProfile], product_id: str) -> None:
        require_role(admin, Role.ADMIN)
        self.get_product(product_id)
        self.store.delete(PRODUCTS, product_id)
        logger.info("Deleted product %s", product_id)

    def list_users(self, admin: Optional[UserProfile], limit: int = 50) -> List[UserProfile]:
        require_role(admin, Role.ADMIN)
        docs = self.store.query(USERS, order_by="created_at", descending=True, limit=limit)
        return [UserProfile.model_validate({**d.data, "uid": d.id}) for d in docs]
