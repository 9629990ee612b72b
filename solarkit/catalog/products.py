"""
Solar Kit Catalog
=================

Product model for rooftop kits, the default catalog, and the listing
filters used by the storefront.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field, PositiveFloat

from ..sizing.config import CatalogConfig
from ..sizing.errors import DivisionUndefined
from ..sizing.finance import rated_payback_years


class StockStatus(str, Enum):
    """Availability of a kit."""
    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"


class Product(BaseModel):
    """
    A rooftop solar kit as stored in the "products" collection.

    Attributes:
        id: Document identifier
        name: Display name
        capacity_kw: Nameplate capacity (kW)
        price: List price (Rs)
        emi: Advertised monthly installment (Rs)
        savings: Rated monthly savings (Rs), the ceiling used in projections
        features: Short selling points
        quantity: Units on hand
        stock_status: Whether the kit can be quoted
    """
    id: str = ""
    name: str
    capacity_kw: PositiveFloat
    price: float = Field(..., ge=0)
    emi: float = Field(0.0, ge=0)
    savings: float = Field(0.0, ge=0)
    image: str = ""
    description: str = ""
    features: List[str] = Field(default_factory=list)
    quantity: int = Field(0, ge=0)
    stock_status: StockStatus = StockStatus.IN_STOCK
    updated_at: Optional[int] = None

    @property
    def capacity(self) -> str:
        """Capacity label, e.g. "3kW"."""
        kw = self.capacity_kw
        return f"{int(kw)}kW" if float(kw).is_integer() else f"{kw:g}kW"

    @property
    def in_stock(self) -> bool:
        return self.stock_status == StockStatus.IN_STOCK

    def payback_years(self) -> Optional[float]:
        """Payback at rated savings, or None when not calculable."""
        try:
            return rated_payback_years(self.price, self.savings)
        except DivisionUndefined:
            return None

    def to_document(self) -> dict:
        return self.model_dump(mode="json", exclude={"id"})

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Product":
        return cls.model_validate({**data, "id": doc_id})


def list_price_emi(price: float, config: Optional[CatalogConfig] = None) -> int:
    """Advertised EMI for a list price."""
    cfg = config or CatalogConfig()
    return round(price / cfg.emi_divisor)


def rated_monthly_savings(price: float, config: Optional[CatalogConfig] = None) -> int:
    """Rated monthly savings assumed for a newly listed kit."""
    cfg = config or CatalogConfig()
    return round(price * cfg.rated_savings_ratio)


DEFAULT_PRODUCTS: List[Product] = [
    Product(
        id="solar-1kw",
        name="1kW Rooftop Solar System",
        capacity_kw=1,
        price=65000,
        emi=2200,
        savings=1500,
        image="https://picsum.photos/seed/solar1/800/600",
        description="Perfect for small homes with basic electrical needs like lights, fans, and TV.",
        features=["Monocrystalline Panels", "Smart Inverter", "25-year Warranty"],
        quantity=10,
    ),
    Product(
        id="solar-3kw",
        name="3kW Rooftop Solar System",
        capacity_kw=3,
        price=185000,
        emi=6200,
        savings=4500,
        image="https://picsum.photos/seed/solar3/800/600",
        description="Ideal for medium families with 1-2 Air Conditioners and typical home appliances.",
        features=["High Efficiency Panels", "WiFi Monitoring", "Grid-Tie System"],
        quantity=5,
    ),
    Product(
        id="solar-5kw",
        name="5kW Rooftop Solar System",
        capacity_kw=5,
        price=295000,
        emi=9800,
        savings=7500,
        image="https://picsum.photos/seed/solar5/800/600",
        description="Standard for large residential rooftops or small shops with significant daytime load.",
        features=["Tier 1 Solar Panels", "MPPT Inverter", "Structure included"],
        quantity=3,
    ),
    Product(
        id="solar-10kw",
        name="10kW Rooftop Solar System",
        capacity_kw=10,
        price=540000,
        emi=18000,
        savings=15000,
        image="https://picsum.photos/seed/solar10/800/600",
        description="Commercial grade system for offices, hospitals, or luxury villas with high electricity usage.",
        features=["Bi-facial Panels", "Premium Support", "Turnkey Installation"],
        quantity=2,
    ),
]

CAPACITY_OPTIONS = ("all", "1kW", "3kW", "5kW", "10kW")


class ProductFilter(BaseModel):
    capacity: str = Field("all", description='Capacity label such as "3kW", or "all".')
    max_price: float = Field(600000, ge=0)
    max_emi: float = Field(20000, ge=0)

    def matches(self, product: Product) -> bool:
        if self.capacity != "all" and product.capacity != self.capacity:
            return False
        return product.price <= self.max_price and product.emi <= self.max_emi


def filter_products(products: Iterable[Product], flt: Optional[ProductFilter] = None) -> List[Product]:
    flt = flt or ProductFilter()
    return [p for p in products if flt.matches(p)]


def sort_by_capacity(products: Iterable[Product]) -> List[Product]:
    return sorted(products, key=lambda p: (p.capacity_kw, p.price))


def recommend_products(products: Iterable[Product], plant_kw: float) -> List[Product]:
    """In-stock kits that cover the recommended plant, smallest first."""
    return [p for p in sort_by_capacity(products) if p.in_stock and p.capacity_kw >= plant_kw]
