"""
Catalog
=======

Rooftop solar kits, pricing derivations and listing filters.
"""

from .products import (
    CAPACITY_OPTIONS,
    DEFAULT_PRODUCTS,
    Product,
    ProductFilter,
    StockStatus,
    filter_products,
    list_price_emi,
    rated_monthly_savings,
    recommend_products,
    sort_by_capacity,
)

__all__ = [
    "CAPACITY_OPTIONS",
    "DEFAULT_PRODUCTS",
    "Product",
    "ProductFilter",
    "StockStatus",
    "filter_products",
    "list_price_emi",
    "rated_monthly_savings",
    "recommend_products",
    "sort_by_capacity",
]
