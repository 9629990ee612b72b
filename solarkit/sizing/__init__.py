"""
Sizing and financial estimation.

Converts a household's declared appliance load or electricity bill into a
recommended rooftop PV plant, its bill of materials, and savings/payback
projections. Every function here is pure; invalid input raises a typed
EstimatorError instead of being coerced.
"""

from .config import CatalogConfig, EstimatorConfig, HeuristicConfig, SizingConfig, load_config
from .errors import (
    DivisionUndefined,
    EstimatorError,
    InvalidBillInput,
    InvalidLoadInput,
    InvalidSizingInput,
    UnsupportedPanelSpec,
)
from .finance import (
    amortized_emi,
    estimate_from_bill,
    project_for_product,
    rated_payback_years,
    savings_timeline,
)
from .loads import aggregate_load, bill_daily_units, target_daily_energy
from .models import (
    ApplianceLoad,
    BillingSample,
    LoadEstimate,
    ProductProjection,
    QuickEstimate,
    SizingRecommendation,
    SizingReport,
)
from .plant import size_from_profile, size_plant

__all__ = [
    "ApplianceLoad",
    "BillingSample",
    "CatalogConfig",
    "DivisionUndefined",
    "EstimatorConfig",
    "EstimatorError",
    "HeuristicConfig",
    "InvalidBillInput",
    "InvalidLoadInput",
    "InvalidSizingInput",
    "LoadEstimate",
    "ProductProjection",
    "QuickEstimate",
    "SizingConfig",
    "SizingRecommendation",
    "SizingReport",
    "UnsupportedPanelSpec",
    "aggregate_load",
    "amortized_emi",
    "bill_daily_units",
    "estimate_from_bill",
    "load_config",
    "project_for_product",
    "rated_payback_years",
    "savings_timeline",
    "size_from_profile",
    "size_plant",
    "target_daily_energy",
]
