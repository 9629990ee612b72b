from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, Field, PositiveFloat, PositiveInt, confloat, model_validator

logger = logging.getLogger(__name__)


class SizingConfig(BaseModel):
    yield_factor: PositiveFloat = Field(
        4.0, description="Average daily generation per installed kW (kWh/kW/day)."
    )
    safety_margin: confloat(ge=1.0) = Field(
        1.10, description="Oversizing factor applied to the required capacity."
    )
    panel_wattage: PositiveInt = Field(550, description="Panel wattage used for the bill of materials (W).")
    supported_panel_wattages: Tuple[PositiveInt, ...] = Field(
        (450, 535, 550, 600), description="Panel wattages stocked by the installer (W)."
    )
    area_per_kw_sqft: PositiveFloat = Field(100.0, description="Shadow-free roof area per installed kW (sqft).")
    hybrid_inverter_max_kw: PositiveFloat = Field(
        5.0, description="Plants below this capacity get a hybrid on-grid inverter."
    )
    days_per_month: PositiveFloat = Field(30.0, description="Days used to convert monthly units to daily units.")

    @model_validator(mode="after")
    def _supported_not_empty(self) -> "SizingConfig":
        if not self.supported_panel_wattages:
            raise ValueError("supported_panel_wattages must list at least one wattage")
        return self


class HeuristicConfig(BaseModel):
    savings_ratio: confloat(ge=0, le=1) = Field(
        0.8, description="Share of the bill assumed saved before a system is chosen."
    )
    tariff_per_kwh: float = Field(7.0, description="Assumed grid tariff (Rs/kWh).")
    emission_factor: confloat(ge=0) = Field(0.9, description="Grid emission factor (kg CO2 per kWh).")
    product_savings_ratio: confloat(ge=0, le=1) = Field(
        0.85, description="Share of the bill a selected system can offset."
    )
    lifetime_years: PositiveInt = Field(25, description="Horizon for lifetime savings (years).")


class CatalogConfig(BaseModel):
    emi_divisor: PositiveFloat = Field(30.0, description="List price / divisor gives the advertised EMI.")
    rated_savings_ratio: confloat(gt=0, le=1) = Field(
        0.025, description="Rated monthly savings as a fraction of the list price."
    )
    quote_discount: confloat(gt=0, le=1) = Field(
        0.95, description="Default final price multiplier when an admin revises a quote."
    )


class EstimatorConfig(BaseModel):
    sizing: SizingConfig = Field(default_factory=SizingConfig)
    heuristics: HeuristicConfig = Field(default_factory=HeuristicConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)


def load_config(path: str | None = None) -> EstimatorConfig:
    """Load an EstimatorConfig from JSON, or the defaults when no path is given.

    Missing sections and fields fall back to their defaults. Raises
    FileNotFoundError, json.JSONDecodeError or pydantic.ValidationError.
    """
    if not path:
        return EstimatorConfig()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config JSON not found: {path}")
    data = json.loads(p.read_text())
    config = EstimatorConfig.model_validate(data)
    logger.debug("Loaded estimator config from %s", p)
    return config
