from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

InverterClass = Literal["hybrid-on-grid", "grid-tie"]


class ApplianceLoad(BaseModel):
    # Range checks live in the aggregator so that bad rows surface as InvalidLoadInput.
    name: str = Field("Appliance", description="Appliance label.")
    wattage_watts: float = Field(..., description="Rated power draw per unit (W).")
    quantity: int = Field(1, description="Number of identical units.")
    hours_per_day: float = Field(..., description="Average daily running hours (0-24).")

    @property
    def energy_wh(self) -> float:
        return self.wattage_watts * self.quantity * self.hours_per_day


class BillingSample(BaseModel):
    monthly_units_kwh: float = Field(..., description="Units consumed per month from the electricity bill (kWh).")


class LoadEstimate(BaseModel):
    daily_energy_kwh: float
    appliance_count: int = 0


class SizingRecommendation(BaseModel):
    target_daily_kwh: float
    required_plant_kw: float
    recommended_plant_kw: int
    panel_wattage: int
    panel_count: int
    roof_area_sqft: float
    inverter_class: InverterClass


class QuickEstimate(BaseModel):
    monthly_bill: float
    annual_savings: float
    carbon_offset_kg_per_year: float


class ProductProjection(BaseModel):
    monthly_bill: float
    product_price: float
    monthly_savings: float
    payback_years: float
    lifetime_years: int
    lifetime_savings: float
    capped_by_product: bool = Field(
        False, description="True when savings hit the system's rated ceiling rather than the bill share."
    )


class SizingReport(BaseModel):
    """Combined output of a profile-based sizing request."""

    load: LoadEstimate
    bill_daily_kwh: Optional[float] = None
    recommendation: SizingRecommendation
