from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Union

from .config import SizingConfig
from .errors import InvalidSizingInput, UnsupportedPanelSpec
from .loads import LoadRow, aggregate_load, bill_daily_units
from .models import BillingSample, SizingRecommendation, SizingReport

logger = logging.getLogger(__name__)

# Results are reported on this grid, e.g. 29 * 0.1 -> 2.9 rather than 2.9000000000000004.
_ROUNDING_DECIMALS = 9


def _ceil_to(value: float, step: float) -> float:
    """Smallest multiple of step, as reported, that is not below value."""
    units = math.ceil(value / step)
    if units > 0 and round((units - 1) * step, _ROUNDING_DECIMALS) >= value:
        units -= 1
    elif round(units * step, _ROUNDING_DECIMALS) < value:
        units += 1
    return round(units * step, _ROUNDING_DECIMALS)


def _check_panel(wattage: float, config: SizingConfig) -> int:
    if not float(wattage).is_integer() or int(wattage) not in config.supported_panel_wattages:
        raise UnsupportedPanelSpec(wattage, config.supported_panel_wattages)
    return int(wattage)


def size_plant(
    target_daily_kwh: float,
    config: Optional[SizingConfig] = None,
    *,
    panel_wattage: Optional[int] = None,
) -> SizingRecommendation:
    """
    Convert a daily energy target into a plant size and bill of materials.

    - required capacity = target / yield * margin, rounded up to 0.1 kW
    - recommended capacity = required, rounded up to a whole kW
    - panels cover the recommended capacity; roof area scales per kW
    """
    cfg = config or SizingConfig()
    raw_wattage = panel_wattage if panel_wattage is not None else cfg.panel_wattage

    target = float(target_daily_kwh)
    if not math.isfinite(target) or target < 0:
        raise InvalidSizingInput(f"target_daily_kwh must be a finite, non-negative number (got {target_daily_kwh})")
    wattage = _check_panel(raw_wattage, cfg)

    raw_kw = target / cfg.yield_factor * cfg.safety_margin
    if not math.isfinite(raw_kw / 0.1):
        raise InvalidSizingInput(f"target_daily_kwh {target_daily_kwh} is too large to size")
    required_kw = _ceil_to(raw_kw, 0.1)
    recommended_kw = int(_ceil_to(required_kw, 1.0))

    # Integer ceil keeps panel coverage exact.
    panel_count = -(-(recommended_kw * 1000) // wattage)
    roof_area = recommended_kw * cfg.area_per_kw_sqft
    inverter = "hybrid-on-grid" if recommended_kw < cfg.hybrid_inverter_max_kw else "grid-tie"

    logger.debug(
        "Sized %.3f kWh/day -> required %.1f kW, recommended %d kW, %d x %d W panels",
        target, required_kw, recommended_kw, panel_count, wattage,
    )
    return SizingRecommendation(
        target_daily_kwh=target,
        required_plant_kw=required_kw,
        recommended_plant_kw=recommended_kw,
        panel_wattage=wattage,
        panel_count=panel_count,
        roof_area_sqft=roof_area,
        inverter_class=inverter,
    )


def size_from_profile(
    rows: Iterable[LoadRow],
    billing: Union[BillingSample, float, None] = None,
    config: Optional[SizingConfig] = None,
    *,
    panel_wattage: Optional[int] = None,
) -> SizingReport:
    """Aggregate the load, cross-check against the bill and size the plant."""
    cfg = config or SizingConfig()
    load = aggregate_load(rows)
    bill_kwh = bill_daily_units(billing, cfg) if billing is not None else None

    target = load.daily_energy_kwh if bill_kwh is None else max(load.daily_energy_kwh, bill_kwh)
    recommendation = size_plant(target, cfg, panel_wattage=panel_wattage)
    return SizingReport(load=load, bill_daily_kwh=bill_kwh, recommendation=recommendation)
