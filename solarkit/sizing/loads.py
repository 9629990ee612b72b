"""
Load Aggregation
================

Reduces a household's declared appliance list, and optionally its
electricity bill, to the daily energy figure the plant is sized for.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np
from pydantic import ValidationError

from .config import SizingConfig
from .errors import InvalidLoadInput
from .models import ApplianceLoad, BillingSample, LoadEstimate

logger = logging.getLogger(__name__)

LoadRow = Union[ApplianceLoad, Mapping[str, Any]]


def _coerce_row(row: LoadRow, index: int) -> ApplianceLoad:
    if isinstance(row, ApplianceLoad):
        return row
    try:
        return ApplianceLoad.model_validate(row)
    except ValidationError as e:
        raise InvalidLoadInput(f"Row {index}: malformed appliance load ({e.error_count()} errors)") from e


def _check_row(row: ApplianceLoad, index: int) -> None:
    label = f"Row {index} ({row.name})"
    for field, value in (
        ("wattage_watts", row.wattage_watts),
        ("quantity", row.quantity),
        ("hours_per_day", row.hours_per_day),
    ):
        if not math.isfinite(value):
            raise InvalidLoadInput(f"{label}: {field} must be finite")
        if value < 0:
            raise InvalidLoadInput(f"{label}: {field} must be non-negative")
    if row.hours_per_day > 24:
        raise InvalidLoadInput(f"{label}: hours_per_day must be <= 24")


def aggregate_load(rows: Iterable[LoadRow]) -> LoadEstimate:
    """
    Sum appliance energy into a daily figure.

    Args:
        rows: ApplianceLoad objects or equivalent mappings, in any order

    Returns:
        LoadEstimate with daily_energy_kwh (0 for an empty list)

    Raises:
        InvalidLoadInput: on negative, non-finite or malformed rows
    """
    loads: List[ApplianceLoad] = []
    for i, row in enumerate(rows):
        load = _coerce_row(row, i)
        _check_row(load, i)
        loads.append(load)

    if not loads:
        return LoadEstimate(daily_energy_kwh=0.0, appliance_count=0)

    watts = np.array([l.wattage_watts for l in loads], dtype=float)
    qty = np.array([l.quantity for l in loads], dtype=float)
    hours = np.array([l.hours_per_day for l in loads], dtype=float)
    energy_wh = float(np.sum(watts * qty * hours))

    daily_kwh = energy_wh / 1000.0
    logger.debug("Aggregated %d appliance rows to %.3f kWh/day", len(loads), daily_kwh)
    return LoadEstimate(daily_energy_kwh=daily_kwh, appliance_count=len(loads))


def bill_daily_units(sample: Union[BillingSample, float], config: Optional[SizingConfig] = None) -> float:
    """Daily kWh implied by a monthly bill reading."""
    cfg = config or SizingConfig()
    units = sample.monthly_units_kwh if isinstance(sample, BillingSample) else float(sample)
    if not math.isfinite(units) or units < 0:
        raise InvalidLoadInput("monthly_units_kwh must be a finite, non-negative number")
    return units / cfg.days_per_month


def target_daily_energy(
    rows: Iterable[LoadRow],
    billing: Union[BillingSample, float, None] = None,
    config: Optional[SizingConfig] = None,
) -> float:
    """
    Daily energy the plant should be sized for.

    The larger of the appliance estimate and the billed consumption wins,
    so an under-declared appliance list never under-sizes the plant.
    """
    appliance_kwh = aggregate_load(rows).daily_energy_kwh
    if billing is None:
        return appliance_kwh
    return max(appliance_kwh, bill_daily_units(billing, config))
