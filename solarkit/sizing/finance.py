"""
Financial Projections
=====================

Savings, payback and loan figures for rooftop systems.

Two projections answer different questions and are kept separate:
- estimate_from_bill: coarse savings before any system is chosen
- project_for_product: payback for a specific catalog system
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
import pandas as pd

from .config import HeuristicConfig
from .errors import DivisionUndefined, InvalidBillInput
from .models import ProductProjection, QuickEstimate

logger = logging.getLogger(__name__)


def _check_bill(monthly_bill: float) -> float:
    bill = float(monthly_bill)
    if not math.isfinite(bill) or bill < 0:
        raise InvalidBillInput(f"monthly_bill must be a finite, non-negative amount (got {monthly_bill})")
    return bill


def estimate_from_bill(monthly_bill: float, config: Optional[HeuristicConfig] = None) -> QuickEstimate:
    """
    Quick savings and carbon estimate from a monthly bill alone.

    Args:
        monthly_bill: Current monthly electricity bill (Rs)
        config: Savings ratio, tariff and emission factor assumptions

    Returns:
        QuickEstimate with annual savings (Rs) and CO2 offset (kg/yr)
    """
    cfg = config or HeuristicConfig()
    bill = _check_bill(monthly_bill)
    if not math.isfinite(cfg.tariff_per_kwh) or cfg.tariff_per_kwh <= 0:
        raise DivisionUndefined("tariff_per_kwh must be positive to convert the bill into units")

    annual_savings = bill * cfg.savings_ratio * 12
    monthly_units = bill / cfg.tariff_per_kwh
    carbon = monthly_units * cfg.savings_ratio * 12 * cfg.emission_factor

    return QuickEstimate(
        monthly_bill=bill,
        annual_savings=annual_savings,
        carbon_offset_kg_per_year=carbon,
    )


def project_for_product(
    monthly_bill: float,
    product_price: float,
    product_max_savings: float,
    config: Optional[HeuristicConfig] = None,
) -> ProductProjection:
    """
    Payback and lifetime savings for a selected system.

    Savings are the configured share of the bill, capped at the system's
    rated monthly savings.

    Raises:
        InvalidBillInput: bill is negative or non-finite
        DivisionUndefined: price or resulting savings are not positive
    """
    cfg = config or HeuristicConfig()
    bill = _check_bill(monthly_bill)
    price = float(product_price)
    ceiling = float(product_max_savings)

    if not math.isfinite(price) or price <= 0:
        raise DivisionUndefined("product_price must be positive to compute payback")
    if not math.isfinite(ceiling):
        raise DivisionUndefined("product_max_savings must be a finite amount to compute payback")

    bill_share = bill * cfg.product_savings_ratio
    current = min(bill_share, ceiling)
    if not math.isfinite(current) or current <= 0:
        raise DivisionUndefined("monthly savings must be positive to compute payback")

    annual = current * 12
    return ProductProjection(
        monthly_bill=bill,
        product_price=price,
        monthly_savings=current,
        payback_years=price / annual,
        lifetime_years=cfg.lifetime_years,
        lifetime_savings=annual * cfg.lifetime_years,
        capped_by_product=ceiling < bill_share,
    )


def rated_payback_years(product_price: float, rated_monthly_savings: float) -> float:
    """Payback at the system's rated savings, as shown on a product page."""
    price = float(product_price)
    savings = float(rated_monthly_savings)
    if not (math.isfinite(price) and price > 0):
        raise DivisionUndefined("product_price must be positive to compute payback")
    if not (math.isfinite(savings) and savings > 0):
        raise DivisionUndefined("rated_monthly_savings must be positive to compute payback")
    return price / (savings * 12)


def amortized_emi(principal: float, annual_rate_pct: float, months: int) -> float:
    """
    Equated monthly installment for a fixed-rate loan.

    Args:
        principal: Loan amount (Rs)
        annual_rate_pct: Nominal annual interest rate (%)
        months: Tenure in months

    Returns:
        Monthly installment (Rs)
    """
    if months <= 0:
        raise DivisionUndefined("months must be positive to spread a loan")
    if principal < 0 or annual_rate_pct < 0:
        raise ValueError("principal and annual_rate_pct must be non-negative")

    r = annual_rate_pct / 12.0 / 100.0
    if r == 0:
        return principal / months
    growth = (1 + r) ** months
    return principal * r * growth / (growth - 1)


def savings_timeline(projection: ProductProjection, years: Optional[int] = None) -> pd.DataFrame:
    """
    Year-by-year cumulative savings against the upfront price.

    Returns:
        DataFrame with year, annual_savings, cumulative_savings and
        net_position (cumulative savings minus price) columns.
    """
    horizon = int(years or projection.lifetime_years)
    year = np.arange(0, horizon + 1)
    annual = np.where(year == 0, 0.0, projection.monthly_savings * 12)
    cumulative = np.cumsum(annual)
    return pd.DataFrame(
        {
            "year": year,
            "annual_savings": annual,
            "cumulative_savings": cumulative,
            "net_position": cumulative - projection.product_price,
        }
    )
