"""Savings, payback and EMI tests."""

import math

import pytest

from solarkit.sizing import (
    DivisionUndefined,
    HeuristicConfig,
    InvalidBillInput,
    amortized_emi,
    estimate_from_bill,
    project_for_product,
    rated_payback_years,
    savings_timeline,
)


def test_quick_estimate_reference_bill():
    est = estimate_from_bill(3000)
    assert est.annual_savings == pytest.approx(28800)
    # (3000 / 7) * 0.8 * 12 * 0.9
    assert est.carbon_offset_kg_per_year == pytest.approx(3702.857, rel=1e-6)
    assert round(est.carbon_offset_kg_per_year) == 3703


def test_quick_estimate_uses_config():
    cfg = HeuristicConfig(savings_ratio=0.5, tariff_per_kwh=10, emission_factor=0.8)
    est = estimate_from_bill(2000, cfg)
    assert est.annual_savings == pytest.approx(12000)
    assert est.carbon_offset_kg_per_year == pytest.approx(200 * 0.5 * 12 * 0.8)


def test_quick_estimate_zero_bill():
    est = estimate_from_bill(0)
    assert est.annual_savings == 0
    assert est.carbon_offset_kg_per_year == 0


@pytest.mark.parametrize("tariff", [0.0, -7.0])
def test_quick_estimate_non_positive_tariff(tariff):
    with pytest.raises(DivisionUndefined):
        estimate_from_bill(3000, HeuristicConfig(tariff_per_kwh=tariff))


@pytest.mark.parametrize("bill", [-1, math.nan, math.inf])
def test_invalid_bill(bill):
    with pytest.raises(InvalidBillInput):
        estimate_from_bill(bill)
    with pytest.raises(InvalidBillInput):
        project_for_product(bill, 185000, 4500)


def test_product_projection_bill_share():
    proj = project_for_product(5000, 185000, 4500)
    # min(5000 * 0.85, 4500) = 4250
    assert proj.monthly_savings == pytest.approx(4250)
    assert not proj.capped_by_product
    assert proj.payback_years == pytest.approx(185000 / (4250 * 12))
    assert proj.lifetime_savings == pytest.approx(4250 * 12 * 25)
    assert proj.lifetime_years == 25


def test_product_projection_capped_by_rating():
    proj = project_for_product(20000, 185000, 4500)
    assert proj.monthly_savings == pytest.approx(4500)
    assert proj.capped_by_product
    assert proj.payback_years == pytest.approx(185000 / 54000)


@pytest.mark.parametrize(
    "bill,price,max_savings",
    [
        (5000, 0, 4500),
        (5000, -1, 4500),
        (0, 185000, 4500),
        (5000, 185000, 0),
        (5000, 185000, -10),
        (5000, 185000, math.nan),
        (5000, 185000, math.inf),
    ],
)
def test_product_projection_undefined(bill, price, max_savings):
    with pytest.raises(DivisionUndefined):
        project_for_product(bill, price, max_savings)


def test_rated_payback():
    assert rated_payback_years(185000, 4500) == pytest.approx(3.4259, rel=1e-3)
    with pytest.raises(DivisionUndefined):
        rated_payback_years(185000, 0)
    with pytest.raises(DivisionUndefined):
        rated_payback_years(0, 4500)


def test_amortized_emi():
    # 1,00,000 at 12% for 12 months
    assert amortized_emi(100000, 12, 12) == pytest.approx(8884.88, abs=0.01)
    assert amortized_emi(60000, 0, 30) == pytest.approx(2000)
    with pytest.raises(DivisionUndefined):
        amortized_emi(100000, 10, 0)


def test_savings_timeline_crosses_zero_at_payback():
    proj = project_for_product(5000, 185000, 4500)
    df = savings_timeline(proj)
    assert list(df.columns) == ["year", "annual_savings", "cumulative_savings", "net_position"]
    assert len(df) == 26
    assert df["net_position"].iloc[0] == pytest.approx(-185000)
    assert df["cumulative_savings"].iloc[-1] == pytest.approx(proj.lifetime_savings)
    first_positive = int(df.loc[df["net_position"] >= 0, "year"].iloc[0])
    assert first_positive == math.ceil(proj.payback_years)
