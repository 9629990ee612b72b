"""Load aggregation and sizing-target tests."""

import math

import pytest

from solarkit.sizing import (
    ApplianceLoad,
    BillingSample,
    InvalidLoadInput,
    SizingConfig,
    aggregate_load,
    bill_daily_units,
    target_daily_energy,
)


def test_household_daily_energy(household):
    # (12*10*6 + 75*4*12 + 250*1*24) / 1000 = (720 + 3600 + 6000) / 1000
    est = aggregate_load(household)
    assert est.daily_energy_kwh == pytest.approx(10.32)
    assert est.appliance_count == 3


def test_empty_list_is_zero():
    assert aggregate_load([]).daily_energy_kwh == 0.0


def test_accepts_mappings():
    rows = [{"name": "TV", "wattage_watts": 100, "quantity": 1, "hours_per_day": 5}]
    assert aggregate_load(rows).daily_energy_kwh == pytest.approx(0.5)


def test_commutative_under_reordering(household):
    forward = aggregate_load(household).daily_energy_kwh
    backward = aggregate_load(list(reversed(household))).daily_energy_kwh
    assert forward == pytest.approx(backward)


def test_additive_over_concatenation(household):
    extra = [
        ApplianceLoad(name="AC", wattage_watts=1500, quantity=1, hours_per_day=8),
        ApplianceLoad(name="Pump", wattage_watts=750, quantity=1, hours_per_day=1.5),
    ]
    separate = aggregate_load(household).daily_energy_kwh + aggregate_load(extra).daily_energy_kwh
    together = aggregate_load(household + extra).daily_energy_kwh
    assert together == pytest.approx(separate)


@pytest.mark.parametrize(
    "row",
    [
        {"wattage_watts": -12, "quantity": 1, "hours_per_day": 6},
        {"wattage_watts": 12, "quantity": -1, "hours_per_day": 6},
        {"wattage_watts": 12, "quantity": 1, "hours_per_day": -1},
        {"wattage_watts": 12, "quantity": 1, "hours_per_day": 25},
        {"wattage_watts": math.inf, "quantity": 1, "hours_per_day": 6},
        {"wattage_watts": 12, "quantity": 1, "hours_per_day": math.nan},
    ],
)
def test_rejects_invalid_rows(row):
    with pytest.raises(InvalidLoadInput):
        aggregate_load([row])


def test_rejects_malformed_rows():
    with pytest.raises(InvalidLoadInput):
        aggregate_load([{"wattage_watts": "lots", "hours_per_day": 2}])
    with pytest.raises(InvalidLoadInput):
        aggregate_load([{"wattage_watts": 10, "quantity": 2.5, "hours_per_day": 2}])


def test_bad_row_is_not_clamped(household):
    bad = household + [ApplianceLoad(name="Bad", wattage_watts=-100, quantity=1, hours_per_day=1)]
    with pytest.raises(InvalidLoadInput, match="Bad"):
        aggregate_load(bad)


def test_bill_daily_units():
    assert bill_daily_units(BillingSample(monthly_units_kwh=300)) == pytest.approx(10.0)
    assert bill_daily_units(310, SizingConfig(days_per_month=31)) == pytest.approx(10.0)
    with pytest.raises(InvalidLoadInput):
        bill_daily_units(-1)


def test_target_takes_larger_of_appliances_and_bill(household):
    assert target_daily_energy(household, BillingSample(monthly_units_kwh=300)) == pytest.approx(10.32)
    assert target_daily_energy(household, 600) == pytest.approx(20.0)
    assert target_daily_energy(household) == pytest.approx(10.32)
