"""
SolarKit Storefront - Streamlit UI
==================================

Customer-facing estimator pages backed by an in-memory catalog.

Pages:
1. Savings Calculator
2. System Designer
3. Catalog

Run with:
    streamlit run solarkit/ui/app.py
"""

import sys
from pathlib import Path
from typing import List

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

# Allow `streamlit run` from the repo root
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from solarkit.catalog import CAPACITY_OPTIONS, Product, ProductFilter, filter_products, recommend_products
from solarkit.sizing import (
    DivisionUndefined,
    EstimatorConfig,
    EstimatorError,
    estimate_from_bill,
    project_for_product,
    savings_timeline,
    size_from_profile,
)
from solarkit.storefront import CatalogAdmin, Role, UserProfile, capture_lead
from solarkit.store import InMemoryDocumentStore


st.set_page_config(
    page_title="SolarKit Storefront",
    page_icon="☀️",
    layout="wide",
    initial_sidebar_state="expanded",
)

DEFAULT_APPLIANCES = pd.DataFrame(
    [
        {"name": "LED Bulb", "wattage_watts": 12.0, "quantity": 10, "hours_per_day": 6.0},
        {"name": "Ceiling Fan", "wattage_watts": 75.0, "quantity": 4, "hours_per_day": 12.0},
        {"name": "Refrigerator", "wattage_watts": 250.0, "quantity": 1, "hours_per_day": 24.0},
    ]
)


def get_store() -> InMemoryDocumentStore:
    """Session store seeded with the default catalog."""
    if "store" not in st.session_state:
        store = InMemoryDocumentStore()
        system = UserProfile(uid="system", email="system@localhost", role=Role.ADMIN)
        CatalogAdmin(store).seed_defaults(system)
        st.session_state["store"] = store
    return st.session_state["store"]


def get_config() -> EstimatorConfig:
    return st.session_state.setdefault("config", EstimatorConfig())


def page_savings_calculator(config: EstimatorConfig):
    """Quick estimate from the monthly bill."""
    st.header("💡 How much can you save?")

    bill = st.slider("Your Monthly Electricity Bill (₹)", min_value=500, max_value=25000, value=3000, step=500)
    try:
        est = estimate_from_bill(bill, config.heuristics)
    except EstimatorError as e:
        st.error(f"Not calculable: {e}")
        return

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Annual Savings", f"₹{est.annual_savings:,.0f}")
    with col2:
        st.metric("CO2 Offset", f"{est.carbon_offset_kg_per_year:,.0f} kg/yr")

    if st.button("Get Detailed System Design", type="primary", use_container_width=True):
        lead = capture_lead(get_store(), bill, config=config.heuristics)
        st.success(f"Thanks! Our design team will reach out (reference {lead.id}).")


def page_system_designer(config: EstimatorConfig):
    """Appliance-based sizing with a bill cross-check."""
    st.header("🏠 System Designer")
    st.caption("List your appliances; we size for whichever is larger, your appliances or your bill.")

    rows = st.data_editor(DEFAULT_APPLIANCES, num_rows="dynamic", use_container_width=True)
    col1, col2 = st.columns(2)
    with col1:
        monthly_units = st.number_input("Monthly units on your bill (kWh)", min_value=0.0, value=300.0, step=10.0)
    with col2:
        panel = st.selectbox(
            "Panel wattage (W)",
            config.sizing.supported_panel_wattages,
            index=list(config.sizing.supported_panel_wattages).index(config.sizing.panel_wattage),
        )

    records = rows.dropna(how="all").to_dict(orient="records")
    try:
        report = size_from_profile(records, monthly_units, config.sizing, panel_wattage=int(panel))
    except EstimatorError as e:
        st.error(f"Please check your inputs: {e}")
        return

    rec = report.recommendation
    st.subheader("Recommendation")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Appliance Load", f"{report.load.daily_energy_kwh:.2f} kWh/day")
        st.caption(f"Bill: {report.bill_daily_kwh:.2f} kWh/day")
    with c2:
        st.metric("Plant Size", f"{rec.recommended_plant_kw} kW")
        st.caption(f"Required: {rec.required_plant_kw:.1f} kW")
    with c3:
        st.metric("Panels", f"{rec.panel_count} × {rec.panel_wattage} W")
    with c4:
        st.metric("Roof Area", f"{rec.roof_area_sqft:,.0f} sqft")
        st.caption(f"Inverter: {rec.inverter_class}")

    products = [Product.from_document(d.id, d.data) for d in get_store().query("products")]
    matches = recommend_products(products, rec.recommended_plant_kw)
    if matches:
        st.success(f"Suggested kit: **{matches[0].name}** at ₹{matches[0].price:,.0f}")
    else:
        st.warning("No in-stock kit covers this plant size. Request a custom design.")


def _projection_chart(product: Product, bill: float, config: EstimatorConfig):
    try:
        proj = project_for_product(bill, product.price, product.savings, config.heuristics)
    except DivisionUndefined:
        st.info("Payback: not calculable for these inputs.")
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Monthly Savings", f"₹{proj.monthly_savings:,.0f}")
        if proj.capped_by_product:
            st.caption("Capped at the system's rated output")
    with col2:
        st.metric("Payback Period", f"{proj.payback_years:.1f} years")
    with col3:
        st.metric(f"{proj.lifetime_years}-Year Savings", f"₹{proj.lifetime_savings:,.0f}")

    df = savings_timeline(proj)
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=df["year"], y=df["net_position"], mode="lines", name="Net position (₹)"))
    fig.add_hline(y=0, line_dash="dash", line_color="gray")
    fig.update_layout(
        xaxis_title="Year",
        yaxis_title="Cumulative savings − price (₹)",
        height=320,
        margin=dict(l=20, r=20, t=20, b=20),
    )
    st.plotly_chart(fig, use_container_width=True)


def page_catalog(config: EstimatorConfig):
    """Kit listing with filters and per-product projection."""
    st.header("🛒 Solar Rooftop Kits")

    with st.sidebar:
        st.subheader("Filters")
        capacity = st.radio("Capacity", CAPACITY_OPTIONS, format_func=lambda c: "All Capacities" if c == "all" else c)
        max_price = st.slider("Max Price (₹)", 50000, 600000, 600000, step=5000)
        max_emi = st.slider("Max EMI (₹)", 2000, 20000, 20000, step=500)

    products = CatalogAdmin(get_store(), config.catalog).list_products()
    shown: List[Product] = filter_products(
        products, ProductFilter(capacity=capacity, max_price=max_price, max_emi=max_emi)
    )
    st.caption(f"{len(shown)} systems found")

    if not shown:
        st.info("No matching systems. Try adjusting your filters.")
        return

    for product in shown:
        with st.expander(f"{product.name} | ₹{product.price:,.0f}", expanded=False):
            st.write(product.description)
            st.write(" · ".join(product.features))
            col1, col2 = st.columns(2)
            with col1:
                st.metric("EMI Starts at", f"₹{product.emi:,.0f}/mo")
            with col2:
                payback = product.payback_years()
                st.metric("Rated Payback", f"{payback:.1f} years" if payback is not None else "n/a")
            if not product.in_stock:
                st.warning("Currently unavailable")
            bill = st.slider(
                "Your monthly bill (₹)", 500, 25000, 5000, step=500, key=f"bill_{product.id}"
            )
            _projection_chart(product, bill, config)


def main():
    """Main application."""
    st.title("☀️ SolarKit Storefront")
    st.caption("Rooftop solar sizing, savings and kits")

    config = get_config()

    with st.sidebar:
        st.header("Navigation")
        page = st.radio(
            "Select Page",
            [
                "💡 Savings Calculator",
                "🏠 System Designer",
                "🛒 Catalog",
            ],
        )
        st.divider()

    if "Savings" in page:
        page_savings_calculator(config)
    elif "Designer" in page:
        page_system_designer(config)
    elif "Catalog" in page:
        page_catalog(config)


if __name__ == "__main__":
    main()
