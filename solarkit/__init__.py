"""
SolarKit
========

Rooftop solar storefront toolkit:
- Sizing and financial estimation for residential PV systems
- Product catalog with EMI and rated-savings derivation
- Quote negotiation, lead capture and a simulated payment flow
- Admin back office over a pluggable document store

Architecture:
- sizing/: load aggregation, plant sizing, savings projections
- catalog/: solar kit products and listing filters
- store/: document store interface and in-memory backend
- storefront/: accounts, quotes, leads, payments, admin services
- ui/: Streamlit storefront interface
"""

__version__ = "1.0.0"
