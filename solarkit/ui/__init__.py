"""
UI Module
=========

Streamlit storefront interface:
- Savings Calculator
- System Designer
- Catalog
"""
