"""
Storefront Services
===================

Domain services behind the storefront UI:
- Accounts: roles, registration, two-phase profile loading
- Quotes: request, admin revision, customer response, payment
- Leads: design requests captured from the savings calculator
- Admin: catalog maintenance and user listing
"""

from .accounts import Identity, ProfileSession, ProfileState, Role, UserProfile, register_user, require_role
from .admin import CatalogAdmin, ProductDraft
from .errors import (
    AuthorizationError,
    InvalidPrice,
    InvalidTransition,
    NotFound,
    OutOfStock,
    PaymentError,
    StorefrontError,
)
from .leads import DesignLead, LeadStatus, capture_lead, list_leads, update_lead_status
from .payments import PaymentProcessor, PaymentReceipt, SimulatedPaymentProcessor
from .quotes import ContactDetails, Quote, QuoteService, QuoteStatus

__all__ = [
    "AuthorizationError",
    "CatalogAdmin",
    "ContactDetails",
    "DesignLead",
    "Identity",
    "InvalidPrice",
    "InvalidTransition",
    "LeadStatus",
    "NotFound",
    "OutOfStock",
    "PaymentError",
    "PaymentProcessor",
    "PaymentReceipt",
    "ProductDraft",
    "ProfileSession",
    "ProfileState",
    "Quote",
    "QuoteService",
    "QuoteStatus",
    "Role",
    "SimulatedPaymentProcessor",
    "StorefrontError",
    "UserProfile",
    "capture_lead",
    "list_leads",
    "register_user",
    "require_role",
    "update_lead_status",
]
