"""Storefront service errors."""


class StorefrontError(Exception):
    """Base class for storefront service failures."""


class NotFound(StorefrontError):
    """A referenced product, quote, lead or user does not exist."""


class AuthorizationError(StorefrontError):
    """The caller's role does not permit the action."""


class InvalidTransition(StorefrontError):
    """A quote or lead cannot move from its current status to the requested one."""


class OutOfStock(StorefrontError):
    """A quote was requested for a kit that is not in stock."""


class PaymentError(StorefrontError):
    """The payment processor declined or could not take the payment."""


class InvalidPrice(StorefrontError, ValueError):
    """A list or quoted price is not a finite positive amount."""
