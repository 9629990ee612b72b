"""
Quote Negotiation
=================

Quote requests from customers, admin revisions, customer responses and
payment of accepted quotes.

Status flow:
    pending -> draft | sent | rejected
    draft -> sent | rejected
    sent -> draft | sent | approved | rejected
    approved -> paid
    rejected, paid: terminal
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field

from ..catalog.products import Product
from ..sizing.config import CatalogConfig
from ..store.base import DocumentStore, StoreError, Unsubscribe
from .accounts import Role, UserProfile, now_ms, require_role
from .errors import AuthorizationError, InvalidPrice, InvalidTransition, NotFound, OutOfStock
from .payments import PaymentProcessor, PaymentReceipt

logger = logging.getLogger(__name__)

QUOTES = "quotes"
PRODUCTS = "products"


class QuoteStatus(str, Enum):
    PENDING = "pending"
    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"


TRANSITIONS: Dict[QuoteStatus, FrozenSet[QuoteStatus]] = {
    QuoteStatus.PENDING: frozenset({QuoteStatus.DRAFT, QuoteStatus.SENT, QuoteStatus.REJECTED}),
    QuoteStatus.DRAFT: frozenset({QuoteStatus.SENT, QuoteStatus.REJECTED}),
    QuoteStatus.SENT: frozenset(
        {QuoteStatus.DRAFT, QuoteStatus.SENT, QuoteStatus.APPROVED, QuoteStatus.REJECTED}
    ),
    QuoteStatus.APPROVED: frozenset({QuoteStatus.PAID}),
    QuoteStatus.REJECTED: frozenset(),
    QuoteStatus.PAID: frozenset(),
}


def can_transition(current: QuoteStatus, target: QuoteStatus) -> bool:
    return target in TRANSITIONS[current]


class ContactDetails(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    pincode: str = Field(..., min_length=1)

    @property
    def installation_address(self) -> str:
        return f"{self.street}, {self.city} - {self.pincode}"


class Quote(BaseModel):
    id: str = ""
    user_id: str
    user_name: str
    user_email: str
    product_id: str
    product_name: str
    status: QuoteStatus = QuoteStatus.PENDING
    base_price: float
    final_price: Optional[float] = None
    admin_notes: Optional[str] = None
    address: str
    phone: str
    payment_ref: Optional[str] = None
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)

    @property
    def effective_price(self) -> float:
        return self.final_price if self.final_price is not None else self.base_price

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Quote":
        return cls.model_validate({**data, "id": doc_id})


class QuoteService:
    """Quote workflow over a document store."""

    def __init__(self, store: DocumentStore, config: Optional[CatalogConfig] = None):
        self.store = store
        self.config = config or CatalogConfig()

    def get(self, quote_id: str) -> Quote:
        doc = self.store.get(QUOTES, quote_id)
        if doc is None:
            raise NotFound(f"Quote {quote_id} not found")
        return Quote.from_document(doc.id, doc.data)

    def request_quote(self, user: Optional[UserProfile], product_id: str, contact: ContactDetails) -> Quote:
        """Customer asks for a final quote on an in-stock kit."""
        user = require_role(user, Role.USER)
        doc = self.store.get(PRODUCTS, product_id)
        if doc is None:
            raise NotFound(f"Product {product_id} not found")
        product = Product.from_document(doc.id, doc.data)
        if not product.in_stock:
            raise OutOfStock(f"{product.name} is out of stock")

        quote = Quote(
            user_id=user.uid,
            user_name=contact.name,
            user_email=contact.email,
            product_id=product.id,
            product_name=product.name,
            base_price=product.price,
            address=contact.installation_address,
            phone=contact.phone,
        )
        quote.id = self.store.add(QUOTES, quote.model_dump(mode="json", exclude={"id"}))
        logger.info("Quote %s requested by %s for %s", quote.id, user.uid, product.id)
        return quote

    def quotes_for_user(self, user: Optional[UserProfile]) -> List[Quote]:
        user = require_role(user, Role.USER)
        docs = self.store.query(QUOTES, where=[("user_id", user.uid)], order_by="created_at", descending=True)
        return [Quote.from_document(d.id, d.data) for d in docs]

    def all_quotes(self, admin: Optional[UserProfile]) -> List[Quote]:
        require_role(admin, Role.ADMIN)
        docs = self.store.query(QUOTES, order_by="created_at", descending=True)
        return [Quote.from_document(d.id, d.data) for d in docs]

    def subscribe_to_user_quotes(
        self, user: Optional[UserProfile], listener: Callable[[List[Quote]], None]
    ) -> Unsubscribe:
        user = require_role(user, Role.USER)
        return self.store.subscribe(
            QUOTES,
            lambda docs: listener([Quote.from_document(d.id, d.data) for d in docs]),
            where=[("user_id", user.uid)],
            order_by="created_at",
            descending=True,
        )

    def _move(self, quote: Quote, target: QuoteStatus, **fields) -> Quote:
        if not can_transition(quote.status, target):
            raise InvalidTransition(f"Quote {quote.id}: {quote.status.value} -> {target.value} not allowed")
        update = {"status": target.value, "updated_at": now_ms(), **fields}
        self.store.update(QUOTES, quote.id, update)
        logger.info("Quote %s: %s -> %s", quote.id, quote.status.value, target.value)
        return quote.model_copy(update={**update, "status": target})

    def revise(
        self,
        admin: Optional[UserProfile],
        quote_id: str,
        final_price: float,
        status: QuoteStatus = QuoteStatus.SENT,
        notes: Optional[str] = None,
    ) -> Quote:
        """Admin sets a final price and moves the quote to draft, sent or rejected."""
        require_role(admin, Role.ADMIN)
        if status not in (QuoteStatus.DRAFT, QuoteStatus.SENT, QuoteStatus.REJECTED):
            raise InvalidTransition(f"Admins cannot revise a quote to {status.value}")
        if not math.isfinite(final_price) or final_price <= 0:
            raise InvalidPrice(f"final_price must be a positive amount (got {final_price})")
        quote = self.get(quote_id)
        fields = {"final_price": float(final_price)}
        if notes is not None:
            fields["admin_notes"] = notes
        return self._move(quote, status, **fields)

    def revise_and_send(self, admin: Optional[UserProfile], quote_id: str) -> Quote:
        """Send the quote at the standard discount off its base price."""
        quote = self.get(quote_id)
        price = round(quote.base_price * self.config.quote_discount, 2)
        return self.revise(admin, quote_id, price, QuoteStatus.SENT)

    def _owned(self, user: Optional[UserProfile], quote_id: str) -> Quote:
        user = require_role(user, Role.USER)
        quote = self.get(quote_id)
        if quote.user_id != user.uid:
            raise AuthorizationError(f"Quote {quote_id} belongs to another user")
        return quote

    def respond(self, user: Optional[UserProfile], quote_id: str, accept: bool) -> Quote:
        """Customer accepts or declines a sent quote."""
        quote = self._owned(user, quote_id)
        if quote.status != QuoteStatus.SENT:
            raise InvalidTransition(f"Quote {quote_id} is {quote.status.value}; only sent quotes can be answered")
        return self._move(quote, QuoteStatus.APPROVED if accept else QuoteStatus.REJECTED)

    def pay(
        self,
        user: Optional[UserProfile],
        quote_id: str,
        processor: PaymentProcessor,
        card_last4: str,
    ) -> PaymentReceipt:
        """
        Charge the effective price of an approved quote and mark it paid.

        The charge is keyed on the quote id, so retrying after a failed
        status write replays the original receipt instead of charging again.
        """
        quote = self._owned(user, quote_id)
        if not can_transition(quote.status, QuoteStatus.PAID):
            raise InvalidTransition(f"Quote {quote_id} is {quote.status.value}; only approved quotes can be paid")
        receipt = processor.charge(
            quote.effective_price,
            card_last4,
            description=quote.product_name,
            idempotency_key=f"quote:{quote.id}",
        )
        try:
            self._move(quote, QuoteStatus.PAID, payment_ref=receipt.reference)
        except StoreError:
            logger.error("Quote %s charged (%s) but not marked paid; retry pay() to settle", quote.id, receipt.reference)
            raise
        return receipt
