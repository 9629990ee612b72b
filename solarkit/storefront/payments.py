"""
Payments
========

Payment processor interface and the simulated processor used by the
storefront checkout. No real money moves.
"""

from __future__ import annotations

import logging
import math
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .accounts import now_ms
from .errors import PaymentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentReceipt:
    reference: str
    amount: float
    card_last4: str
    paid_at: int


class PaymentProcessor(ABC):
    """Takes a one-off payment for an approved quote."""

    @abstractmethod
    def charge(
        self,
        amount: float,
        card_last4: str,
        description: str = "",
        idempotency_key: Optional[str] = None,
    ) -> PaymentReceipt:
        """
        Charge ``amount`` (Rs). Raises PaymentError when declined.

        A repeated call with the same ``idempotency_key`` must return the
        receipt of the earlier successful charge without charging again.
        """


@dataclass
class SimulatedPaymentProcessor(PaymentProcessor):
    """
    Always-approving processor, except for card suffixes listed in
    ``declined_cards``. Successful charges are kept in ``ledger``.
    """
    declined_cards: Set[str] = field(default_factory=lambda: {"0002"})
    ledger: List[PaymentReceipt] = field(default_factory=list)
    _by_key: Dict[str, PaymentReceipt] = field(default_factory=dict, init=False, repr=False)

    def charge(
        self,
        amount: float,
        card_last4: str,
        description: str = "",
        idempotency_key: Optional[str] = None,
    ) -> PaymentReceipt:
        if idempotency_key is not None and idempotency_key in self._by_key:
            receipt = self._by_key[idempotency_key]
            logger.info("Replaying charge %s for key %s", receipt.reference, idempotency_key)
            return receipt

        if not math.isfinite(amount) or amount <= 0:
            raise PaymentError(f"Invalid payment amount: {amount}")
        if len(card_last4) != 4 or not card_last4.isdigit():
            raise PaymentError("Card suffix must be 4 digits")
        if card_last4 in self.declined_cards:
            logger.info("Simulated decline for card ending %s", card_last4)
            raise PaymentError("Card declined")

        receipt = PaymentReceipt(
            reference=f"SIM-{uuid.uuid4().hex[:12].upper()}",
            amount=float(amount),
            card_last4=card_last4,
            paid_at=now_ms(),
        )
        self.ledger.append(receipt)
        if idempotency_key is not None:
            self._by_key[idempotency_key] = receipt
        logger.info("Simulated charge %s for Rs %.2f (%s)", receipt.reference, amount, description)
        return receipt
