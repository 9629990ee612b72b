from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..sizing.config import HeuristicConfig
from ..sizing.finance import estimate_from_bill
from ..store.base import DocumentStore
from .accounts import Identity, Role, UserProfile, now_ms, require_role
from .errors import InvalidTransition, NotFound

logger = logging.getLogger(__name__)

LEADS = "leads"


class LeadStatus(str, Enum):
    INTERESTED = "interested"
    CONTACTED = "contacted"
    CONVERTED = "converted"
    LOST = "lost"


# converted and lost are closed outcomes
_OPEN = (LeadStatus.INTERESTED, LeadStatus.CONTACTED)


class DesignLead(BaseModel):
    id: str = ""
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    monthly_bill: float
    estimated_savings: float
    carbon_offset: float
    status: LeadStatus = LeadStatus.INTERESTED
    created_at: int = Field(default_factory=now_ms)


def capture_lead(
    store: DocumentStore,
    monthly_bill: float,
    identity: Optional[Identity] = None,
    config: Optional[HeuristicConfig] = None,
) -> DesignLead:
    """Record a "get detailed design" request with its quick estimate attached."""
    estimate = estimate_from_bill(monthly_bill, config)
    lead = DesignLead(
        user_id=identity.uid if identity else None,
        user_email=identity.email if identity else None,
        monthly_bill=estimate.monthly_bill,
        estimated_savings=estimate.annual_savings,
        carbon_offset=estimate.carbon_offset_kg_per_year,
    )
    lead.id = store.add(LEADS, lead.model_dump(mode="json", exclude={"id"}))
    logger.info("Captured lead %s (bill Rs %.0f)", lead.id, lead.monthly_bill)
    return lead


def list_leads(
    store: DocumentStore,
    admin: Optional[UserProfile],
    status: Optional[LeadStatus] = None,
) -> List[DesignLead]:
    require_role(admin, Role.ADMIN)
    where = [("status", status.value)] if status else []
    docs = store.query(LEADS, where=where, order_by="created_at", descending=True)
    return [DesignLead.model_validate({**d.data, "id": d.id}) for d in docs]


def update_lead_status(
    store: DocumentStore,
    admin: Optional[UserProfile],
    lead_id: str,
    status: LeadStatus,
) -> DesignLead:
    require_role(admin, Role.ADMIN)
    doc = store.get(LEADS, lead_id)
    if doc is None:
        raise NotFound(f"Lead {lead_id} not found")
    lead = DesignLead.model_validate({**doc.data, "id": doc.id})
    if lead.status not in _OPEN:
        raise InvalidTransition(f"Lead {lead_id} is already {lead.status.value}")
    store.update(LEADS, lead_id, {"status": status.value})
    return lead.model_copy(update={"status": status})
