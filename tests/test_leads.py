import pytest

from solarkit.sizing import InvalidBillInput
from solarkit.storefront import (
    AuthorizationError,
    InvalidTransition,
    LeadStatus,
    NotFound,
    capture_lead,
    list_leads,
    update_lead_status,
)


def test_capture_attaches_estimate(store, customer_identity):
    lead = capture_lead(store, 3000, customer_identity)
    assert lead.estimated_savings == 28800
    assert lead.carbon_offset == pytest.approx(3702.857, rel=1e-4)
    assert store.get("leads", lead.id).data["user_email"] == "asha@example.com"


def test_anonymous_lead(store):
    lead = capture_lead(store, 1500)
    assert lead.user_id is None
    assert lead.status == LeadStatus.INTERESTED


def test_invalid_bill_is_not_recorded(store):
    with pytest.raises(InvalidBillInput):
        capture_lead(store, -100)
    assert store.query("leads") == []


def test_admin_works_leads(store, admin, customer):
    lead = capture_lead(store, 4000)
    capture_lead(store, 2000)

    with pytest.raises(AuthorizationError):
        list_leads(store, customer)
    assert len(list_leads(store, admin)) == 2

    update_lead_status(store, admin, lead.id, LeadStatus.CONTACTED)
    update_lead_status(store, admin, lead.id, LeadStatus.CONVERTED)
    assert [d.id for d in list_leads(store, admin, LeadStatus.CONVERTED)] == [lead.id]

    with pytest.raises(InvalidTransition):
        update_lead_status(store, admin, lead.id, LeadStatus.LOST)
    with pytest.raises(NotFound):
        update_lead_status(store, admin, "missing", LeadStatus.LOST)
