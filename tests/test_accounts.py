import pytest

from solarkit.store import InMemoryDocumentStore, StoreError
from solarkit.storefront import (
    AuthorizationError,
    Identity,
    ProfileSession,
    ProfileState,
    Role,
    register_user,
    require_role,
)


class BrokenStore(InMemoryDocumentStore):
    def get(self, collection, doc_id):
        raise StoreError("backend unavailable")


def test_register_uses_claim_for_role(store):
    admin_id = Identity(uid="u-admin", email="ops@example.com", display_name="Ops", claims={"admin": True})
    user_id = Identity(uid="u-1", email="ops-lookalike@example.com")
    assert register_user(store, admin_id).role == Role.ADMIN
    assert register_user(store, user_id, phone="98765").role == Role.USER
    assert store.get("users", "u-1").data["phone"] == "98765"


def test_session_two_phase(store, customer_identity):
    register_user(store, customer_identity, address="12 MG Road")
    session = ProfileSession()
    provisional = session.begin(customer_identity)
    assert session.state == ProfileState.PENDING
    assert provisional.address is None
    assert session.authorized_profile is None

    assert session.confirm(store) == ProfileState.CONFIRMED
    assert session.authorized_profile.address == "12 MG Road"


def test_session_confirms_without_stored_document(customer_identity):
    session = ProfileSession()
    session.begin(customer_identity)
    assert session.confirm(InMemoryDocumentStore()) == ProfileState.CONFIRMED
    assert session.authorized_profile.email == customer_identity.email


def test_stored_role_does_not_grant_admin(store, customer_identity):
    register_user(store, customer_identity)
    store.update("users", customer_identity.uid, {"role": "admin"})
    session = ProfileSession()
    session.begin(customer_identity)
    session.confirm(store)
    assert session.authorized_profile.role == Role.USER
    with pytest.raises(AuthorizationError):
        require_role(session.authorized_profile, Role.ADMIN)


def test_session_failure_keeps_provisional(customer_identity):
    session = ProfileSession()
    session.begin(customer_identity)
    assert session.confirm(BrokenStore()) == ProfileState.FAILED
    assert "unavailable" in session.error
    assert session.profile is not None
    assert session.authorized_profile is None


def test_confirm_requires_pending_and_reset(customer_identity):
    session = ProfileSession()
    with pytest.raises(RuntimeError):
        session.confirm(InMemoryDocumentStore())
    session.begin(customer_identity)
    session.reset()
    assert session.state == ProfileState.SIGNED_OUT
    assert session.profile is None


def test_require_role(admin, customer):
    assert require_role(admin, Role.ADMIN) is admin
    assert require_role(customer, Role.USER) is customer
    assert require_role(admin, Role.USER) is admin
    with pytest.raises(AuthorizationError):
        require_role(customer, Role.ADMIN)
    with pytest.raises(AuthorizationError):
        require_role(None, Role.USER)
