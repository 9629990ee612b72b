"""
Accounts & Roles
================

User profiles, role resolution and the two-phase profile load that
follows sign-in.

Role authority is the identity provider's verified ``admin`` claim.
The ``role`` field stored on the user document is informational only
and is never used to grant access.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..store.base import DocumentStore, StoreError
from .errors import AuthorizationError

logger = logging.getLogger(__name__)

USERS = "users"


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class Identity:
    """
    Signed-in principal as reported by the identity provider.

    Attributes:
        uid: Provider user id
        email: Verified email address
        display_name: Name shown in the UI
        claims: Server-verified custom claims
    """
    uid: str
    email: str
    display_name: str = "User"
    claims: Dict[str, Any] = field(default_factory=dict)


def resolve_role(identity: Identity) -> Role:
    return Role.ADMIN if identity.claims.get("admin") is True else Role.USER


def now_ms() -> int:
    return int(time.time() * 1000)


class UserProfile(BaseModel):
    uid: str
    email: str
    display_name: str = "User"
    role: Role = Role.USER
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: int = Field(default_factory=now_ms)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def require_role(profile: Optional[UserProfile], role: Role) -> UserProfile:
    """Authorization checkpoint. Returns the profile when it holds ``role``."""
    if profile is None:
        raise AuthorizationError("Sign in required")
    if role == Role.ADMIN and profile.role != Role.ADMIN:
        raise AuthorizationError(f"{profile.email} is not an administrator")
    return profile


def register_user(
    store: DocumentStore,
    identity: Identity,
    phone: Optional[str] = None,
    address: Optional[str] = None,
) -> UserProfile:
    """Create the user document after sign-up."""
    profile = UserProfile(
        uid=identity.uid,
        email=identity.email,
        display_name=identity.display_name,
        role=resolve_role(identity),
        phone=phone,
        address=address,
    )
    store.set(USERS, identity.uid, profile.model_dump(mode="json", exclude={"uid"}))
    logger.info("Registered user %s as %s", identity.uid, profile.role.value)
    return profile


class ProfileState(str, Enum):
    SIGNED_OUT = "signed_out"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class ProfileSession:
    """
    Provisional profile first, authoritative profile second.

    begin() publishes a profile built from the identity alone (PENDING);
    confirm() replaces it with the stored document (CONFIRMED), or keeps the
    provisional profile and records the error (FAILED).
    """

    def __init__(self):
        self.state = ProfileState.SIGNED_OUT
        self.identity: Optional[Identity] = None
        self.profile: Optional[UserProfile] = None
        self.error: Optional[str] = None

    def begin(self, identity: Identity) -> UserProfile:
        self.identity = identity
        self.profile = UserProfile(
            uid=identity.uid,
            email=identity.email,
            display_name=identity.display_name or "User",
            role=resolve_role(identity),
        )
        self.state = ProfileState.PENDING
        self.error = None
        return self.profile

    def confirm(self, store: DocumentStore) -> ProfileState:
        if self.state != ProfileState.PENDING or self.identity is None:
            raise RuntimeError(f"confirm() requires a pending session (state={self.state.value})")
        try:
            doc = store.get(USERS, self.identity.uid)
        except StoreError as e:
            logger.warning("Profile load failed for %s: %s", self.identity.uid, e)
            self.error = str(e)
            self.state = ProfileState.FAILED
            return self.state

        if doc is not None:
            stored = UserProfile.model_validate({**doc.data, "uid": doc.id})
            claimed = resolve_role(self.identity)
            if stored.role != claimed:
                logger.info("Stored role %s for %s differs from claim; using claim", stored.role.value, doc.id)
            self.profile = stored.model_copy(update={"role": claimed})
        self.state = ProfileState.CONFIRMED
        return self.state

    def reset(self) -> None:
        """Sign-out."""
        self.state = ProfileState.SIGNED_OUT
        self.identity = None
        self.profile = None
        self.error = None

    @property
    def authorized_profile(self) -> Optional[UserProfile]:
        """Profile usable at authorization checkpoints (confirmed sessions only)."""
        return self.profile if self.state == ProfileState.CONFIRMED else None
