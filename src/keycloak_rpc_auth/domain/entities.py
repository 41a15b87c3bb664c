from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .constants import RejectionReason
from .value_objects import RealmName


@dataclass(slots=True)
class VerifiedToken:
    """
    A bearer token whose signature has been verified against a key
    published by a trusted Keycloak realm.
    """
    token: str
    claims: Mapping[str, Any] = field(default_factory=dict)
    header: Mapping[str, Any] = field(default_factory=dict)
    key_id: Optional[str] = None
    issuer: Optional[str] = None

    # --- Read-only shortcuts for common claims -----------------------------

    @property
    def subject(self) -> Optional[str]:
        return self.claims.get("sub")

    @property
    def expires_at(self) -> Optional[int]:
        return self.claims.get("exp")

    @property
    def realm(self) -> Optional[str]:
        realm = RealmName.from_issuer(self.issuer)
        return str(realm) if realm else None


@dataclass(slots=True)
class AuthenticationOutcome:
    """
    Result of one authentication attempt: either a verified token or the
    reason it was rejected.
    """
    token: Optional[VerifiedToken] = None
    reason: Optional[RejectionReason] = None

    @property
    def accepted(self) -> bool:
        return self.token is not None

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "AuthenticationOutcome":
        return cls(token=None, reason=reason)
