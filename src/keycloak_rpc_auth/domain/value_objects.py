# src/keycloak_rpc_auth/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

from .constants import REALMS_SEGMENT


# --- Identity value objects ----------------------------------------------


@dataclass(frozen=True, slots=True)
class RealmName:
    """
    Represents a Keycloak realm name, extracted from the issuer URL.
    """
    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_issuer(cls, issuer: Optional[str]) -> RealmName | None:
        # e.g. "https://auth.example.com/realms/MyRealm"
        if not isinstance(issuer, str) or REALMS_SEGMENT not in issuer:
            return None
        realm_str = issuer.rsplit(REALMS_SEGMENT, 1)[-1]
        return cls(realm_str) if realm_str else None


# --- Call metadata --------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CallMetadata:
    """
    Read-only, multi-valued view over the metadata of an incoming call.

    gRPC lowercases metadata keys on the wire, so lookups are
    case-insensitive. Values keep the order in which they were received.
    """
    pairs: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Any]] | None) -> CallMetadata:
        """
        Build from `(key, value)` pairs, e.g. gRPC `invocation_metadata()`
        or Starlette `request.headers.items()`. Binary (`-bin`) values are
        skipped.
        """
        items = []
        for key, value in pairs or ():
            if isinstance(value, bytes):
                continue
            items.append((str(key).lower(), str(value)))
        return cls(tuple(items))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> CallMetadata:
        items = []
        for key, value in mapping.items():
            if isinstance(value, (list, tuple)):
                items.extend((key, v) for v in value)
            else:
                items.append((key, value))
        return cls.from_pairs(items)

    def get(self, key: str) -> Tuple[str, ...]:
        wanted = key.lower()
        return tuple(v for k, v in self.pairs if k == wanted)


# --- Token value objects --------------------------------------------------


@dataclass(frozen=True, slots=True)
class DecodedToken:
    """
    Structural decomposition of a bearer token.

    Produced WITHOUT verifying the signature: nothing in here may be
    trusted until a SignatureVerifier has accepted it.
    """
    raw: str
    header: Mapping[str, Any] = field(default_factory=dict)
    payload: Mapping[str, Any] = field(default_factory=dict)

    @property
    def kid(self) -> Optional[str]:
        kid = self.header.get("kid")
        return kid if isinstance(kid, str) else None

    @property
    def issuer(self) -> str:
        return self.payload["iss"]


@dataclass(frozen=True, slots=True)
class IntrospectionResult:
    """
    Response of the token introspection endpoint.

    Only the `active` flag is interpreted; everything else is kept
    as-is in `claims`.
    """
    active: bool
    claims: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, body: Mapping[str, Any]) -> IntrospectionResult:
        return cls(active=body.get("active") is True, claims=dict(body))
