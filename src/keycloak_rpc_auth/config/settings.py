from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..domain.constants import (
    DEFAULT_ALGORITHMS,
    DEFAULT_MIN_TIME_BETWEEN_JWKS_REQUESTS,
    REALMS_SEGMENT,
)
from ..domain.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class AuthenticatorSettings:
    """
    Keycloak connection + verification settings for one authenticator.

    Host code decides how to construct this (env, config file, etc.).
    Validated eagerly: a bad combination raises ConfigurationError here,
    never on a request.
    """
    url: Optional[str] = None
    realm: Optional[str] = None
    allow_any_realm: bool = False
    min_time_between_jwks_requests: float = DEFAULT_MIN_TIME_BETWEEN_JWKS_REQUESTS

    # Introspection
    introspect: bool = False
    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    # Signature verification
    algorithms: Tuple[str, ...] = DEFAULT_ALGORITHMS
    audience: Optional[str] = None
    leeway: float = 0

    # Transport
    http_timeout: float = 10.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        has_realm = bool(self.realm)
        if has_realm and self.allow_any_realm:
            raise ConfigurationError("realm and allow_any_realm are mutually exclusive")
        if not self.url or not (has_realm or self.allow_any_realm):
            raise ConfigurationError("url and realm (or allow_any_realm) are required")
        if self.introspect and not (self.client_id and self.client_secret):
            raise ConfigurationError(
                "client_id and client_secret are required for token introspection"
            )
        try:
            cooldown = float(self.min_time_between_jwks_requests)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"min_time_between_jwks_requests must be a number, got {self.min_time_between_jwks_requests!r}"
            ) from exc
        if cooldown < 0:
            raise ConfigurationError("min_time_between_jwks_requests must not be negative")
        object.__setattr__(self, "min_time_between_jwks_requests", cooldown)
        if not self.algorithms:
            raise ConfigurationError("at least one signing algorithm is required")
        # accept lists from callers but keep the instance hashable
        object.__setattr__(self, "algorithms", tuple(self.algorithms))

    @property
    def realms_url(self) -> str:
        return f"{self.url}{REALMS_SEGMENT}"

    @property
    def issuer(self) -> Optional[str]:
        """The only trusted issuer in fixed-realm mode, else None."""
        if self.allow_any_realm:
            return None
        return f"{self.realms_url}{self.realm}"
