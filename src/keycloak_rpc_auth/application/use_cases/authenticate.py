from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

import httpx

from ...adapters.keycloak.introspection import IntrospectionClient
from ...adapters.keycloak.issuer import IssuerValidator
from ...adapters.keycloak.jwt_verifier import PyJWTSignatureVerifier
from ...adapters.keycloak.key_cache import KeyResolver
from ...adapters.keycloak.token_extractor import extract_token
from ...adapters.keycloak.token_parser import decode_token
from ...config.settings import AuthenticatorSettings
from ...domain.constants import RejectionReason
from ...domain.entities import AuthenticationOutcome, VerifiedToken
from ...domain.exceptions import AuthenticationError
from ...domain.ports import MetadataAccessor, SignatureVerifier
from ...domain.value_objects import DecodedToken, IntrospectionResult

logger = logging.getLogger(__name__)


class KeycloakAuthenticator:
    """
    Application use case:
    - Extract the bearer token from call metadata
    - Check its issuer against the configured Keycloak realm(s)
    - Resolve the realm's signing key (cached, rate limited)
    - Optionally introspect the token, concurrently with key resolution
    - Hand token + key to a SignatureVerifier

    Every failure ends as a rejection (None from `authenticate`); only a
    bad configuration raises, and that happens at construction.

    The key cache is owned by the instance: two authenticators never
    share keys or cooldowns.
    """

    def __init__(
        self,
        settings: AuthenticatorSettings,
        *,
        verifier: Optional[SignatureVerifier] = None,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.s = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            verify=settings.verify_ssl,
            timeout=settings.http_timeout,
        )

        self.issuers = IssuerValidator(
            settings.url,
            realm=settings.realm,
            allow_any_realm=settings.allow_any_realm,
        )
        self.keys = KeyResolver(
            self._client,
            min_time_between_requests=settings.min_time_between_jwks_requests,
            clock=clock,
        )
        self.introspection: Optional[IntrospectionClient] = None
        if settings.introspect:
            self.introspection = IntrospectionClient(
                self._client,
                client_id=settings.client_id,
                client_secret=settings.client_secret,
            )
        self.verifier: SignatureVerifier = verifier or PyJWTSignatureVerifier(
            algorithms=settings.algorithms,
            audience=settings.audience,
            leeway=settings.leeway,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def authenticate(self, metadata: MetadataAccessor) -> Optional[VerifiedToken]:
        """
        Authenticate one call.

        Returns:
            VerifiedToken, or None if the call carries no acceptable token.
        """
        outcome = await self.evaluate(metadata)
        return outcome.token

    async def evaluate(self, metadata: MetadataAccessor) -> AuthenticationOutcome:
        """Same as `authenticate`, but keeps the rejection reason."""
        raw = extract_token(metadata)
        if raw is None:
            return self._reject(RejectionReason.NO_TOKEN)

        decoded = decode_token(raw)
        if decoded is None:
            return self._reject(RejectionReason.MALFORMED)

        # from here on only the validated issuer is used to build URLs
        issuer = decoded.issuer
        if not self.issuers.is_trusted(issuer):
            return self._reject(RejectionReason.UNTRUSTED_ISSUER, issuer=issuer)

        if self.introspection is None:
            public_key = await self.keys.resolve(decoded.kid, issuer)
            active = True
        else:
            public_key, introspection = await asyncio.gather(
                self.keys.resolve(decoded.kid, issuer),
                self._introspect(issuer, decoded.raw),
            )
            active = introspection is not None and introspection.active

        if public_key is None:
            return self._reject(RejectionReason.NO_KEY, kid=decoded.kid)
        if not active:
            return self._reject(RejectionReason.INACTIVE)

        return self._verify(decoded, public_key)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _introspect(self, issuer: str, token: str) -> Optional[IntrospectionResult]:
        try:
            return await self.introspection.introspect(issuer, token)
        except Exception as exc:
            # fail closed: any error counts as an inactive token
            logger.error("Error introspecting token: %s", exc)
            return None

    def _verify(self, decoded: DecodedToken, public_key: str) -> AuthenticationOutcome:
        try:
            claims = self.verifier.verify(decoded, public_key)
        except AuthenticationError as exc:
            logger.warning("Token verification failed: %s", exc)
            return AuthenticationOutcome.rejected(RejectionReason.INVALID_SIGNATURE)

        return AuthenticationOutcome(
            token=VerifiedToken(
                token=decoded.raw,
                claims=claims,
                header=decoded.header,
                key_id=decoded.kid,
                issuer=decoded.issuer,
            )
        )

    @staticmethod
    def _reject(reason: RejectionReason, **context: object) -> AuthenticationOutcome:
        logger.debug("Rejecting call: %s %s", reason.value, context or "")
        return AuthenticationOutcome.rejected(reason)
