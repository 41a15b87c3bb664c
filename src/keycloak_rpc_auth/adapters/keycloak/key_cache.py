from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

import httpx
from jwt.exceptions import PyJWTError

from .issuer import IssuerValidator
from .jwk import jwk_to_pem

logger = logging.getLogger(__name__)


class KeyCache:
    """
    In-memory `kid -> PEM` mapping plus the time of the last key request.

    The cooldown is global (not per kid, not per issuer): unknown kids in
    forged tokens must not be able to trigger more than one request per
    window. A refresh replaces the whole mapping so rotated-out keys
    disappear with it.
    """

    def __init__(self) -> None:
        self._keys: Dict[str, str] = {}
        self.last_fetch_time: Optional[float] = None

    def get(self, kid: Optional[str]) -> Optional[str]:
        if kid is None:
            return None
        return self._keys.get(kid)

    def replace(self, keys: Mapping[str, str]) -> None:
        self._keys = dict(keys)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._keys)

    def __contains__(self, kid: object) -> bool:
        return kid in self._keys

    def __len__(self) -> int:
        return len(self._keys)


class KeyResolver:
    """
    Resolves a token's `kid` to a PEM public key.

    Cache hits cost nothing. On a miss the issuer's JWKS endpoint is
    queried, at most once per `min_time_between_requests` seconds.
    Failures never raise: they are logged and give None.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        min_time_between_requests: float,
        cache: Optional[KeyCache] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._min_interval = min_time_between_requests
        self._clock = clock
        self.cache = cache or KeyCache()

    async def resolve(self, kid: Optional[str], issuer: str) -> Optional[str]:
        """
        Args:
            kid:    key id from the token header (None never hits the cache)
            issuer: an issuer already accepted by IssuerValidator
        """
        cached = self.cache.get(kid)
        if cached is not None:
            return cached

        now = self._clock()
        last = self.cache.last_fetch_time
        if last is not None and (now - last) < self._min_interval:
            logger.warning(
                "Not enough time elapsed since the last public keys request, blocking the request"
            )
            return None

        # a failed request still consumes the window
        self.cache.last_fetch_time = now

        try:
            jwks = await self._fetch_jwks(issuer)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.error("Error requesting public keys: %s", exc, exc_info=exc)
            return None

        keys = self._convert(jwks)
        if not keys:
            logger.error("Error requesting public keys: no usable keys in response from %s", issuer)
            return None

        self.cache.replace(keys)
        return self.cache.get(kid)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _fetch_jwks(self, issuer: str) -> list[Any]:
        response = await self._client.get(IssuerValidator.certs_url(issuer))
        response.raise_for_status()

        body = response.json()
        if not isinstance(body, dict):
            raise ValueError("JWKS response is not a JSON object")
        keys = body.get("keys")
        if not isinstance(keys, list):
            return []
        return keys

    @staticmethod
    def _convert(jwks: list[Any]) -> Dict[str, str]:
        converted: Dict[str, str] = {}
        for jwk in jwks:
            kid = jwk.get("kid") if isinstance(jwk, dict) else None
            if not isinstance(kid, str):
                logger.warning("Skipping JWK without a kid")
                continue
            try:
                converted[kid] = jwk_to_pem(jwk)
            except (PyJWTError, ValueError, TypeError) as exc:
                logger.warning("Skipping JWK %r: %s", kid, exc)
        return converted
