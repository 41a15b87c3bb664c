from __future__ import annotations

import httpx

from .issuer import IssuerValidator
from ...domain.exceptions import IntrospectionError
from ...domain.value_objects import IntrospectionResult


class IntrospectionClient:
    """
    Asks Keycloak whether a token is still active (not revoked or
    expired server-side).

    Errors are NOT swallowed here; the caller decides what a failed
    introspection means.
    """

    def __init__(self, client: httpx.AsyncClient, *, client_id: str, client_secret: str) -> None:
        self._client = client
        self._auth = httpx.BasicAuth(client_id, client_secret)

    async def introspect(self, issuer: str, token: str) -> IntrospectionResult:
        """
        POST the raw token to `{issuer}/protocol/openid-connect/token/introspect`.

        Raises:
            httpx.HTTPError on transport failure or non-2xx status
            ValueError if the body is not JSON
            IntrospectionError if the body is not a JSON object
        """
        resp = await self._client.post(
            IssuerValidator.introspection_url(issuer),
            data={"token": token},
            auth=self._auth,
        )
        resp.raise_for_status()

        body = resp.json()
        if not isinstance(body, dict):
            raise IntrospectionError("Introspection response is not a JSON object")
        return IntrospectionResult.from_response(body)
