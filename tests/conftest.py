# tests/conftest.py
from __future__ import annotations

import time
from typing import Any, Callable, Optional

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from keycloak_rpc_auth import AuthenticatorSettings, CallMetadata, KeycloakAuthenticator

BASE_URL = "http://localhost:8080/auth"
REALM = "demo"
ISSUER = f"{BASE_URL}/realms/{REALM}"
CERTS_URL = f"{ISSUER}/protocol/openid-connect/certs"
INTROSPECT_URL = f"{ISSUER}/protocol/openid-connect/token/introspect"


class TokenHelper:
    """RSA key pair + signed tokens, the way Keycloak would issue them."""

    def __init__(self, kid: str = "key-1") -> None:
        self.kid = kid
        self.private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

    @property
    def jwk(self) -> dict[str, Any]:
        jwk = jwt.algorithms.RSAAlgorithm.to_jwk(self.private_key.public_key(), as_dict=True)
        jwk.update(kid=self.kid, use="sig", alg="RS256")
        return jwk

    @property
    def certs(self) -> dict[str, Any]:
        return {"keys": [self.jwk]}

    def token(
            self,
            *,
            iss: Optional[str] = ISSUER,
            kid: Optional[str] = "__default__",
            **claims: Any,
    ) -> str:
        payload: dict[str, Any] = {
            "sub": "user-1",
            "exp": int(time.time()) + 300,
            "iat": int(time.time()),
            **claims,
        }
        if iss is not None:
            payload["iss"] = iss
        if kid == "__default__":
            kid = self.kid
        headers = {"kid": kid} if kid is not None else None
        return jwt.encode(payload, self.private_key, algorithm="RS256", headers=headers)


class FakeKeycloak:
    """
    httpx.MockTransport handler: serves canned responses per (method, url)
    and records every request it sees.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def serve(self, method: str, url: str, status_code: int = 200, **kwargs: Any) -> None:
        self.routes[(method, url)] = lambda request: httpx.Response(status_code, **kwargs)

    def fail(self, method: str, url: str) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[(method, url)] = _raise

    def calls(self, method: str, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and str(r.url) == url]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, str(request.url)))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        return route(request)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


def metadata(authorization: Optional[str] = None) -> CallMetadata:
    if authorization is None:
        return CallMetadata()
    return CallMetadata.from_pairs([("authorization", authorization)])


@pytest.fixture(scope="session")
def token_helper() -> TokenHelper:
    return TokenHelper()


@pytest.fixture
def keycloak(token_helper: TokenHelper) -> FakeKeycloak:
    kc = FakeKeycloak()
    kc.serve("GET", CERTS_URL, json=token_helper.certs)
    return kc


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def http_client(keycloak: FakeKeycloak) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(keycloak))


@pytest.fixture
def make_authenticator(http_client: httpx.AsyncClient, clock: FakeClock):
    def _make(**options: Any) -> KeycloakAuthenticator:
        options.setdefault("url", BASE_URL)
        if not options.get("allow_any_realm"):
            options.setdefault("realm", REALM)
        options.setdefault("min_time_between_jwks_requests", 0)
        settings = AuthenticatorSettings(**options)
        return KeycloakAuthenticator(settings, client=http_client, clock=clock)

    return _make
