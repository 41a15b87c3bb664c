# tests/test_introspection.py
import base64
from urllib.parse import parse_qs

import httpx
import pytest
from conftest import INTROSPECT_URL, ISSUER

from keycloak_rpc_auth import IntrospectionClient, IntrospectionError


@pytest.fixture
def introspection(http_client):
    return IntrospectionClient(http_client, client_id="client", client_secret="my-secret-123")


@pytest.mark.asyncio
async def test_posts_token_with_basic_auth(introspection, keycloak):
    keycloak.serve("POST", INTROSPECT_URL, json={"active": True, "sub": "user-1"})

    result = await introspection.introspect(ISSUER, "raw.token.value")

    assert result.active is True
    assert result.claims["sub"] == "user-1"

    [request] = keycloak.calls("POST", INTROSPECT_URL)
    expected = base64.b64encode(b"client:my-secret-123").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert parse_qs(request.content.decode()) == {"token": ["raw.token.value"]}


@pytest.mark.asyncio
async def test_inactive_token(introspection, keycloak):
    keycloak.serve("POST", INTROSPECT_URL, json={"active": False})
    result = await introspection.introspect(ISSUER, "raw")
    assert result.active is False


@pytest.mark.asyncio
async def test_http_errors_propagate(introspection, keycloak):
    keycloak.serve("POST", INTROSPECT_URL, 401, json={"error": "unauthorized_client"})
    with pytest.raises(httpx.HTTPStatusError):
        await introspection.introspect(ISSUER, "raw")


@pytest.mark.asyncio
async def test_transport_errors_propagate(introspection, keycloak):
    keycloak.fail("POST", INTROSPECT_URL)
    with pytest.raises(httpx.ConnectError):
        await introspection.introspect(ISSUER, "raw")


@pytest.mark.asyncio
async def test_non_json_body(introspection, keycloak):
    keycloak.serve("POST", INTROSPECT_URL, text="<html>maintenance</html>")
    with pytest.raises(ValueError):
        await introspection.introspect(ISSUER, "raw")


@pytest.mark.asyncio
async def test_non_object_body(introspection, keycloak):
    keycloak.serve("POST", INTROSPECT_URL, json=[True])
    with pytest.raises(IntrospectionError):
        await introspection.introspect(ISSUER, "raw")
