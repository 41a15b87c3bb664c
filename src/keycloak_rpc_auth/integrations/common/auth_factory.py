from __future__ import annotations

from typing import Any, Optional

import httpx

from ...application.use_cases.authenticate import KeycloakAuthenticator
from ...config.env import settings_from_env
from ...config.settings import AuthenticatorSettings
from ...domain.ports import SignatureVerifier


def create_keycloak_authenticator(
        *,
        verifier: Optional[SignatureVerifier] = None,
        client: Optional[httpx.AsyncClient] = None,
        **options: Any,
) -> KeycloakAuthenticator:
    """
    High-level factory: Keycloak options -> KeycloakAuthenticator.

    `options` are the AuthenticatorSettings fields, e.g.:

        create_keycloak_authenticator(
            url="https://sso.example.com/auth",
            realm="demo",
            introspect=True,
            client_id="orders-api",
            client_secret="...",
        )

    Raises ConfigurationError for an invalid combination.
    """
    settings = AuthenticatorSettings(**options)
    return KeycloakAuthenticator(settings, verifier=verifier, client=client)


def create_authenticator_from_env(
        *,
        verifier: Optional[SignatureVerifier] = None,
        client: Optional[httpx.AsyncClient] = None,
) -> KeycloakAuthenticator:
    """Same as `create_keycloak_authenticator`, using env-configured settings."""
    return KeycloakAuthenticator(settings_from_env(), verifier=verifier, client=client)
