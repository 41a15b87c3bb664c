from __future__ import annotations

from typing import Any

from .deps import FastAPIAuthentication
from .security import bearer_scheme, metadata_from_request
from ..common.auth_factory import create_keycloak_authenticator


def create_fastapi_auth(**options: Any) -> FastAPIAuthentication:
    """
    High-level helper for FastAPI apps:

    - Creates a KeycloakAuthenticator from Keycloak options
    - Wraps it in FastAPIAuthentication, exposing dependencies like:

        fastapi_auth.get_current_token
        fastapi_auth.get_optional_token

    Call `await fastapi_auth.authenticator.close()` on shutdown.
    """
    return FastAPIAuthentication(authenticator=create_keycloak_authenticator(**options))


__all__ = [
    "FastAPIAuthentication",
    "bearer_scheme",
    "create_fastapi_auth",
    "metadata_from_request",
]
