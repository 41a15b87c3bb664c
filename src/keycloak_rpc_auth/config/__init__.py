"""
keycloak_rpc_auth.config

- AuthenticatorSettings: validated, immutable authenticator options.
- settings_from_env: convenience loader for env-driven deployments.
"""

from __future__ import annotations

from .env import settings_from_env
from .settings import AuthenticatorSettings

__all__ = [
    "AuthenticatorSettings",
    "settings_from_env",
]
