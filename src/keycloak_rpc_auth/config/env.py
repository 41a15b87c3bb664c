from __future__ import annotations

import os
from typing import Any

from .settings import AuthenticatorSettings
from ..domain.exceptions import ConfigurationError


def _bool(key: str, default: bool = False) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


def _split_csv(key: str) -> list[str]:
    raw = os.getenv(key)
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x and x.strip()]


def _float(key: str) -> float | None:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc


def settings_from_env() -> AuthenticatorSettings:
    url = os.getenv("KEYCLOAK_URL")
    if not url:
        raise ConfigurationError("Missing Keycloak settings: KEYCLOAK_URL")

    options: dict[str, Any] = {
        "url": url,
        "realm": os.getenv("KEYCLOAK_REALM") or None,
        "allow_any_realm": _bool("KEYCLOAK_ALLOW_ANY_REALM"),
        "introspect": _bool("KEYCLOAK_INTROSPECT"),
        "client_id": os.getenv("KEYCLOAK_CLIENT_ID") or None,
        "client_secret": os.getenv("KEYCLOAK_CLIENT_SECRET") or None,
        "audience": os.getenv("KEYCLOAK_AUDIENCE") or None,
        "verify_ssl": _bool("VERIFY_SSL", True),
    }

    min_time = _float("KEYCLOAK_MIN_TIME_BETWEEN_JWKS_REQUESTS")
    if min_time is not None:
        options["min_time_between_jwks_requests"] = min_time

    algorithms = _split_csv("KEYCLOAK_ALGORITHMS")
    if algorithms:
        options["algorithms"] = tuple(algorithms)

    return AuthenticatorSettings(**options)
