"""
keycloak_rpc_auth

Per-call bearer token authentication against Keycloak realms, usable
from any RPC framework (gRPC, FastAPI, etc.).

Resolves the issuing realm's signing key (cached, rate limited),
optionally introspects the token, and delegates the signature check to
a pluggable verifier.
"""

__version__ = "0.1.0"

from .domain.constants import RejectionReason
from .domain.entities import AuthenticationOutcome, VerifiedToken
from .domain.exceptions import (
    AuthenticationError,
    ConfigurationError,
    IntrospectionError,
    InvalidTokenError,
    TokenExpiredError,
)
from .domain.value_objects import (
    CallMetadata,
    DecodedToken,
    IntrospectionResult,
    RealmName,
)
from .domain.ports import MetadataAccessor, SignatureVerifier

from .config import AuthenticatorSettings, settings_from_env

from .application.use_cases.authenticate import KeycloakAuthenticator

# Keycloak-specific adapters
from .adapters.keycloak.introspection import IntrospectionClient
from .adapters.keycloak.issuer import IssuerValidator
from .adapters.keycloak.jwk import jwk_to_pem
from .adapters.keycloak.jwt_verifier import PyJWTSignatureVerifier
from .adapters.keycloak.key_cache import KeyCache, KeyResolver
from .adapters.keycloak.token_extractor import extract_token
from .adapters.keycloak.token_parser import decode_token

from .integrations.common.auth_factory import (
    create_authenticator_from_env,
    create_keycloak_authenticator,
)

__all__ = [
    "__version__",
    # domain core
    "RejectionReason",
    "AuthenticationOutcome",
    "VerifiedToken",
    "CallMetadata",
    "DecodedToken",
    "IntrospectionResult",
    "RealmName",
    "MetadataAccessor",
    "SignatureVerifier",
    # exceptions
    "AuthenticationError",
    "ConfigurationError",
    "IntrospectionError",
    "InvalidTokenError",
    "TokenExpiredError",
    # config
    "AuthenticatorSettings",
    "settings_from_env",
    # use cases
    "KeycloakAuthenticator",
    "create_keycloak_authenticator",
    "create_authenticator_from_env",
    # adapters
    "IntrospectionClient",
    "IssuerValidator",
    "KeyCache",
    "KeyResolver",
    "PyJWTSignatureVerifier",
    "decode_token",
    "extract_token",
    "jwk_to_pem",
]
