from enum import Enum

AUTHORIZATION_METADATA_KEY = "authorization"
BEARER_PREFIX = "Bearer "

REALMS_SEGMENT = "/realms/"
CERTS_PATH = "/protocol/openid-connect/certs"
INTROSPECTION_PATH = "/protocol/openid-connect/token/introspect"

DEFAULT_MIN_TIME_BETWEEN_JWKS_REQUESTS = 10.0
DEFAULT_ALGORITHMS = ("RS256",)


class RejectionReason(Enum):
    NO_TOKEN = "no_token"
    MALFORMED = "malformed"
    UNTRUSTED_ISSUER = "untrusted_issuer"
    NO_KEY = "no_key"
    INACTIVE = "inactive"
    INVALID_SIGNATURE = "invalid_signature"
