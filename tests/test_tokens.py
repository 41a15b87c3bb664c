# tests/test_tokens.py
from conftest import ISSUER, metadata

from keycloak_rpc_auth import CallMetadata, decode_token, extract_token


# --- extract_token ---------------------------------------------------------


def test_extract_without_metadata():
    assert extract_token(metadata()) is None
    assert extract_token(metadata("")) is None


def test_extract_strips_bearer_prefix():
    assert extract_token(metadata("Bearer abc.def.ghi")) == "abc.def.ghi"


def test_extract_without_prefix_is_verbatim():
    assert extract_token(metadata("abc.def.ghi")) == "abc.def.ghi"
    assert extract_token(metadata("invalid token")) == "invalid token"


def test_extract_prefix_is_case_sensitive_and_single():
    assert extract_token(metadata("bearer abc")) == "bearer abc"
    assert extract_token(metadata("Bearer Bearer abc")) == "Bearer abc"


def test_extract_uses_first_value():
    md = CallMetadata.from_pairs([("authorization", "Bearer first"), ("authorization", "Bearer second")])
    assert extract_token(md) == "first"


def test_extract_accepts_any_accessor():
    class Headers:
        def get(self, key):
            return ["Bearer from-accessor"] if key == "authorization" else []

    assert extract_token(Headers()) == "from-accessor"


# --- decode_token ----------------------------------------------------------


def test_decode_valid_token(token_helper):
    raw = token_helper.token()
    decoded = decode_token(raw)

    assert decoded is not None
    assert decoded.raw == raw
    assert decoded.kid == token_helper.kid
    assert decoded.issuer == ISSUER
    assert decoded.payload["sub"] == "user-1"


def test_decode_does_not_check_signature_or_expiry(token_helper):
    other = type(token_helper)(kid="other")
    decoded = decode_token(other.token(exp=1))
    assert decoded is not None
    assert decoded.kid == "other"


def test_decode_garbage():
    assert decode_token(None) is None
    assert decode_token("") is None
    assert decode_token("invalid token") is None
    assert decode_token("a.b.c") is None


def test_decode_requires_issuer(token_helper):
    assert decode_token(token_helper.token(iss=None)) is None
    assert decode_token(token_helper.token(iss="")) is None


def test_decode_without_kid(token_helper):
    decoded = decode_token(token_helper.token(kid=None))
    assert decoded is not None
    assert decoded.kid is None
