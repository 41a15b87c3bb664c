from __future__ import annotations

from typing import Any, Mapping

import jwt
from cryptography.hazmat.primitives import serialization


def jwk_to_pem(jwk: Mapping[str, Any]) -> str:
    """
    Convert a public JWK (RSA, EC, OKP) into a SubjectPublicKeyInfo PEM string.

    Raises:
        jwt.exceptions.PyJWKError if the JWK cannot be loaded.
        ValueError if it is a private key.
    """
    key = jwt.PyJWK(dict(jwk)).key
    if not hasattr(key, "public_bytes"):
        raise ValueError("JWK does not describe a public key")

    pem = key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return pem.decode("ascii")
