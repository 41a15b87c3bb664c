from __future__ import annotations

from typing import Optional

import jwt
from jwt.exceptions import PyJWTError

from ...domain.value_objects import DecodedToken


def decode_token(raw: Optional[str]) -> Optional[DecodedToken]:
    """
    Split a JWT into header and payload WITHOUT checking its signature.

    Garbage input, or a payload without an `iss` claim, gives None: the
    issuer decides where keys are fetched from, so it is mandatory.
    """
    if not raw:
        return None

    try:
        header = jwt.get_unverified_header(raw)
        payload = jwt.decode(raw, options={"verify_signature": False})
    except PyJWTError:
        return None

    if not isinstance(payload, dict):
        return None
    issuer = payload.get("iss")
    if not isinstance(issuer, str) or not issuer:
        return None

    return DecodedToken(raw=raw, header=header, payload=payload)
