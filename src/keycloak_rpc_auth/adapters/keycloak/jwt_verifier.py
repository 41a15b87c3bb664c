from typing import Any, Mapping, Optional, Sequence

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidSignatureError,
    InvalidTokenError as JWTInvalidTokenError,
    PyJWTError,
)

from ...domain.constants import DEFAULT_ALGORITHMS
from ...domain.exceptions import InvalidTokenError, TokenExpiredError
from ...domain.ports import SignatureVerifier
from ...domain.value_objects import DecodedToken


class PyJWTSignatureVerifier(SignatureVerifier):
    """
    Adapter implementing the SignatureVerifier port using PyJWT.

    Infrastructure layer:
    - Knows about JWT structure and verification.
    - Knows nothing about where the key came from.
    """

    def __init__(
        self,
        algorithms: Sequence[str] = DEFAULT_ALGORITHMS,
        audience: Optional[str] = None,
        leeway: float = 0,
    ) -> None:
        self._algorithms = list(algorithms)
        self._audience = audience
        self._leeway = leeway

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def verify(self, token: DecodedToken, public_key: str) -> Mapping[str, Any]:
        """
        Verify signature, expiry and issuer of `token`.

        Returns:
            Mapping of token claims (dict-like).

        Raises:
            TokenExpiredError
            InvalidTokenError
        """
        try:
            # Decode with issuer check, but disable built-in audience check
            payload = jwt.decode(
                token.raw,
                public_key,
                algorithms=self._algorithms,
                options={"verify_aud": False},
                issuer=token.issuer,
                leeway=self._leeway,
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except (InvalidSignatureError, DecodeError, JWTInvalidTokenError, PyJWTError) as exc:
            raise InvalidTokenError(f"Invalid token: {exc}") from exc

        if self._audience is not None:
            # Keycloak may return string or list
            aud_claim = payload.get("aud")
            if isinstance(aud_claim, str):
                aud_list = [aud_claim]
            else:
                aud_list = list(aud_claim or [])

            if self._audience not in aud_list:
                raise InvalidTokenError(
                    f"Invalid audience: expected {self._audience}, got {aud_list}"
                )

        return payload
