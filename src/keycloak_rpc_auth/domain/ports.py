from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from .value_objects import DecodedToken


class MetadataAccessor(Protocol):
    """
    Port for reading the metadata of an incoming call.

    `CallMetadata` is the bundled implementation; any object with a
    compatible `get` works.
    """

    def get(self, key: str) -> Sequence[str]:
        """Return every value sent under `key`, in order (empty if none)."""
        ...


class SignatureVerifier(Protocol):
    """
    Port for the final cryptographic check of a token.

    Implementations live in the adapters layer (e.g. the PyJWT verifier).
    """

    def verify(self, token: DecodedToken, public_key: str) -> Mapping[str, Any]:
        """
        Verify `token` against the PEM-encoded `public_key`.

        Should:
          - verify signature
          - check expiry and basic claims
        Returns:
          - the verified claims
        Raises:
          - TokenExpiredError
          - InvalidTokenError
          - or other AuthenticationError subclasses
        """
        ...
