from __future__ import annotations

import re
from typing import Any, Optional

from ...domain.constants import CERTS_PATH, INTROSPECTION_PATH, REALMS_SEGMENT


class IssuerValidator:
    """
    Decides whether a token's `iss` belongs to the configured Keycloak.

    Must run before the issuer is used to build any outbound URL:
    otherwise a self-signed token could point key and introspection
    requests at a host of its choosing.

    - fixed realm: exact string match with `{url}/realms/{realm}`
    - any realm:   `{url}/realms/<segment>`, anchored at the start, the
                   segment limited to printable characters
    """

    def __init__(self, url: str, *, realm: Optional[str] = None, allow_any_realm: bool = False) -> None:
        self._url = url
        self._allow_any_realm = allow_any_realm
        self._issuer = None if allow_any_realm else f"{url}{REALMS_SEGMENT}{realm}"
        self._pattern = re.compile(re.escape(f"{url}{REALMS_SEGMENT}") + r"[^/?#\s\x00-\x1f\x7f]+")

    def is_trusted(self, issuer: Any) -> bool:
        if not isinstance(issuer, str):
            return False
        if not self._allow_any_realm:
            return issuer == self._issuer
        return self._pattern.fullmatch(issuer) is not None

    # ------------------------------------------------------------------ #
    # Outbound URLs (only ever built from a trusted issuer)
    # ------------------------------------------------------------------ #

    @staticmethod
    def certs_url(issuer: str) -> str:
        return f"{issuer}{CERTS_PATH}"

    @staticmethod
    def introspection_url(issuer: str) -> str:
        return f"{issuer}{INTROSPECTION_PATH}"
