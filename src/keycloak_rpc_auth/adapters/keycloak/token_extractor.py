from __future__ import annotations

from typing import Optional

from ...domain.constants import AUTHORIZATION_METADATA_KEY, BEARER_PREFIX
from ...domain.ports import MetadataAccessor


def extract_token(metadata: MetadataAccessor) -> Optional[str]:
    """
    Pull the raw bearer string out of call metadata.

    Only the first `authorization` value is considered. A single literal
    "Bearer " prefix is stripped; whatever remains is returned untouched,
    even if it is not a well-formed token.

    Returns:
        token string or None if not found.
    """
    values = metadata.get(AUTHORIZATION_METADATA_KEY)
    if not values:
        return None

    token = values[0]
    if not token:
        return None
    return token.removeprefix(BEARER_PREFIX)
