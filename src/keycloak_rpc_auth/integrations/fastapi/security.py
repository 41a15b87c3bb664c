from __future__ import annotations

from fastapi import Request
from fastapi.security import HTTPBearer

from ...domain.value_objects import CallMetadata

# Expose this so apps can plug it into dependencies if they want OpenAPI security
bearer_scheme = HTTPBearer(auto_error=False)


def metadata_from_request(request: Request) -> CallMetadata:
    """
    Expose the request headers through the same accessor gRPC calls use,
    so the authenticator sees the `authorization` header exactly as sent
    (including a missing "Bearer " prefix).
    """
    return CallMetadata.from_pairs(request.headers.items())
