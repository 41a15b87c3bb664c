from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from .security import bearer_scheme, metadata_from_request
from ...application.use_cases.authenticate import KeycloakAuthenticator
from ...domain.entities import VerifiedToken


@dataclass(slots=True)
class FastAPIAuthentication:
    """
    FastAPI integration for keycloak_rpc_auth.

    Wraps a KeycloakAuthenticator into dependencies:

        fastapi_auth = create_fastapi_auth(url=..., realm="demo")

        @app.get("/me")
        async def me(token: VerifiedToken = Depends(fastapi_auth.get_current_token)):
            return {"sub": token.subject}
    """

    authenticator: KeycloakAuthenticator

    async def get_current_token(
            self,
            request: Request,
            credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> VerifiedToken:
        """Dependency: Require authentication."""
        # `credentials` is only declared for the OpenAPI security scheme
        token = await self.authenticator.authenticate(metadata_from_request(request))
        if token is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return token

    async def get_optional_token(
            self,
            request: Request,
            credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> Optional[VerifiedToken]:
        """Dependency: Optional authentication (rejected -> anonymous)."""
        return await self.authenticator.authenticate(metadata_from_request(request))
