from __future__ import annotations

from .interceptor import KeycloakAuthInterceptor, create_grpc_interceptor, current_token

__all__ = ["KeycloakAuthInterceptor", "create_grpc_interceptor", "current_token"]
