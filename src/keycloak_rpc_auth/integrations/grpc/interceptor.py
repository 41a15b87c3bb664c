from __future__ import annotations

import contextvars
from typing import Any, Awaitable, Callable, Optional

import grpc
from grpc import aio

from ...application.use_cases.authenticate import KeycloakAuthenticator
from ..common.auth_factory import create_keycloak_authenticator
from ...domain.entities import VerifiedToken
from ...domain.value_objects import CallMetadata

_CURRENT_TOKEN: contextvars.ContextVar[Optional[VerifiedToken]] = contextvars.ContextVar(
    "keycloak_rpc_auth_current_token", default=None
)


def current_token() -> Optional[VerifiedToken]:
    """
    The verified token of the RPC being handled, or None for an anonymous
    call (only possible with `required=False`).
    """
    return _CURRENT_TOKEN.get()


class KeycloakAuthInterceptor(aio.ServerInterceptor):
    """
    grpc.aio server interceptor authenticating every call with a
    KeycloakAuthenticator.

    - required=True:  rejected calls abort with UNAUTHENTICATED
    - required=False: rejected calls proceed with current_token() == None

    Handlers must be coroutines / async generators (grpc.aio style).
    """

    def __init__(self, authenticator: KeycloakAuthenticator, *, required: bool = True) -> None:
        self.authenticator = authenticator
        self.required = required

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None:
            return None

        metadata = CallMetadata.from_pairs(handler_call_details.invocation_metadata)

        # Wrap all four handler flavors
        if handler.unary_unary:
            return grpc.unary_unary_rpc_method_handler(
                self._wrap_unary(handler.unary_unary, metadata),
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        if handler.unary_stream:
            return grpc.unary_stream_rpc_method_handler(
                self._wrap_stream(handler.unary_stream, metadata),
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        if handler.stream_unary:
            return grpc.stream_unary_rpc_method_handler(
                self._wrap_unary(handler.stream_unary, metadata),
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        if handler.stream_stream:
            return grpc.stream_stream_rpc_method_handler(
                self._wrap_stream(handler.stream_stream, metadata),
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        return handler

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _authenticate(self, metadata: CallMetadata, context: aio.ServicerContext) -> None:
        token = await self.authenticator.authenticate(metadata)
        if token is None and self.required:
            await context.abort(grpc.StatusCode.UNAUTHENTICATED, "authentication failed")
        _CURRENT_TOKEN.set(token)

    def _wrap_unary(self, behavior: Callable[..., Awaitable[Any]], metadata: CallMetadata):
        async def wrapper(request_or_iterator: Any, context: aio.ServicerContext) -> Any:
            await self._authenticate(metadata, context)
            return await behavior(request_or_iterator, context)

        return wrapper

    def _wrap_stream(self, behavior: Callable[..., Any], metadata: CallMetadata):
        async def wrapper(request_or_iterator: Any, context: aio.ServicerContext) -> Any:
            await self._authenticate(metadata, context)
            async for response in behavior(request_or_iterator, context):
                yield response

        return wrapper


def create_grpc_interceptor(*, required: bool = True, **options: Any) -> KeycloakAuthInterceptor:
    """
    One-call setup, options as for `create_keycloak_authenticator`:

        server = grpc.aio.server(interceptors=[
            create_grpc_interceptor(url="https://sso.example.com/auth", realm="demo"),
        ])
    """
    return KeycloakAuthInterceptor(create_keycloak_authenticator(**options), required=required)
