"""Staging gate middleware for Starlette (plain ASGI)."""

from __future__ import annotations

import logging

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from stagegate.challenge import challenge_response
from stagegate.gate import RequestGate
from stagegate.headers import apply_security_headers
from stagegate.models import GateSettings, IncomingRequest

logger = logging.getLogger("stagegate.middleware")

# Policy violation
WS_CLOSE_DENIED = 1008


class StagingGateMiddleware:
    """Basic auth gate for preview/staging deployments.

    Outside a protected environment every request passes through. Either way
    the no-index and security headers are set on HTTP responses. WebSocket
    handshakes go through the same gate and are closed when refused.
    """

    def __init__(self, app: ASGIApp, settings: GateSettings):
        self.app = app
        self._gate = RequestGate(settings)

        env = self._gate.environment
        if env.is_protected:
            logger.info("Staging protection enabled (%s)", env.reason)
            if not settings.has_credentials:
                logger.warning(
                    "Staging protection enabled but staging_username/staging_password "
                    "are not set; every protected request will be refused."
                )

    @property
    def gate(self) -> RequestGate:
        return self._gate

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        result = self._gate.evaluate(IncomingRequest.from_scope(scope))

        if scope["type"] == "websocket":
            if result.allowed:
                await self.app(scope, receive, send)
            else:
                await send({"type": "websocket.close", "code": WS_CLOSE_DENIED})
            return

        if not result.allowed:
            settings = self._gate.settings
            response = challenge_response(settings.realm, settings.contact_email)
            await response(scope, receive, send)
            return

        async def send_with_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                apply_security_headers(MutableHeaders(scope=message))
            await send(message)

        await self.app(scope, receive, send_with_headers)
