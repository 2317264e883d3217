"""
Pure ASGI request-context middleware.

Reads or generates ``X-Request-ID``, binds it as the request log context,
echoes it on the response and logs slow requests.
"""

import logging
import time

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send
import ulid

from ..core.request_context import bind_request_context, unbind_request_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SLOW_REQUEST_MS = 500
_QUIET_PATHS = {"/health", "/metrics"}


class RequestContextMiddlewareASGI:
    """
    Pure ASGI middleware binding a request id and timing each request.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming = Headers(scope=scope).get(REQUEST_ID_HEADER)
        request_id = (incoming or "").strip()[:64] or str(ulid.ULID())
        token = bind_request_context(request_id)

        path = scope.get("path", "")
        method = scope.get("method", "")
        start_time = time.time()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                process_time = (time.time() - start_time) * 1000
                headers = MutableHeaders(scope=message)
                headers[REQUEST_ID_HEADER] = request_id
                headers["X-Process-Time"] = f"{process_time:.2f}ms"
                if process_time > SLOW_REQUEST_MS and path not in _QUIET_PATHS:
                    logger.warning(f"Slow request: {method} {path} took {process_time:.2f}ms")
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            unbind_request_context(token)
