"""
Request body size limit.

The body is read and counted before the application sees it, so chunked
uploads without a Content-Length are held to the same limit. Up to
max_bytes of body are buffered and then replayed to the application.
"""

import logging

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware:
    """Answer 413 `{"error": ...}` for bodies larger than max_bytes."""

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                await self._reject(scope, receive, send, 400, "Invalid Content-Length")
                return
            if declared > self.max_bytes:
                await self._reject_too_large(scope, receive, send, declared)
                return

        body = bytearray()
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body.extend(message.get("body", b""))
            more_body = message.get("more_body", False)
            if len(body) > self.max_bytes:
                await self._reject_too_large(scope, receive, send, len(body))
                return

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": bytes(body), "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _reject_too_large(
        self, scope: Scope, receive: Receive, send: Send, size: int
    ) -> None:
        logger.warning(f"Rejected request body of at least {size} bytes")
        await self._reject(scope, receive, send, 413, "Request entity too large")

    @staticmethod
    async def _reject(
        scope: Scope, receive: Receive, send: Send, status_code: int, message: str
    ) -> None:
        response = JSONResponse(status_code=status_code, content={"error": message})
        await response(scope, receive, send)
