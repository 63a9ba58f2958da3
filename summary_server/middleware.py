"""ASGI middleware enforcing the request body size limit."""

from __future__ import annotations

from typing import List

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .logging_config import logger
from .utils import error_response


class RequestBodyLimitMiddleware:
    """Reject bodies larger than *max_bytes* with 413.

    A declared ``Content-Length`` is checked up front. Bodies without one
    (chunked uploads) are buffered while counting and replayed to the app
    only if they stay within the limit.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                size = int(declared)
            except ValueError:
                await self._reject(scope, receive, send, 400, "Invalid Content-Length header.")
                return
            if size > self.max_bytes:
                await self._reject_too_large(scope, receive, send, size)
                return
            await self.app(scope, receive, send)
            return

        buffered: List[Message] = []
        received = 0
        while True:
            message = await receive()
            buffered.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_bytes:
                await self._reject_too_large(scope, receive, send, received)
                return
            if not message.get("more_body", False):
                break

        pending = iter(buffered)

        async def replay() -> Message:
            for message in pending:
                return message
            return await receive()

        await self.app(scope, replay, send)

    async def _reject_too_large(self, scope: Scope, receive: Receive, send: Send, size: int) -> None:
        logger.warning(
            "request body too large",
            extra={"received": size, "limit": self.max_bytes, "path": scope.get("path")},
        )
        await self._reject(scope, receive, send, 413, "Request body too large.")

    async def _reject(
        self, scope: Scope, receive: Receive, send: Send, status_code: int, message: str
    ) -> None:
        response = error_response(message, status_code=status_code)
        await response(scope, receive, send)


__all__ = ["RequestBodyLimitMiddleware"]
