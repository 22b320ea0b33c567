"""
Boutique Backend — Request ID Middleware
=========================================

What:  Assigns a short ID to each incoming request and returns it in the
       X-Request-ID response header.
How:   Uses the client's X-Request-ID when sent, otherwise the first 8
       characters of a UUID4. Stored in a ContextVar so exception handlers
       and loggers can read it without access to the Request.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
