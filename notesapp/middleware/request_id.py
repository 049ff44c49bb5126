"""
Notes Backend: Request ID Middleware
====================================

What:  Tags every request with an ID and echoes it in the X-Request-ID header.
How:   A client-provided X-Request-ID is kept as is; otherwise a short UUID is
       generated. The ID lives in request.state (shared with the exception
       handlers through the ASGI scope) and in a ContextVar for loggers.

Error path:
    An unhandled exception escapes call_next before this middleware can
    touch the response. The 500 is then built by the catch-all handler in
    main.py, which reads the ID back with current_request_id(request) and
    sets the header itself.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def current_request_id(request: Request) -> str:
    """ID assigned to `request`, or "" when the middleware did not run."""
    return getattr(request.state, "request_id", "") or request_id_var.get("")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
