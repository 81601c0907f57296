"""
vps-back — Request ID Middleware
=================================

What:  Tags each request with a short correlation ID.
Why:   Access log lines, service logs and the `request_id` field of error
       envelopes for one request all carry the same value.
How:   The client's X-Request-ID is reused when it is a short token of
       letters, digits, `-`, `_` or `.`; anything else is replaced by the
       first 8 hex chars of a UUID4. The value lives in a ContextVar and is
       echoed in the X-Request-ID response header.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs are echoed into a response header and into logs
_ACCEPTED_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(incoming: Optional[str]) -> str:
    if incoming and _ACCEPTED_ID.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
