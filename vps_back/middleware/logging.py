"""
vps-back — Access Log Middleware
=================================

What:  One access log line per HTTP request, on the `vps_back.access` logger.
How:   Times the rest of the stack, then logs:

           GET /brew/track/rona/rona-2.17.7.arm64_sequoia.bottle.tar.gz 302 4.1ms [1f0c2a9e] 10.0.0.3 -> https://github.com/...

       The `-> target` suffix is only present on redirects, so the bottle
       download log shows where each client was sent.

Never logged: request bodies, the x-api-key header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from vps_back.middleware.request_id import request_id_var

logger = logging.getLogger("vps_back.access")

# Probe and asset traffic; logging it would drown the API lines
QUIET_PREFIXES = ("/health", "/static/")


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path.startswith(QUIET_PREFIXES):
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        client = request.client.host if request.client else "-"
        message = "%s %s %d %.1fms [%s] %s"
        args = [request.method, path, response.status_code, elapsed_ms, request_id_var.get(""), client]

        location = response.headers.get("location")
        if 300 <= response.status_code < 400 and location:
            message += " -> %s"
            args.append(location)

        logger.log(level_for_status(response.status_code), message, *args)
        return response
