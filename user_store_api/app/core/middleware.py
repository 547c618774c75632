"""
HTTP middleware stack.

``register_middleware`` installs, from the outermost layer inwards:

* request id: reuse the incoming ``X-Request-ID`` header or generate
  one, expose it as ``request.state.request_id`` and echo it on the
  response;
* real ip: replace the client address with the first address found in
  ``True-Client-IP``, ``X-Real-IP`` or ``X-Forwarded-For``;
* access log: one log line per request with status and duration;
* recoverer: turn any unhandled exception into a plain ``500`` and log
  the traceback;
* timeout: answer ``504`` when the route takes longer than
  ``settings.request_timeout`` seconds.  The worker thread running
  the route is not interrupted; only its response is dropped.

Starlette places the most recently added middleware outermost, so the
functions are registered in reverse order.
"""

import asyncio
import logging
import time
import uuid
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import PlainTextResponse

from .config import Settings
from .logging_config import ACCESS_LOGGER

logger = logging.getLogger(__name__)
access_logger = logging.getLogger(ACCESS_LOGGER)

REQUEST_ID_HEADER = "X-Request-ID"

CallNext = Callable[[Request], Awaitable[Response]]


def _real_ip(request: Request) -> Optional[str]:
    for header in ("true-client-ip", "x-real-ip"):
        value = request.headers.get(header)
        if value:
            return value.strip()
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return None


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "-"


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Install the middleware stack on ``app``."""

    timeout = settings.request_timeout

    @app.middleware("http")
    async def timeout_middleware(request: Request, call_next: CallNext) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "%s %s timed out after %ss", request.method, request.url.path, timeout
            )
            return Response(status_code=status.HTTP_504_GATEWAY_TIMEOUT)

    @app.middleware("http")
    async def recoverer_middleware(request: Request, call_next: CallNext) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error in %s %s (request %s)",
                request.method,
                request.url.path,
                getattr(request.state, "request_id", "-"),
            )
            return PlainTextResponse(
                "Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    @app.middleware("http")
    async def access_log_middleware(request: Request, call_next: CallNext) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_logger.info(
            '[%s] "%s %s" from %s - %d in %.1fms',
            getattr(request.state, "request_id", "-"),
            request.method,
            request.url.path,
            _client_host(request),
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.middleware("http")
    async def real_ip_middleware(request: Request, call_next: CallNext) -> Response:
        ip = _real_ip(request)
        if ip:
            port = request.client.port if request.client else 0
            request.scope["client"] = (ip, port)
        return await call_next(request)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next: CallNext) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
