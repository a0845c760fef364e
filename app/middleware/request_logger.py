# ==============================================================================
# REQUEST LOGGER MIDDLEWARE
# ==============================================================================
# One log line per request, with request ID and timing headers
# ==============================================================================

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.constants import APIConstants

logger = logging.getLogger(__name__)


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Request/response logging.

    Reuses an incoming ``X-Request-ID`` when the caller sends one, so a
    request can be traced across a proxy. Responses with status >= 400
    are logged at WARNING.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = request.headers.get(APIConstants.REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} "
                f"failed after {elapsed_ms:.2f}ms: {e}"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.log(
            logging.INFO if response.status_code < 400 else logging.WARNING,
            f"[{request_id}] {request.method} {request.url.path} "
            f"-> {response.status_code} ({elapsed_ms:.2f}ms)",
        )

        response.headers[APIConstants.REQUEST_ID_HEADER] = request_id
        response.headers[APIConstants.RESPONSE_TIME_HEADER] = f"{elapsed_ms:.2f}ms"
        return response
