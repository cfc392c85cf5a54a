import logging
import time
import uuid

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from .errors import INTERNAL_ERROR_DETAIL

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def register_request_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next) -> Response:
        req_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = req_id
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Recovery boundary: a failing handler becomes a 500, never a crash.
            logger.exception(
                "Unhandled error request_id=%s method=%s path=%s",
                req_id,
                request.method,
                request.url.path,
            )
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": INTERNAL_ERROR_DETAIL},
            )
        response.headers[REQUEST_ID_HEADER] = req_id
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.info(
            "request_done request_id=%s method=%s path=%s status=%s duration_ms=%s client=%s",
            req_id,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.client.host if request.client else "unknown",
        )
        return response
