"""Translation of domain errors into HTTP responses."""

import logging
from typing import Any, Dict, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...domain.errors import InvalidFilterError, PersistenceError, SubscriptionNotFoundError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "Internal server error"


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(InvalidFilterError, _handle_invalid_filter)
    app.add_exception_handler(SubscriptionNotFoundError, _handle_not_found)
    app.add_exception_handler(PersistenceError, _handle_persistence_error)


def describe_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """Human-readable message for the first violated rule."""
    if not errors:
        return "Invalid request"
    error = errors[0]
    location = [str(part) for part in error.get("loc", ())]
    if error.get("type") == "json_invalid":
        return "Invalid JSON body"
    if location and location[0] == "path":
        return "Invalid subscription id"
    field = ".".join(location[1:]) or (location[0] if location else "request")
    return f"{field}: {error.get('msg', 'invalid value')}"


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = describe_validation_errors(exc.errors())
    logger.warning("Rejected request path=%s reason=%s", request.url.path, detail)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


async def _handle_invalid_filter(request: Request, exc: InvalidFilterError) -> JSONResponse:
    logger.warning("Rejected summary filter path=%s reason=%s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def _handle_not_found(request: Request, exc: SubscriptionNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Subscription not found"},
    )


async def _handle_persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error(
        "Persistence failure method=%s path=%s operation=%s cause=%r",
        request.method,
        request.url.path,
        exc.operation,
        exc.__cause__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_DETAIL},
    )
