# backend/salesintel/api/error_handlers.py
#
# Every error leaves the API with the same body:
#   {"error_code", "message", "details", "timestamp"}
# Routes and services raise DomainError subclasses; this module is the only
# place that turns them into status codes.

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from salesintel.core.errors import DomainError, StorageError

logger = logging.getLogger(__name__)


def _error_body(*, error_code: str, message: str, details: Any | None = None) -> dict[str, Any]:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }


def _validation_details(exc: RequestValidationError) -> list[dict[str, Any]]:
    # drop ctx, it can hold exception instances
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if isinstance(exc, StorageError):
            logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc.message)
            # keep driver details out of responses
            message = "A storage error occurred."
            details = None
        else:
            message = exc.message
            details = exc.details

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(error_code=exc.error_code, message=message, details=details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                error_code="VALIDATION_ERROR",
                message="Invalid request data.",
                details=_validation_details(exc),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(error_code="HTTP_ERROR", message=str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("Unhandled storage failure on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body(error_code="STORAGE_ERROR", message="A storage error occurred."),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                error_code="INTERNAL_SERVER_ERROR",
                message="The server encountered an unexpected error.",
            ),
        )
