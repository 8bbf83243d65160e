"""
Exception handlers translating domain errors into HTTP responses.

``FinanceAPIError`` subclasses carry their own status code.  Request
validation failures are reported as 400 rather than FastAPI's default
422 so malformed bodies and malformed path or query parameters share
one status.  Every error body has the shape ``{"detail": "..."}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import FinanceAPIError, PersistenceError

logger = logging.getLogger(__name__)


def add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FinanceAPIError)
    async def finance_error_handler(request: Request, exc: FinanceAPIError) -> JSONResponse:
        if isinstance(exc, PersistenceError):
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc
            )
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        logger.warning("Malformed request %s %s: %s", request.method, request.url.path, errors)
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            detail = f"{location}: {first.get('msg', 'invalid value')}"
        else:
            detail = "Malformed request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})
