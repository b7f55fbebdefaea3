"""Uniform JSON error responses: `{success: false, message, error?}`."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docgen.errors import DocgenError, ValidationError

logger = logging.getLogger(__name__)


class OperationFailed(Exception):
    """A downstream failure tagged with the operation-level message shown to clients."""

    def __init__(self, message: str, cause: Exception) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.status_code = cause.status_code if isinstance(cause, DocgenError) else 500


@contextmanager
def failing_as(message: str) -> Iterator[None]:
    """Re-raise anything but a `ValidationError` as `OperationFailed(message)`."""
    try:
        yield
    except ValidationError:
        raise
    except Exception as e:
        raise OperationFailed(message, e) from e


def error_body(message: str, error: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return body


async def _validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Malformed body for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content=error_body("Invalid request body", str(exc.errors())))


async def _operation_handler(request: Request, exc: OperationFailed) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.cause, exc_info=exc.cause)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, str(exc.cause)))


async def _http_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # unmatched method on a known path is an unknown endpoint too
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=error_body("Endpoint not found"))
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))


async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Server error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body("Internal server error", str(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(OperationFailed, _operation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_handler)
    app.add_exception_handler(Exception, _unhandled_handler)
