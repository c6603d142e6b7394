"""
Custom exception handlers for FastAPI.
Validation failures report the first violated rule as ``detail``; placeholder
admin actions surface as 501 with a stable error code.
"""

import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.core.errors import UnsupportedOperationError, first_error_message

logger = logging.getLogger(__name__)


def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return JSONResponse(
        status_code=422,
        content={
            "detail": first_error_message(errors),
            "errors": jsonable_encoder(errors),
        },
    )


def unsupported_operation_handler(request: Request, exc: UnsupportedOperationError):
    return JSONResponse(
        status_code=501,
        content={"detail": str(exc), "code": exc.code},
    )


def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UnsupportedOperationError, unsupported_operation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
