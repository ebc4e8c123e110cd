"""
Exception handlers - map errors to the JSON error shape.

Every failure is answered as `{"error": "<message>"}`; request validation
failures additionally carry `errors`, a map of field name to messages.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from onboard.domain.exceptions import OnboardingError

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed."


async def onboarding_error_handler(request: Request, exc: OnboardingError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # loc is ("body", <field>, ...); for json_invalid it is ("body", <offset>)
        if error["type"] == "json_invalid":
            field = "body"
        else:
            field = ".".join(str(part) for part in error["loc"][1:]) or "body"
        errors.setdefault(field, []).append(error["msg"])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": VALIDATION_FAILED, "errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Server error"},
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register the error handlers on an application."""
    app.add_exception_handler(OnboardingError, onboarding_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
