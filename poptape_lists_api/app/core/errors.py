"""Error taxonomy and the handlers that turn it into JSON responses."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def build_error_payload(code: str, message: str) -> Dict[str, Any]:
    return {"message": message, "code": code}


class ListServiceError(Exception):
    """Base class for errors surfaced to API callers.

    Subclasses fix the HTTP status and machine-readable code; the
    message may be overridden per raise.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def payload(self) -> Dict[str, Any]:
        return build_error_payload(self.code, self.message)


# -- identity resolution ----------------------------------------------------

class Unauthenticated(ListServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Authentication required - missing X-Access-Token header"


class InvalidCredentials(ListServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    default_message = "Invalid or expired token"


class AuthServiceUnavailable(ListServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "auth_service_unavailable"
    default_message = "Authentication service unavailable"


class AuthResponseError(ListServiceError):
    status_code = status.HTTP_502_BAD_GATEWAY
    code = "auth_response_error"
    default_message = "Authentication service response error"


class ConfigurationError(ListServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "configuration_error"
    default_message = "Authentication service configuration error"


# -- parameter validation ---------------------------------------------------

class InvalidParameter(ListServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_parameter"
    default_message = "Invalid parameter"


class NonPositiveLimit(InvalidParameter):
    code = "non_positive_limit"
    default_message = "limit must be positive"


class NegativeOffset(InvalidParameter):
    code = "negative_offset"
    default_message = "offset must be non-negative"


class UnknownListType(InvalidParameter):
    code = "unknown_list_type"
    default_message = "Unknown list type"


class InvalidItemId(InvalidParameter):
    code = "invalid_item_id"
    default_message = "Invalid UUID format"


# -- storage ----------------------------------------------------------------

class NotFound(ListServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class StorageError(ListServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "storage_error"
    default_message = "Internal server error"


# -- handlers ---------------------------------------------------------------

async def list_service_error_handler(request: Request, exc: ListServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_payload("invalid_request", "Check your inputs, the request is not valid"),
    )


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    code = "http_error"
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code = NotFound.code
        if message == "Not Found":
            message = NotFound.default_message
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_payload(code, message),
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app) -> None:
    app.add_exception_handler(ListServiceError, list_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
