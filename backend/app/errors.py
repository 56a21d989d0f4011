"""Error taxonomy shared by the auth and report layers.

Every error carries the HTTP status it maps to and a message that is safe to
show the caller. ``register_exception_handlers`` renders them as
``{"error": message}``.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ReportServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingParameter(ReportServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing query parameters."

    def __init__(self, fields: list[str], message: str = None):
        super().__init__(message or f"Missing query parameters: {', '.join(fields)}.")


class InvalidParameter(ReportServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid query parameter."


class InvalidRange(InvalidParameter):
    default_message = "Invalid date range."


class InvalidCredentials(ReportServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthenticated(ReportServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token missing"


class Unauthorized(ReportServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class UpstreamFailure(ReportServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


async def report_service_error_handler(request: Request, exc: ReportServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed requests are rendered like every other error.

    The login form is the only request body, so a body that fails validation
    is a failed login. Anything else is a query parameter of the wrong type.
    """
    errors = exc.errors()
    if any(error["loc"][0] == "body" for error in errors):
        return await report_service_error_handler(request, InvalidCredentials())
    names = list(dict.fromkeys(str(error["loc"][-1]) for error in errors))
    return await report_service_error_handler(
        request, InvalidParameter(f"Invalid query parameters: {', '.join(names)}.")
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReportServiceError, report_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
