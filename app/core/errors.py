import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger("assignment.api")


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Please fill all required fields."


class DuplicateEmail(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email already present"


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials."


class Unauthorized(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


def _message(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return _message(exc.status_code, exc.message, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ())[1:]) or "body"
        message = f"Invalid value for '{field}': {first.get('msg', 'invalid')}"
    else:
        message = "Invalid request"
    return _message(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _message(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # dettagli solo nei log, mai al client
    logger.exception("Errore non gestito su %s %s", request.method, request.url.path, exc_info=exc)
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
