"""
Error taxonomy and its mapping onto HTTP responses.

Services raise the ``APIError`` subclasses below; routers never build
error responses themselves.  Every failure leaves the API as a single
JSON body of the form ``{"msg": "<status>: <message>"}``:

- ``MalformedInput``   400 — unparseable ids or vote deltas.
- ``ValidationFailed`` 400 — empty fields, unknown usernames, bad sort/order.
- ``NotFound``         404 — article, comment, user or topic absent.

Anything else is an unclassified storage/programming failure and becomes a
generic 500.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def msg(self) -> str:
        return f"{self.status_code}: {self.message}"


class MalformedInput(APIError):
    status_code = 400
    default_message = "Bad request"


class ValidationFailed(APIError):
    status_code = 400
    default_message = "Bad request"


class NotFound(APIError):
    status_code = 404
    default_message = "Not Found"


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"msg": f"{status_code}: {message}"},
        headers=headers,
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.msg)
    return _error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Path ids and request bodies that fail schema validation never reach a
    # service, so no storage access has happened at this point.
    logger.info("%s %s malformed: %s", request.method, request.url.path, exc.errors())
    error = MalformedInput()
    return _error_response(error.status_code, error.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(500, APIError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error mapper on *app*.  Called once from ``app.main``."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
