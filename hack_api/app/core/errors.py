"""
Error types and their JSON:API rendering.

Every expected failure raised by a service or dependency is an
``ApiError`` subclass carrying the HTTP status, a fixed title and an
optional detail.  ``register_exception_handlers`` installs FastAPI
handlers that turn them into JSON:API error documents::

    {"errors": [{"status": "404", "title": "Resource not found."}]}

Anything else that escapes a handler is logged with its traceback and
answered with a bare 500 document.  Stack traces and internal row ids
never reach the client.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .responses import JSONApiResponse


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto a JSON:API error document."""

    status_code: int = 400
    title: str = "Bad request."
    default_detail: Optional[str] = None

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, str]] = None) -> None:
        self.detail = detail if detail is not None else self.default_detail
        self.headers = headers or {}
        super().__init__(self.detail or self.title)

    def to_document(self) -> Dict[str, Any]:
        error: Dict[str, Any] = {"status": str(self.status_code), "title": self.title}
        if self.detail:
            error["detail"] = self.detail
        return {"errors": [error]}


class BadRequestError(ApiError):
    """Malformed envelope, missing or mistyped fields, broken invariants."""

    status_code = 400
    title = "Bad request."


class UnauthenticatedError(ApiError):
    """No ``Authorization`` header at all."""

    status_code = 401
    title = "Unauthorized."
    default_detail = "An authentication header is required."

    def __init__(self, realm: str) -> None:
        super().__init__(headers={"WWW-Authenticate": f'Basic realm="{realm}"'})


class ForbiddenError(ApiError):
    """Credentials present but unacceptable, for whatever reason."""

    status_code = 403
    title = "Access is forbidden."
    default_detail = "You are not permitted to perform that action."


class NotFoundError(ApiError):
    status_code = 404
    title = "Resource not found."


class MethodNotAllowedError(ApiError):
    status_code = 405
    title = "Method not allowed."


class ConflictError(ApiError):
    """Unique external key already taken."""

    status_code = 409
    title = "Resource ID already exists."


class InternalError(ApiError):
    status_code = 500
    title = "An unexpected error occured."


def error_response(exc: ApiError) -> JSONApiResponse:
    return JSONApiResponse(exc.to_document(), status_code=exc.status_code, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers converting exceptions into error documents."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONApiResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONApiResponse:
        # Request documents are decoded by ``json_body`` and validated by
        # the schemas; this only catches malformed path or query values.
        logger.debug("Rejected request parameters on %s: %s", request.url.path, exc.errors())
        return error_response(BadRequestError())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONApiResponse:
        if exc.status_code == 404:
            return error_response(NotFoundError())
        if exc.status_code == 405:
            return error_response(MethodNotAllowedError())
        if exc.status_code == 400:
            return error_response(BadRequestError())
        return error_response(InternalError())

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONApiResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(InternalError())
