"""
Error responder.

The single place where failures become HTTP responses. Every failure uses
the envelope {"error": {"name", "message", "status"}}.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import ApiError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, name: str, message: str) -> JSONResponse:
    """Build a consistent JSON error response."""
    body = {"error": {"name": name, "message": message, "status": status_code}}
    return JSONResponse(status_code=status_code, content=body)


def error_response(exc: ApiError) -> JSONResponse:
    logger.warning("%s (%d): %s", exc.name, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    """Register the error handlers on the FastAPI application."""

    @app.exception_handler(ApiError)
    async def handle_api_error(_request: Request, exc: ApiError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Unknown routes and unsupported methods."""
        logger.warning("HTTP %d: %s", exc.status_code, exc.detail)
        name = HTTPStatus(exc.status_code).phrase.replace(" ", "")
        return _error_response(exc.status_code, name, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(500, "InternalServerError", "Internal server error")
