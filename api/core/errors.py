"""
Error signal shared by all handlers, and the single place where failures
are turned into JSON responses.

Two tiers:
- `ApiError` carries an explicit message + status and is rendered as
  `{"error": {"message", "status"}}`.
- Store and driver failures (`asyncpg.PostgresError`, `asyncpg.InterfaceError`)
  and anything else are rendered as `{"message": <underlying message>}` with
  status 500.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

MISSING_INPUTS_MESSAGE = "Please provide all inputs"


class ApiError(Exception):
    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def to_dict(self) -> dict:
        return {"message": self.message, "status": self.status}


def not_found(message: str) -> ApiError:
    return ApiError(message, 404)


def missing_inputs() -> ApiError:
    # Absent fields are reported as 404, not 400; clients match on it.
    return ApiError(MISSING_INPUTS_MESSAGE, 404)


def _classified_response(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.status, content={"error": error.to_dict()})


def _unclassified_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": message})


def _store_message(exc: Exception) -> str:
    # Primary message only; DETAIL/HINT lines are left out.
    return str(exc.args[0]) if exc.args else str(exc)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        logger.warning(
            "request_failed method=%s path=%s status=%s message=%s",
            request.method,
            request.url.path,
            exc.status,
            exc.message,
        )
        return _classified_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown routes and unsupported methods both read as "Not Found".
        if exc.status_code in (404, 405):
            return _classified_response(not_found("Not Found"))
        return _classified_response(ApiError(str(exc.detail), exc.status_code))

    @app.exception_handler(RequestValidationError)
    async def handle_unreadable_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Only reachable when the body is not a JSON object: no keys were sent.
        return _classified_response(missing_inputs())

    @app.exception_handler(asyncpg.PostgresError)
    @app.exception_handler(asyncpg.InterfaceError)
    async def handle_store_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "store_error method=%s path=%s sqlstate=%s message=%s",
            request.method,
            request.url.path,
            getattr(exc, "sqlstate", None),
            _store_message(exc),
        )
        return _unclassified_response(_store_message(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unexpected_error method=%s path=%s", request.method, request.url.path)
        return _unclassified_response(str(exc))
