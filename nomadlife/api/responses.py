"""
nomadlife.api.responses — The ``{success, message?, ...}`` envelope
=====================================================================

Every endpoint answers with the same JSON shape, errors included.  The
exception handlers registered by :func:`install_error_handlers` turn
framework and domain errors into that shape.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nomadlife.config import ConfigurationError
from nomadlife.constants import LIST_CACHE_CONTROL
from nomadlife.services.auth import Unauthorized
from nomadlife.storage.base import StorageError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def ok(**data) -> dict:
    return {"success": True, **data}


def fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def cached_list(**data) -> JSONResponse:
    """A successful list response the CDN may cache for a minute."""
    return JSONResponse(content=ok(**data), headers={"Cache-Control": LIST_CACHE_CONTROL})


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------
async def _http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        return fail(405, "Method not allowed")
    return fail(exc.status_code, str(exc.detail))


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return fail(400, "Invalid request body")


async def _unauthorized(request: Request, exc: Unauthorized) -> JSONResponse:
    return fail(401, "Unauthorized")


async def _configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    return fail(500, str(exc))


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return fail(500, f"Server error: {exc}")


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return fail(500, f"Server error: {exc}")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Unauthorized, _unauthorized)
    app.add_exception_handler(ConfigurationError, _configuration_error)
    app.add_exception_handler(StorageError, _storage_error)
    app.add_exception_handler(Exception, _unhandled)
