"""Translation of service errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from portfolio_cms.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def _conflict_error(request: Request, exc: ConflictError) -> JSONResponse:
    return _error_response(status.HTTP_409_CONFLICT, exc.message)


async def _not_found_error(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(status.HTTP_404_NOT_FOUND, exc.message)


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    if exc.rejected:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


async def _persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Map the service error taxonomy onto HTTP status codes."""
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ConflictError, _conflict_error)
    app.add_exception_handler(NotFoundError, _not_found_error)
    app.add_exception_handler(StorageError, _storage_error)
    app.add_exception_handler(PersistenceError, _persistence_error)
