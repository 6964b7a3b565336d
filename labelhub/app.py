"""FastAPI application exposing the labeling data accessors."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from labelhub.core.config import Settings, get_settings
from labelhub.core.logging_config import configure_logging
from labelhub.domain.errors import (
    BackendUnavailableError,
    InvalidArgumentError,
    NotFoundError,
    StorageError,
)
from labelhub.repositories import StorageBackend, get_storage_backend
from labelhub.routers import assignments as assignments_router
from labelhub.routers import projects as projects_router
from labelhub.services.labeling_service import LabelingService

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (InvalidArgumentError, 400),
    (BackendUnavailableError, 503),
)


def _status_for(exc: StorageError) -> int:
    for kind, status in _STATUS_BY_ERROR:
        if isinstance(exc, kind):
            return status
    return 500


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        {"detail": exc.message, "entity": exc.entity, "key": exc.key},
        status_code=status,
    )


def create_app(settings: Settings | None = None, backend: StorageBackend | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="labelhub")
    app.state.settings = settings
    app.state.labeling_service = LabelingService(backend or get_storage_backend(settings))
    app.add_exception_handler(StorageError, _storage_error_handler)

    app.include_router(projects_router.router)
    app.include_router(assignments_router.router)
    return app
