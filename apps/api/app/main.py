"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.observability import configure_logging
from app.errors import ApiError, normalize_error
from app.repositories.errors import StorageError
from app.repositories.memory import InMemoryStore
from app.routes import auth_router, bootcamps_router, courses_router, reviews_router, users_router

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    error = normalize_error(exc)
    if error.status_code >= 500:
        logger.error(
            "request.failed method=%s path=%s status=%d code=%s",
            request.method,
            request.url.path,
            error.status_code,
            error.code,
            exc_info=exc,
        )
    else:
        logger.info(
            "request.rejected method=%s path=%s status=%d code=%s",
            request.method,
            request.url.path,
            error.status_code,
            error.code,
        )
    return JSONResponse(status_code=error.status_code, content=error.payload.model_dump(mode="json"))


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="DevCamper API", version="1.0.0")
    app.state.store = InMemoryStore()

    for exc_class in (ApiError, StorageError, RequestValidationError, StarletteHTTPException, Exception):
        app.add_exception_handler(exc_class, handle_error)

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(bootcamps_router, prefix=API_PREFIX)
    app.include_router(courses_router, prefix=API_PREFIX)
    app.include_router(reviews_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)

    return app


app = create_app()
