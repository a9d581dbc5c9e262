"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fitness_tracker.api.photos import router as photos_router
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.config import parse_origins
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.errors import PhotoError

_HTTP_ERROR_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    allowed_origins = parse_origins(container.settings.cors_allow_origins)

    app = FastAPI(title="Fitness Tracker Photos")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.exception_handler(PhotoError)
    async def photo_error_handler(request: Request, exc: PhotoError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed: %s %s kind=%s",
                request.method,
                request.url.path,
                exc.kind,
                exc_info=exc,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "kind": exc.kind},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "kind": "validation_error"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = _HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error: %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers=_cors_headers(request, allowed_origins),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    app.include_router(photos_router)

    return app


def _cors_headers(request: Request, allowed_origins: list[str]) -> dict[str, str]:
    """CORS headers for responses sent outside CORSMiddleware."""
    if "*" in allowed_origins:
        return {"Access-Control-Allow-Origin": "*"}
    origin = request.headers.get("origin")
    if origin in allowed_origins:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}
