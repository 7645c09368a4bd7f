"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from calorie_tracker.api.advisory import router as advisory_router
from calorie_tracker.api.auth import router as auth_router
from calorie_tracker.api.entries import router as entries_router
from calorie_tracker.api.favorites import router as favorites_router
from calorie_tracker.api.foods import router as foods_router
from calorie_tracker.api.metrics import router as metrics_router
from calorie_tracker.api.water import router as water_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import parse_cors_origins
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.errors import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    UpstreamUnavailableError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting calorie tracker API",
            extra={"environment": app.state.container.settings.environment},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Calorie Tracker API", lifespan=lifespan)
    app.state.container = container

    origins = parse_cors_origins(container.settings.cors_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials="*" not in origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.info("Not found: %s %s", request.method, request.url.path)
        return _message(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(
        request: Request, exc: InvalidInputError
    ) -> JSONResponse:
        return _message(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        response = _message(status.HTTP_401_UNAUTHORIZED, exc.message)
        response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.exception_handler(UpstreamUnavailableError)
    async def upstream_handler(
        request: Request, exc: UpstreamUnavailableError
    ) -> JSONResponse:
        logger.warning("Upstream failure on %s: %s", request.url.path, exc.message)
        return _message(status.HTTP_502_BAD_GATEWAY, exc.message)

    app.include_router(auth_router)
    app.include_router(foods_router)
    app.include_router(entries_router)
    app.include_router(metrics_router)
    app.include_router(water_router)
    app.include_router(favorites_router)
    app.include_router(advisory_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})
