"""Main application module.

This module builds the FastAPI application, includes routes,
and configures middleware, exception handlers and the store lifecycle.
"""

import time
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortener.api import build_api_router
from shortener.core.config import Settings, settings as default_settings
from shortener.middleware.logging import RequestLoggingMiddleware
from shortener.stores import UrlStore, open_store


def create_app(config: Optional[Settings] = None, store: Optional[UrlStore] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Settings to build the app with, the module settings by default
        store: An already opened store to serve from. When omitted the
            configured store is opened at startup and closed at shutdown.

    Returns:
        Configured FastAPI app
    """
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION}")
        logger.info(f"Environment: {config.ENVIRONMENT.value}")
        async with AsyncExitStack() as stack:
            if store is not None:
                app.state.store = store
            else:
                try:
                    app.state.store = await stack.enter_async_context(open_store(config))
                except Exception:
                    logger.opt(exception=True).critical("Store could not be opened, refusing to serve")
                    raise
            yield
            logger.info(f"Shutting down {config.APP_NAME}")

    app = FastAPI(
        title=config.APP_NAME,
        description=config.APP_DESCRIPTION,
        version=config.APP_VERSION,
        docs_url="/docs" if config.DEBUG else None,
        redoc_url="/redoc" if config.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware, enabled=config.REQUEST_LOGGING_ENABLED)

    app.include_router(build_api_router(config))

    register_exception_handlers(app, config)
    return app


def register_exception_handlers(app: FastAPI, config: Settings) -> None:
    """Attach the JSON error handlers used by every route."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400 Bad Request."""
        logger.info(f"Request validation error on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={
                "detail": "Invalid request body: please provide a JSON object with a 'url' key",
                "errors": [
                    {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                    for error in exc.errors()
                ],
            }
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler to catch and log all unhandled exceptions."""
        error_id = f"error-{time.time()}"

        logger.bind(error_id=error_id).opt(exception=exc).error(
            f"Unhandled exception in {request.method} {request.url.path}"
        )

        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "error_id": error_id,
                "message": str(exc) if config.DEBUG else "Internal server error",
            }
        )


app = create_app()
