"""
FastAPI Stitch Proxy Application Factory
========================================

Entry point for the proxy that sits between the browser uploader and the pano
stitcher service.

Architecture:
    Browser uploader → Stitch Proxy (this service) → Pano Stitcher (HTTP or gRPC)

Routes:
    - /stitch  : Multi-image upload, forwarded to the stitcher
    - /health  : Health check endpoint

Environment Variables:
    - GRPC: "true" to forward over gRPC instead of HTTP (default: false)
    - PANO_URL: Stitcher HTTP endpoint (default: http://localhost:8000/stitch)
    - PANO_KEY: Shared key forwarded to the stitcher
    - GRPC_TARGET: Stitcher gRPC address (default: localhost:50051)
    - LOG_LEVEL: Logging level (default: INFO)

Running the Service:
    Development:
        uvicorn stitch_proxy.app.main:create_app --factory --reload --host 0.0.0.0 --port 8080

    Production:
        uvicorn stitch_proxy.app.main:create_app --factory --host 0.0.0.0 --port 8080 --workers 4
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from .config import Settings, get_settings, validate_configuration
from .cors import CORS_HEADERS, cors_headers_middleware
from .errors import MethodError, StitchProxyError
from .models import HealthResponse
from .proxy import StitchHandler, stitch_router
from .transport import TransportMode


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s", "module": "%(module)s", "function": "%(funcName)s"}',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup: configure logging, report the selected transport and any
    configuration warnings. Nothing is held open between requests, so there
    is nothing to release on shutdown beyond logging it.
    """
    settings: Settings = app.state.settings

    setup_logging(settings.LOG_LEVEL)
    logger = logging.getLogger("stitch_proxy.main")

    report = validate_configuration(settings)
    if app.state.stitch_handler.mode is TransportMode.RPC:
        logger.info(f"gRPC mode enabled, forwarding to pano stitcher at {settings.GRPC_TARGET}")
    else:
        logger.info(f"HTTP mode enabled, forwarding to pano stitcher at {settings.pano_url_str}")

    for warning in report["warnings"]:
        logger.warning(warning)

    logger.info(
        "Stitch proxy started",
        extra={
            "transport": report["transport"],
            "max_upload_bytes": report["max_upload_bytes"],
        }
    )

    yield

    logger.info("Stitch proxy shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Frozen settings to use; loaded from the environment if omitted

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Stitch Proxy",
        description="Forwards multi-image uploads to the pano stitcher over HTTP or gRPC",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.stitch_handler = StitchHandler(settings)

    # CORS headers go on every response, errors included
    app.middleware("http")(cors_headers_middleware)

    app.include_router(stitch_router, tags=["Stitch"])

    @app.get("/health", tags=["System"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="ok",
            service="stitch-proxy",
            transport=app.state.stitch_handler.mode.value,
        )

    @app.exception_handler(StitchProxyError)
    async def stitch_proxy_error_handler(request: Request, exc: StitchProxyError) -> PlainTextResponse:
        """Render proxy errors as plain text with their status code."""
        return PlainTextResponse(exc.message, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
        """
        Render the router's 405 for /stitch as a MethodError.

        Every other HTTP error keeps FastAPI's default rendering.
        """
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and request.url.path == "/stitch":
            return await stitch_proxy_error_handler(request, MethodError())
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
        """
        Global exception handler for unhandled errors.

        This runs outside the CORS middleware, so the headers are added here.
        """
        logger = logging.getLogger("stitch_proxy.main")
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "path": request.url.path,
                "method": request.method,
                "exception_type": type(exc).__name__
            },
            exc_info=True
        )
        return PlainTextResponse("Internal server error", status_code=500, headers=CORS_HEADERS)

    return app


if __name__ == "__main__":
    settings = get_settings()

    uvicorn.run(
        "stitch_proxy.app.main:create_app",
        factory=True,
        host=settings.PROXY_HOST,
        port=settings.PROXY_PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
