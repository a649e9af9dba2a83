"""
FastAPI Application
==================

Main FastAPI application exposing the frame generation endpoint.
Builds the shared provider client at startup and shapes every failure into
the service's JSON error contract.
"""

from contextlib import asynccontextmanager
import traceback
from typing import AsyncGenerator, Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from framegen.api.routes.frames import router as frames_router
from framegen.api.routes.health import router as health_router
from framegen.config.logging import get_logger
from framegen.config.settings import get_settings
from framegen.core.pipeline import FrameGenerationError, InputError
from framegen.core.rendering.provider_client import CloudinaryClient
from framegen.models.schemas import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting FastAPI application", environment=settings.environment)

    if getattr(app.state, "provider_client", None) is None:
        app.state.provider_client = CloudinaryClient.from_settings(settings)

    if not app.state.provider_client.credentials.configured:
        logger.warning("Rendering provider credentials are not configured")

    try:
        yield
    finally:
        logger.info("Shutting down FastAPI application")
        try:
            await app.state.provider_client.close()
            logger.info("Provider client closed")
        except Exception as e:
            logger.error("Error closing provider client", error=str(e))


def error_response(
    status_code: int, error: str, exc: Optional[BaseException] = None
) -> JSONResponse:
    """Build a JSON error response, with a traceback when details are exposed."""
    details = None
    if exc is not None and get_settings().expose_error_details:
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers mapping errors onto the JSON error contract."""

    @app.exception_handler(InputError)
    async def input_error_handler(request: Request, exc: InputError) -> JSONResponse:
        logger.warning("Rejected frame request", error=str(exc))
        return error_response(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Invalid request body", errors=exc.errors())
        return error_response(400, "Request body must be a JSON object with a 'text' field.")

    @app.exception_handler(FrameGenerationError)
    async def frame_generation_error_handler(
        request: Request, exc: FrameGenerationError
    ) -> JSONResponse:
        logger.error(
            "Frame generation failed", frame_index=exc.frame_index, error=str(exc)
        )
        return error_response(500, f"Frame generation failed: {exc}", exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.warning("HTTP exception", status_code=exc.status_code, detail=exc.detail)
        response = error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception", exception=str(exc), exc_info=True)
        return error_response(500, f"Frame generation failed: {exc}", exc)


def create_app(provider_client: Optional[CloudinaryClient] = None) -> FastAPI:
    """
    Application factory function for creating FastAPI app instance.

    Args:
        provider_client: Client to use instead of one built from settings

    Returns:
        FastAPI application instance
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Render text into four animated-GIF frames through an HTML-to-image provider",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.provider_client = provider_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    register_exception_handlers(app)
    app.include_router(frames_router)
    app.include_router(health_router)

    @app.get("/", tags=["General"])
    async def root() -> dict[str, Any]:
        """Root endpoint with basic API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "health_check": "/health",
            "endpoints": {"generate_frames": "POST /api/generate-frames"},
        }

    return app


app = create_app()


def run_development_server() -> None:
    """Run development server with auto-reload."""
    settings = get_settings()
    uvicorn.run(
        "framegen.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run_development_server()
