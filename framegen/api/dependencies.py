"""
API Dependencies
================

FastAPI dependencies wiring the shared provider client into per-request
pipelines.
"""

from fastapi import Request

from framegen.config.settings import Settings, get_settings
from framegen.core.pipeline import FramePipeline
from framegen.core.rendering.frame_renderer import FrameRenderer
from framegen.core.rendering.provider_client import CloudinaryClient


def get_current_settings() -> Settings:
    """Dependency to get current settings."""
    return get_settings()


def get_provider_client(request: Request) -> CloudinaryClient:
    """Provider client created in the application lifespan."""
    return request.app.state.provider_client


def get_frame_pipeline(request: Request) -> FramePipeline:
    """Build a pipeline around the shared provider client."""
    settings = get_settings()
    renderer = FrameRenderer(
        get_provider_client(request),
        quality=settings.frame_quality,
        public_id_prefix=settings.public_id_prefix,
    )
    return FramePipeline(renderer)
