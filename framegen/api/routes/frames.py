"""
Frame Routes
============

FastAPI routes for four-frame GIF image generation.
"""

from fastapi import APIRouter, Depends, Response

from framegen.api.dependencies import get_frame_pipeline
from framegen.core.pipeline import FramePipeline
from framegen.models.schemas import ErrorResponse, FrameRequest, FramesResponse

router = APIRouter(prefix="/api", tags=["Frames"])


@router.post(
    "/generate-frames",
    response_model=FramesResponse,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_frames(
    request: FrameRequest, pipeline: FramePipeline = Depends(get_frame_pipeline)
) -> FramesResponse:
    """
    Render the request text into four frame images.

    Returns the frames as PNG data URIs, in frame order, together with the
    canvas height shared by all frames.
    """
    return await pipeline.run(request.text)


@router.options("/generate-frames")
async def generate_frames_options() -> Response:
    """Answer a bare OPTIONS request with an empty success."""
    return Response(status_code=200)
