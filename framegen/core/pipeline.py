"""
Frame Pipeline
==============

Drive the four-frame render for one request: validate the text, size the
canvas once, render frames one after another and collect the results.
The pipeline is all-or-nothing; the first failing frame aborts the run and
partial results are discarded.
"""

from typing import Any, List, Optional, Protocol

from framegen.config.logging import get_logger
from framegen.core.rendering.frame_renderer import FrameRenderError
from framegen.core.rendering.layout import calculate_height
from framegen.models.schemas import FRAME_COUNT, FrameSpec, FramesResponse, RenderedFrame

logger = get_logger(__name__)


class InputError(Exception):
    """Exception raised for requests that are rejected before any rendering."""

    pass


class FrameGenerationError(Exception):
    """Aggregate failure of a pipeline run."""

    def __init__(self, message: str, frame_index: Optional[int] = None):
        self.frame_index = frame_index
        super().__init__(message)


class Renderer(Protocol):
    async def render(self, spec: FrameSpec) -> RenderedFrame: ...


def validate_text(text: Optional[str]) -> str:
    """Reject missing, empty and whitespace-only text."""
    if text is None or not text.strip():
        raise InputError("Please enter some text.")
    return text


class FramePipeline:
    """Sequential four-frame orchestrator."""

    def __init__(self, renderer: Renderer):
        self.renderer = renderer
        self.logger: Any = logger.bind(component="frame_pipeline")  # structlog.BoundLoggerBase

    async def run(self, text: Optional[str]) -> FramesResponse:
        """
        Generate all frames for a block of text.

        Args:
            text: Raw request text

        Returns:
            FramesResponse with the encoded frames in frame order

        Raises:
            InputError: If the text is missing or blank
            FrameGenerationError: If any frame fails
        """
        self.logger.debug("Validating request")
        text = validate_text(text)
        self.logger.info("Frame generation requested", text_length=len(text))

        height = calculate_height(text)
        self.logger.info("Canvas height calculated", height=height)

        frames: List[RenderedFrame] = []
        try:
            for frame_index in range(1, FRAME_COUNT + 1):
                spec = FrameSpec(frame_index=frame_index, text=text, height=height)
                frames.append(await self.renderer.render(spec))
        except FrameRenderError as e:
            self.logger.error(
                "Frame generation aborted",
                frame_index=e.frame_index,
                completed_frames=len(frames),
                error=e.message,
            )
            raise FrameGenerationError(str(e), frame_index=e.frame_index) from e
        except Exception as e:
            self.logger.error(
                "Unexpected frame generation error", completed_frames=len(frames), error=str(e)
            )
            raise FrameGenerationError(str(e)) from e

        self.logger.info("All frames generated", frame_count=len(frames), height=height)

        return FramesResponse(
            frames=[frame.data_uri for frame in frames],
            frame_count=len(frames),
            dynamic_height=height,
        )
