"""
Frame Renderer
==============

Render one animation frame: generate its HTML, have the provider rasterize
it, download the image and encode it as a data URI for the JSON response.
"""

import base64
import io
import time
from typing import Any, Callable, Optional

from PIL import Image  # type: ignore

from framegen.config.logging import get_logger
from framegen.core.rendering.html_generator import generate_frame_html
from framegen.core.rendering.layout import FRAME_WIDTH
from framegen.core.rendering.provider_client import CloudinaryClient
from framegen.models.schemas import FrameSpec, RenderedFrame, TemplateContent

logger = get_logger(__name__)


class FrameRenderError(Exception):
    """Exception raised when a single frame cannot be rendered."""

    def __init__(self, frame_index: int, message: str):
        self.frame_index = frame_index
        self.message = message
        super().__init__(f"Frame {frame_index} generation failed: {message}")


def to_data_uri(data: bytes, media_type: str) -> str:
    """Encode bytes as a base64 data URI."""
    return f"data:{media_type};base64,{base64.b64encode(data).decode('ascii')}"


def detect_media_type(image_bytes: bytes) -> str:
    """
    Verify that the bytes decode as an image and return its media type.

    Raises:
        ValueError: If the bytes are not a readable image
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:  # type: ignore[attr-defined]
            image_format = image.format
            image.verify()
    except Exception as e:
        raise ValueError(f"Provider returned an unreadable image: {e}") from e

    return Image.MIME.get(image_format or "", "image/png")


class FrameRenderer:
    """Renders frames through the Cloudinary upload API."""

    def __init__(
        self,
        client: CloudinaryClient,
        quality: int = 90,
        public_id_prefix: str = "theblack_frame",
        content: Optional[TemplateContent] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.quality = quality
        self.public_id_prefix = public_id_prefix
        self.content = content
        self.clock = clock
        self.logger: Any = logger.bind(component="frame_renderer")  # structlog.BoundLoggerBase

    def public_id(self, frame_index: int) -> str:
        """Unique provider-side identifier for a frame artifact."""
        return f"{self.public_id_prefix}_{frame_index}_{int(self.clock() * 1000)}"

    def upload_params(self, spec: FrameSpec) -> dict:
        """Upload parameters: PNG output limited to the frame canvas, never upscaled."""
        transformation = ",".join(
            [
                "c_limit",
                "fl_immutable_cache",
                f"h_{spec.height}",
                f"q_{self.quality}",
                f"w_{FRAME_WIDTH}",
            ]
        )
        return {
            "public_id": self.public_id(spec.frame_index),
            "format": "png",
            "transformation": transformation,
        }

    async def render(self, spec: FrameSpec) -> RenderedFrame:
        """
        Render one frame.

        Args:
            spec: Frame index, text and canvas height

        Returns:
            RenderedFrame with the image as a data URI

        Raises:
            FrameRenderError: If any step fails; nothing is retried
        """
        self.logger.info("Rendering frame", frame_index=spec.frame_index, height=spec.height)

        try:
            html = generate_frame_html(spec.text, spec.frame_index, spec.height, self.content)
            document = to_data_uri(html.encode("utf-8"), "text/html")

            upload = await self.client.upload(document, self.upload_params(spec))
            source_url = upload["secure_url"]

            image_bytes = await self.client.fetch(source_url)
            media_type = detect_media_type(image_bytes)
        except Exception as e:
            self.logger.error(
                "Frame rendering failed", frame_index=spec.frame_index, error=str(e)
            )
            raise FrameRenderError(spec.frame_index, str(e)) from e

        frame = RenderedFrame(
            frame_index=spec.frame_index,
            data_uri=to_data_uri(image_bytes, media_type),
            media_type=media_type,
            byte_size=len(image_bytes),
            source_url=source_url,
        )

        self.logger.info(
            "Frame rendered",
            frame_index=spec.frame_index,
            file_size=frame.byte_size,
            source_url=source_url,
        )
        return frame
