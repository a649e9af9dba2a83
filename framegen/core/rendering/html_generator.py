"""
HTML Generator
==============

Build the self-contained HTML document for one animation frame.
Each frame shares the same layout and text; palettes and emphasis rotate
with the frame index so the four rendered stills loop as an animation.
"""

from typing import Any, Dict, Optional, Tuple
from pathlib import Path
import jinja2
from markupsafe import Markup, escape

from framegen.config.logging import get_logger
from framegen.core.rendering.layout import FRAME_WIDTH
from framegen.models.schemas import FRAME_COUNT, FrameStyle, TemplateContent

logger = get_logger(__name__)

TEMPLATE_NAME = "frame.html"

# Warm-to-hot title palettes; CTA glow rises then falls back for the loop.
FRAME_STYLES: Tuple[FrameStyle, ...] = (
    FrameStyle(
        title_gradient="linear-gradient(45deg, #ffd700, #ffb347, #ff8c00)",
        icon_scale=1.0,
        highlight_color="#ff6666",
        cta_gradient="linear-gradient(45deg, #4169e1, #6a5acd, #8a2be2)",
        cta_border="#4169e1",
        cta_glow_px=20,
        cta_glow_rgba="rgba(65, 105, 225, 0.4)",
        price_color="#ffaa00",
        price_glow_px=4,
        price_glow_rgba="rgba(255, 170, 0, 0.7)",
    ),
    FrameStyle(
        title_gradient="linear-gradient(90deg, #ffb347, #ff8c00, #ff6347)",
        icon_scale=1.05,
        highlight_color="#66ff66",
        cta_gradient="linear-gradient(90deg, #6a5acd, #8a2be2, #9370db)",
        cta_border="#6a5acd",
        cta_glow_px=22,
        cta_glow_rgba="rgba(106, 90, 205, 0.5)",
        price_color="#ff6600",
        price_glow_px=2,
        price_glow_rgba="rgba(255, 102, 0, 0.8)",
    ),
    FrameStyle(
        title_gradient="linear-gradient(135deg, #ff8c00, #ff6347, #ff4500)",
        icon_scale=1.1,
        highlight_color="#6666ff",
        cta_gradient="linear-gradient(135deg, #8a2be2, #9370db, #ba55d3)",
        cta_border="#8a2be2",
        cta_glow_px=25,
        cta_glow_rgba="rgba(138, 43, 226, 0.6)",
        price_color="#ff0066",
        price_glow_px=4,
        price_glow_rgba="rgba(255, 0, 102, 0.9)",
    ),
    FrameStyle(
        title_gradient="linear-gradient(180deg, #ff6347, #ff4500, #ffd700)",
        icon_scale=1.05,
        highlight_color="#ffff66",
        cta_gradient="linear-gradient(180deg, #9370db, #ba55d3, #4169e1)",
        cta_border="#9370db",
        cta_glow_px=22,
        cta_glow_rgba="rgba(147, 112, 219, 0.5)",
        price_color="#ffaa00",
        price_glow_px=5,
        price_glow_rgba="rgba(255, 170, 0, 0.7)",
    ),
)


class HTMLGenerationError(Exception):
    """Exception raised when HTML generation fails."""

    pass


def nl2br(value: str) -> Markup:
    """Escape text and turn every newline into a <br> tag."""
    return Markup("<br>").join(escape(line) for line in value.split("\n"))


def px(value: float) -> str:
    """Convert numeric value to CSS pixels."""
    return f"{value}px"


def frame_style(frame_index: int) -> FrameStyle:
    """Select the palette for a 1-based frame index, cycling every four frames."""
    if frame_index < 1:
        raise HTMLGenerationError(f"Frame index must be positive, got {frame_index}")
    return FRAME_STYLES[(frame_index - 1) % FRAME_COUNT]


def highlighted_line(frame_index: int) -> int:
    """1-based position of the informational line emphasised in a frame."""
    if frame_index < 1:
        raise HTMLGenerationError(f"Frame index must be positive, got {frame_index}")
    return (frame_index - 1) % FRAME_COUNT + 1


class Jinja2HTMLGenerator:
    """Jinja2-based frame document generator."""

    def __init__(self, template_dir: Optional[Path] = None) -> None:
        self.logger: Any = logger.bind(generator="jinja2")  # structlog.BoundLoggerBase
        self.template_dir = template_dir or Path(__file__).parent / "templates"
        self._setup_jinja2_environment()

    def _setup_jinja2_environment(self) -> None:
        """Setup Jinja2 template environment."""
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_dir)),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
            undefined=jinja2.StrictUndefined,
        )
        self.env.filters["px"] = px
        self.env.filters["nl2br"] = nl2br
        self.template = self.env.get_template(TEMPLATE_NAME)

    def generate(
        self,
        text: str,
        frame_index: int,
        height: int,
        content: Optional[TemplateContent] = None,
    ) -> str:
        """
        Generate the HTML document for one frame.

        The output depends only on the arguments, so identical calls return
        identical documents.

        Args:
            text: User text for the description block
            frame_index: 1-based frame index
            height: Canvas height in pixels
            content: Branding copy, defaults to TemplateContent()

        Returns:
            Complete HTML document

        Raises:
            HTMLGenerationError: If the frame index is invalid or rendering fails
        """
        context = self._prepare_context(text, frame_index, height, content)

        try:
            html = self.template.render(**context)
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("HTML generation failed", error=error_msg, frame_index=frame_index)
            raise HTMLGenerationError(error_msg) from e

        self.logger.debug(
            "HTML generation completed", frame_index=frame_index, html_length=len(html)
        )
        return html

    def _prepare_context(
        self,
        text: str,
        frame_index: int,
        height: int,
        content: Optional[TemplateContent],
    ) -> Dict[str, Any]:
        """Prepare template rendering context."""
        return {
            "text": text,
            "frame_index": frame_index,
            "height": height,
            "width": FRAME_WIDTH,
            "style": frame_style(frame_index),
            "highlighted_index": highlighted_line(frame_index),
            "content": content or TemplateContent(),
        }


_generator: Optional[Jinja2HTMLGenerator] = None


def get_html_generator() -> Jinja2HTMLGenerator:
    """Get or create the shared generator (the compiled template is read-only)."""
    global _generator
    if _generator is None:
        _generator = Jinja2HTMLGenerator()
    return _generator


def generate_frame_html(
    text: str, frame_index: int, height: int, content: Optional[TemplateContent] = None
) -> str:
    """
    Generate the HTML document for one frame.

    Args:
        text: User text
        frame_index: 1-based frame index
        height: Canvas height in pixels
        content: Optional branding copy

    Returns:
        Generated HTML string
    """
    return get_html_generator().generate(text, frame_index, height, content)
