"""
Pydantic Models and Schemas
===========================

Data models for frame requests/responses, per-frame rendering data and the
branding content of the frame template.
"""

from typing import Optional, List, Literal, Tuple
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


FRAME_COUNT = 4


# Template Models
class InfoLine(BaseModel):
    """One informational list line with its decorative icon."""

    model_config = ConfigDict(frozen=True)

    icon: str = Field(..., description="Decorative icon (emoji)")
    text: str = Field(..., description="Line text")


class TemplateContent(BaseModel):
    """Fixed copy rendered around the user text in every frame."""

    model_config = ConfigDict(frozen=True)

    lang: str = Field("ko", description="Document language")
    document_title: str = Field("더블랙샵 GIF 버전", description="HTML <title> text")
    title: str = Field("THE BLACK SHOP", description="Headline text")
    subtitle: str = Field(
        "디아블로4 시즌9 버스 · 대리 · 아이템 전문 거래소", description="Headline subtitle"
    )
    info_lines: Tuple[InfoLine, ...] = Field(
        default=(
            InfoLine(icon="🦾", text="모든 장비, 아이템, 재료 완비"),
            InfoLine(icon="🚌", text="버스, 대리, 세팅 풀 지원"),
            InfoLine(icon="🦸‍♂️", text="경험 많은 전문 기사 상시 대기"),
            InfoLine(icon="🔥", text="합리적인 실시간 최저가 보장"),
        ),
        min_length=FRAME_COUNT,
        max_length=FRAME_COUNT,
        description="Informational lines, one highlighted per frame",
    )
    cta_text: str = Field("💬 오픈채팅은 가격표 클릭!", description="Call-to-action text")
    price_title: str = Field("💰 실시간 가격표", description="Price section title")
    font_stylesheet: Optional[str] = Field(
        "https://fonts.googleapis.com/css2?family=Noto+Sans+KR:wght@400;500;600;700;800&display=swap",
        description="Web font stylesheet URL",
    )


class FrameStyle(BaseModel):
    """Per-frame palette and emphasis values."""

    model_config = ConfigDict(frozen=True)

    title_gradient: str
    icon_scale: float
    highlight_color: str
    cta_gradient: str
    cta_border: str
    cta_glow_px: int
    cta_glow_rgba: str
    price_color: str
    price_glow_px: int
    price_glow_rgba: str


# Rendering Models
class FrameSpec(BaseModel):
    """Input bundle for rendering one frame."""

    model_config = ConfigDict(frozen=True)

    frame_index: int = Field(..., ge=1, le=FRAME_COUNT, description="1-based frame index")
    text: str = Field(..., description="User text rendered into the frame")
    height: int = Field(..., gt=0, description="Canvas height in pixels")


class RenderedFrame(BaseModel):
    """Result of rendering one frame."""

    frame_index: int = Field(..., description="1-based frame index")
    data_uri: str = Field(..., description="Media-type-prefixed base64 image payload")
    media_type: str = Field("image/png", description="Image media type")
    byte_size: int = Field(..., ge=0, description="Raw image size in bytes")
    source_url: Optional[str] = Field(None, description="Provider artifact location")


# API Request/Response Models
class FrameRequest(BaseModel):
    """Request model for frame generation."""

    text: Optional[str] = Field(None, description="Text block to render")


class FramesResponse(BaseModel):
    """Successful frame generation response."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    frames: List[str] = Field(..., min_length=FRAME_COUNT, max_length=FRAME_COUNT)
    frame_count: int = Field(FRAME_COUNT, alias="frameCount")
    dynamic_height: int = Field(..., alias="dynamicHeight")
    message: str = Field("Frames generated successfully", description="Status message")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    success: Literal[False] = False
    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(None, description="Diagnostic detail if exposed")


# Health Check Models
class HealthStatus(BaseModel):
    """Health check status."""

    status: Literal["healthy", "degraded"] = Field(..., description="Overall status")
    version: str = Field(..., description="Application version")
    provider_configured: bool = Field(..., description="Whether provider credentials are set")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Check timestamp"
    )
