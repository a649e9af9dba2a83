"""
Test Mocks
===========

Stub rendering provider for exercising the frame pipeline without network access.
"""

import io
from typing import Any, Dict, List, Optional

from PIL import Image

from framegen.core.rendering.provider_client import ProviderCredentials, ProviderError


def make_png_bytes(width: int = 8, height: int = 8, color: str = "black") -> bytes:
    """Create a small, valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def frame_index_from_public_id(public_id: str) -> int:
    """Extract the frame index from ``<prefix>_<frame>_<millis>``."""
    return int(public_id.rsplit("_", 2)[-2])


class StubProviderClient:
    """In-memory stand-in for CloudinaryClient."""

    def __init__(
        self,
        fail_on_frame: Optional[int] = None,
        fail_on_fetch: bool = False,
        image_bytes: Optional[bytes] = None,
    ):
        self.credentials = ProviderCredentials(
            cloud_name="test-cloud", api_key="test-key", api_secret="test-secret"
        )
        self.fail_on_frame = fail_on_frame
        self.fail_on_fetch = fail_on_fetch
        self.image_bytes = image_bytes if image_bytes is not None else make_png_bytes()
        self.uploads: List[Dict[str, Any]] = []
        self.fetches: List[str] = []
        self.closed = False

    @property
    def upload_count(self) -> int:
        return len(self.uploads)

    @property
    def uploaded_frames(self) -> List[int]:
        return [frame_index_from_public_id(u["params"]["public_id"]) for u in self.uploads]

    async def upload(
        self, file: str, params: Dict[str, Any], resource_type: str = "image"
    ) -> Dict[str, Any]:
        self.uploads.append({"file": file, "params": params, "resource_type": resource_type})
        public_id = params["public_id"]

        if self.fail_on_frame == frame_index_from_public_id(public_id):
            raise ProviderError("Upload failed: 500 - provider unavailable")

        return {
            "public_id": public_id,
            "secure_url": f"https://res.example.com/test-cloud/image/upload/{public_id}.png",
            "bytes": len(self.image_bytes),
        }

    async def fetch(self, url: str) -> bytes:
        self.fetches.append(url)
        if self.fail_on_fetch:
            raise ProviderError("Download failed: 404 - not found")
        return self.image_bytes

    async def close(self) -> None:
        self.closed = True
