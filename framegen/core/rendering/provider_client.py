"""
Rendering Provider Client
=========================

HTTP client for the Cloudinary upload API, which rasterizes the frame HTML
documents. The client is built once at startup from immutable credentials
and shared read-only by all requests.
"""

import hashlib
import time
from typing import Any, Dict, Optional

import aiohttp
from pydantic import BaseModel, ConfigDict

from framegen.config.logging import get_logger
from framegen.config.settings import Settings

logger = get_logger(__name__)

# Parameters Cloudinary leaves out of the request signature.
UNSIGNED_PARAMS = frozenset({"file", "api_key", "resource_type", "cloud_name"})


class ProviderError(Exception):
    """Exception raised when rendering provider communication fails."""

    pass


class ProviderCredentials(BaseModel):
    """Provider account credentials, read once at process start."""

    model_config = ConfigDict(frozen=True)

    cloud_name: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderCredentials":
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )


def sign_params(params: Dict[str, Any], api_secret: str) -> str:
    """
    Compute the Cloudinary request signature.

    Signed parameters are sorted by name, serialized as ``key=value`` pairs
    joined by ``&`` and suffixed with the API secret; the signature is the
    SHA-1 hex digest of that string. Empty values are skipped.
    """
    to_sign = "&".join(
        f"{key}={value}"
        for key, value in sorted(params.items())
        if key not in UNSIGNED_PARAMS and value not in (None, "")
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryClient:
    """Client for uploading documents to Cloudinary and fetching the results."""

    def __init__(
        self,
        credentials: ProviderCredentials,
        api_base: str = "https://api.cloudinary.com/v1_1",
        timeout: Optional[float] = None,
    ):
        self.credentials = credentials
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.logger: Any = logger.bind(component="provider_client")  # structlog.BoundLoggerBase
        self._session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryClient":
        return cls(
            ProviderCredentials.from_settings(settings),
            api_base=settings.cloudinary_api_base,
            timeout=settings.provider_timeout,
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _upload_url(self, resource_type: str = "image") -> str:
        return f"{self.api_base}/{self.credentials.cloud_name}/{resource_type}/upload"

    def _signed_payload(self, file: str, params: Dict[str, Any]) -> Dict[str, str]:
        """Build the signed form fields for an upload request."""
        if not self.credentials.configured:
            raise ProviderError(
                "Rendering provider credentials are not configured "
                "(cloud name, API key and API secret are required)"
            )

        signed = {key: str(value) for key, value in params.items() if value is not None}
        signed["timestamp"] = str(int(time.time()))
        signed["signature"] = sign_params(signed, self.credentials.api_secret or "")
        signed["api_key"] = self.credentials.api_key or ""
        signed["file"] = file
        return signed

    async def upload(
        self, file: str, params: Dict[str, Any], resource_type: str = "image"
    ) -> Dict[str, Any]:
        """
        Upload a file (URL or data URI) and return the provider's response.

        Args:
            file: File reference accepted by the provider, e.g. a data URI
            params: Upload parameters (public_id, format, transformation, ...)
            resource_type: Provider resource type

        Returns:
            Parsed JSON response containing at least ``secure_url``

        Raises:
            ProviderError: If the upload fails or the response is malformed
        """
        payload = self._signed_payload(file, params)

        try:
            session = await self._get_session()
            async with session.post(self._upload_url(resource_type), data=payload) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise ProviderError(f"Upload failed: {response.status} - {error_text}")
                data = await response.json(content_type=None)
        except ProviderError:
            raise
        except Exception as e:
            error_msg = f"Upload failed: {e}"
            self.logger.error("Provider upload error", error=error_msg)
            raise ProviderError(error_msg) from e

        if not isinstance(data, dict) or not data.get("secure_url"):
            raise ProviderError(f"Upload response missing secure_url: {data!r}")

        self.logger.debug(
            "Upload completed",
            public_id=data.get("public_id"),
            bytes=data.get("bytes"),
            secure_url=data.get("secure_url"),
        )
        return data

    async def fetch(self, url: str) -> bytes:
        """
        Download a stored artifact.

        Raises:
            ProviderError: If the download fails
        """
        try:
            session = await self._get_session()
            async with session.get(url) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise ProviderError(f"Download failed: {response.status} - {error_text}")
                return await response.read()
        except ProviderError:
            raise
        except Exception as e:
            error_msg = f"Download failed: {e}"
            self.logger.error("Provider download error", url=url, error=error_msg)
            raise ProviderError(error_msg) from e
