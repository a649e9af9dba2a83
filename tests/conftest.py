"""
Test Configuration
==================

Pytest configuration with fixtures shared by unit and integration tests.
Provides test settings, a stubbed rendering provider and sample texts.
"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from pydantic_settings import SettingsConfigDict

import framegen.config.settings as settings_module
from framegen.config.settings import Settings
from framegen.api.main import create_app
from framegen.core.pipeline import FramePipeline
from framegen.core.rendering.frame_renderer import FrameRenderer

from tests.utils.mocks import StubProviderClient, make_png_bytes


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"
    cloudinary_cloud_name: str = "test-cloud"
    cloudinary_api_key: str = "test-key"
    cloudinary_api_secret: str = "test-secret"
    expose_error_details: bool = True

    model_config = SettingsConfigDict(env_file=".env.test")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Install test settings as the global settings instance."""
    previous = settings_module.settings
    settings_module.settings = test_settings
    yield test_settings
    settings_module.settings = previous


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG image."""
    return make_png_bytes()


@pytest.fixture
def stub_client() -> StubProviderClient:
    """Provider stub that succeeds for every frame."""
    return StubProviderClient()


@pytest.fixture
def frame_renderer(stub_client: StubProviderClient) -> FrameRenderer:
    """Frame renderer wired to the provider stub with a fixed clock."""
    return FrameRenderer(stub_client, clock=lambda: 1700000000.5)


@pytest.fixture
def pipeline(frame_renderer: FrameRenderer) -> FramePipeline:
    """Pipeline using the stubbed renderer."""
    return FramePipeline(frame_renderer)


@pytest.fixture
def sample_text() -> str:
    """Typical multi-line price list."""
    return "실시간 가격표\n아이템1: 100원\n아이템2: 200원"


@pytest.fixture
def client(stub_client: StubProviderClient) -> Generator[TestClient, None, None]:
    """FastAPI test client backed by the provider stub."""
    app = create_app(provider_client=stub_client)  # type: ignore[arg-type]
    with TestClient(app) as test_client:
        yield test_client
