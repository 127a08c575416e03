"""Integration test fixtures (real detectors, default stage registry, HTTP client).

Integration tests exercise the built-in detectors on Pillow-generated images
and the FastAPI app through TestClient. No external service is required.
"""

import base64

import pytest
from fastapi.testclient import TestClient

from credential_validator.api.dependencies import get_validation_pipeline
from credential_validator.main import app
from credential_validator.validation.pipeline import build_validation_pipeline


@pytest.fixture
def default_pipeline(test_settings, today):
    """Pipeline over the built-in stages with a fixed clock."""
    return build_validation_pipeline(test_settings, today=lambda: today)


@pytest.fixture
def client(default_pipeline):
    """TestClient with the fixed-clock pipeline injected."""
    app.dependency_overrides[get_validation_pipeline] = lambda: default_pipeline
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def create_data_uri(create_image_bytes):
    """Factory fixture to encode a generated image as a data URI."""
    def _create(fmt: str = "PNG", **kwargs) -> str:
        payload = base64.b64encode(create_image_bytes(fmt=fmt, **kwargs)).decode()
        return f"data:image/{fmt.lower()};base64,{payload}"

    return _create
