"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import io
from datetime import date

import pytest
from PIL import Image

from credential_validator.config import Settings
from credential_validator.models.evidence import DocumentEvidence

# Fixed "today" so validity checks are reproducible
TODAY = date(2026, 1, 15)

BLUE = (20, 60, 160)
GRAY = (128, 128, 128)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.PASS_THRESHOLD = 80
    """
    return Settings(
        # === Application ===
        APP_NAME="Credential Validator (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Verdict / Execution ===
        PASS_THRESHOLD=70,
        DETECTOR_TIMEOUT_SECONDS=1.0,
        RUN_DETECTORS_CONCURRENTLY=True,
        STAGES_CONFIG_PATH=None,

        # === Privacy / Monitoring ===
        REDACT_IDENTIFIERS=True,
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def today() -> date:
    """Fixed clock value for validity detectors."""
    return TODAY


@pytest.fixture
def credential_fields() -> dict[str, str]:
    """Upstream-extracted fields of a well-formed, current voter credential."""
    return {
        "curp": "GOME800705HDFMLR09",
        "elector_key": "GMMR8007050900H1",
        "text": (
            "INSTITUTO NACIONAL ELECTORAL MEXICO CREDENCIAL PARA VOTAR "
            "NOMBRE GOMEZ MARTINEZ ELENA CLAVE DE ELECTOR GMMR8007050900H1 "
            "CURP GOME800705HDFMLR09 VIGENCIA 2033"
        ),
        "issue_date": "2023-06-01",
        "expiry_date": "2033-05-01",
        "model": "G",
        "name": "ELENA GOMEZ MARTINEZ",
    }


@pytest.fixture
def create_image_bytes():
    """Factory fixture to create encoded images with Pillow.

    Usage:
        def test_something(create_image_bytes):
            data = create_image_bytes(width=860, height=540, fmt="JPEG")
    """
    def _create(
        width: int = 1200,
        height: int = 750,
        color: tuple[int, int, int] = BLUE,
        fmt: str = "PNG",
    ) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGB", (width, height), color).save(buffer, format=fmt)
        return buffer.getvalue()

    return _create


@pytest.fixture
def create_evidence(create_image_bytes):
    """Factory fixture to create decoded DocumentEvidence.

    Usage:
        def test_something(create_evidence):
            evidence = create_evidence(width=400, height=400, fields={"model": "E"})
    """
    def _create(
        width: int = 1200,
        height: int = 750,
        color: tuple[int, int, int] = BLUE,
        fmt: str = "PNG",
        fields: dict[str, str] | None = None,
        media_type: str | None = None,
    ) -> DocumentEvidence:
        data = create_image_bytes(width=width, height=height, color=color, fmt=fmt)
        return DocumentEvidence.from_bytes(
            data,
            media_type=media_type or f"image/{fmt.lower()}",
            fields=fields,
        )

    return _create


@pytest.fixture
def credential_evidence(create_evidence, credential_fields) -> DocumentEvidence:
    """High-resolution blue card-shaped image with well-formed fields."""
    return create_evidence(fields=credential_fields)


@pytest.fixture
def undecodable_evidence() -> DocumentEvidence:
    """Evidence whose bytes are not an image."""
    return DocumentEvidence.from_bytes(b"%PDF-1.7 not an image", media_type="image/png")
