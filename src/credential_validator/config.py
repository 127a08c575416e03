"""
Configuration settings for the Credential Validator.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Credential Validator"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # development | production

    # === Verdict ===
    PASS_THRESHOLD: int = Field(default=70, ge=0, le=100)

    # === Execution ===
    DETECTOR_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    RUN_DETECTORS_CONCURRENTLY: bool = True

    # === Stage Registry ===
    STAGES_CONFIG_PATH: Optional[str] = None  # JSON array of stages; None = built-in registry

    # === Format Checks ===
    MIN_ASPECT_RATIO: float = 1.5  # ID-1 card is 86mm x 54mm (~1.59)
    MAX_ASPECT_RATIO: float = 1.7
    MIN_IMAGE_WIDTH: int = 500
    MIN_IMAGE_HEIGHT: int = 300
    ALLOWED_IMAGE_FORMATS: list[str] = ["JPEG", "PNG", "WEBP"]

    # === Design & Security Checks ===
    COLOR_SAMPLE_SIZE: int = 50  # Side of the top-left square sampled for colors
    DOMINANT_COLOR_COUNT: int = 3
    HIGH_QUALITY_MIN_WIDTH: int = 1000
    HIGH_QUALITY_MIN_HEIGHT: int = 600
    MEDIUM_QUALITY_MIN_WIDTH: int = 600
    MEDIUM_QUALITY_MIN_HEIGHT: int = 400

    # === Structure Checks ===
    OFFICIAL_TEXT_PATTERNS: list[str] = [
        "INSTITUTO NACIONAL ELECTORAL",
        "CREDENCIAL PARA VOTAR",
        "CLAVE DE ELECTOR",
        "CURP",
        "VIGENCIA",
    ]
    OFFICIAL_TEXT_MIN_MATCHES: int = 3

    # === Validity Checks ===
    VALID_CARD_MODELS: list[str] = ["D", "E", "F", "G", "H"]
    MAX_VALIDITY_YEARS: int = 10
    MIN_VALIDITY_YEARS: int = 1

    # === Privacy ===
    REDACT_IDENTIFIERS: bool = True  # Mask CURP / elector key in summaries and logs

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
