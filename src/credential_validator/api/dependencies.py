"""
FastAPI dependency injection for the credential validator.

Provides singleton instances of the read-only validation components. They are
built once (startup builds them eagerly, see main.py) and shared by every
request; tests replace them through `app.dependency_overrides`.
"""

from functools import lru_cache

from credential_validator.config import Settings, settings
from credential_validator.detectors.registry import (
    DetectorRegistry,
    build_default_detector_registry,
)
from credential_validator.validation.pipeline import ValidationPipeline
from credential_validator.validation.stages import StageRegistry, build_stage_registry


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_detector_registry() -> DetectorRegistry:
    """
    Get singleton registry of built-in detectors.

    Returns:
        DetectorRegistry instance
    """
    return build_default_detector_registry(get_settings())


@lru_cache()
def get_stage_registry() -> StageRegistry:
    """
    Get singleton stage registry.

    Loads STAGES_CONFIG_PATH (or the built-in stages) once.

    Raises:
        ConfigurationFault: If the stage configuration is invalid
    """
    return build_stage_registry(get_settings(), get_detector_registry())


@lru_cache()
def get_validation_pipeline() -> ValidationPipeline:
    """
    Get singleton validation pipeline.

    The pipeline holds no per-run state, so one instance serves all requests.
    """
    return ValidationPipeline(get_stage_registry(), get_settings())


def reset_dependencies() -> None:
    """Drop cached singletons (settings reload, tests)."""
    for getter in (
        get_validation_pipeline,
        get_stage_registry,
        get_detector_registry,
        get_settings,
    ):
        getter.cache_clear()
