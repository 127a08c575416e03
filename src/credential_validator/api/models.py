"""
API-specific request and response models for FastAPI endpoints.

These models wrap the core domain models (DocumentEvidence, ValidationReport)
with API-specific metadata and status information.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from credential_validator.models.results import ValidationReport


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ValidateRequest(BaseModel):
    """Request for the validation endpoint."""

    image: str = Field(
        min_length=1,
        description="Document image as a data URI (data:image/png;base64,...) or bare base64",
    )
    media_type: Optional[str] = Field(
        default=None,
        description="Declared media type; overrides the data URI header when set",
        examples=["image/jpeg"],
    )
    fields: dict[str, str] = Field(
        default_factory=dict,
        description="Text fields extracted upstream (curp, elector_key, text, issue_date, expiry_date, model)",
    )


class ValidationResponse(BaseModel):
    """Response for the validation endpoint."""

    status: str = Field(
        description="Request status",
        examples=["success", "degraded"],
    )
    report: ValidationReport = Field(
        description="Validation report"
    )
    processing_duration_ms: int = Field(
        ge=0,
        description="Wall-clock processing time in milliseconds",
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="Report creation timestamp (UTC)",
    )


class StageInfo(BaseModel):
    """Configured stage as exposed by GET /stages."""

    id: str
    name: str
    description: str
    weight: int
    min_passing_checks: int
    gating: bool
    detectors: list[str]
    recommendation: str


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "unhealthy"],
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"],
    )
    stage_count: int = Field(ge=0)
    detector_count: int = Field(ge=0)
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)",
    )


class VersionResponse(BaseModel):
    """Response for version info endpoint."""

    version: str = Field(
        description="Application version"
    )
    pass_threshold: int = Field(
        description="Minimum score for a valid document"
    )
    total_weight: int = Field(
        description="Sum of configured stage weights"
    )
    stages: list[str] = Field(
        description="Stage ids in execution order"
    )


class ErrorResponse(BaseModel):
    """Structured error body returned by the exception handlers."""

    error: str
    message: str
    details: dict = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=_utcnow)
