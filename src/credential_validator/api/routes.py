"""
API routes for document validation.

POST /validate always answers 200 for a well-formed request: undecodable
documents, failing detectors and internal faults all surface inside the
report, never as HTTP errors.
"""

import asyncio
import dataclasses
import time
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, status

from credential_validator.api.dependencies import (
    get_detector_registry,
    get_settings,
    get_stage_registry,
    get_validation_pipeline,
)
from credential_validator.api.models import (
    ErrorResponse,
    HealthResponse,
    StageInfo,
    ValidateRequest,
    ValidationResponse,
    VersionResponse,
)
from credential_validator.config import Settings
from credential_validator.detectors.registry import DetectorRegistry
from credential_validator.models.evidence import DocumentEvidence
from credential_validator.validation.pipeline import ValidationPipeline
from credential_validator.validation.stages import StageRegistry

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/validate",
    response_model=ValidationResponse,
    status_code=status.HTTP_200_OK,
    summary="Validate a credential image",
    description="""
    Run the configured validation stages against one document image.

    The report carries the score (0-100), the validity verdict, per-stage
    check outcomes and remediation recommendations.
    """,
    responses={
        200: {"description": "Validation completed (report may be failing or degraded)"},
        400: {"model": ErrorResponse, "description": "Invalid request format"},
        500: {"model": ErrorResponse, "description": "Service misconfigured"},
    },
)
async def validate_document(
    request: ValidateRequest,
    pipeline: ValidationPipeline = Depends(get_validation_pipeline),
) -> ValidationResponse:
    """
    Validate a single document.

    Args:
        request: Image payload and upstream-extracted text fields
        pipeline: Validation pipeline singleton (injected)

    Returns:
        ValidationResponse with the report
    """
    start_time = time.perf_counter()

    logger.info(
        "Validation request received",
        payload_chars=len(request.image),
        media_type=request.media_type,
        field_names=sorted(request.fields),
    )

    # Pillow decoding is CPU-bound
    evidence = await asyncio.to_thread(
        DocumentEvidence.from_data_uri, request.image, request.fields
    )
    if request.media_type:
        evidence = dataclasses.replace(evidence, media_type=request.media_type)

    report = await pipeline.run(evidence)

    duration_ms = int((time.perf_counter() - start_time) * 1000)
    response_status = "degraded" if report.error else "success"

    logger.info(
        "Validation request completed",
        status=response_status,
        score=report.score,
        is_valid=report.is_valid,
        duration_ms=duration_ms,
    )

    return ValidationResponse(
        status=response_status,
        report=report,
        processing_duration_ms=duration_ms,
    )


@router.get(
    "/stages",
    response_model=list[StageInfo],
    summary="Configured validation stages",
)
async def list_stages(
    stages: StageRegistry = Depends(get_stage_registry),
) -> list[StageInfo]:
    """List stages in execution order with their weights and quorums."""
    return [
        StageInfo(
            id=spec.id,
            name=spec.name,
            description=spec.description,
            weight=spec.weight,
            min_passing_checks=spec.min_passing_checks,
            gating=spec.is_gating,
            detectors=spec.detector_names,
            recommendation=spec.failure_message,
        )
        for spec in stages
    ]


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    settings: Settings = Depends(get_settings),
    stages: StageRegistry = Depends(get_stage_registry),
    detectors: DetectorRegistry = Depends(get_detector_registry),
) -> HealthResponse:
    """
    Report service health.

    The service has no external dependencies: it is healthy as soon as its
    stage registry is built and non-empty.
    """
    return HealthResponse(
        status="healthy" if len(stages) > 0 else "unhealthy",
        version=settings.APP_VERSION,
        stage_count=len(stages),
        detector_count=len(detectors),
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Version and scoring configuration",
)
async def version_info(
    settings: Settings = Depends(get_settings),
    stages: StageRegistry = Depends(get_stage_registry),
) -> VersionResponse:
    """Return version, pass threshold and the configured stage order."""
    return VersionResponse(
        version=settings.APP_VERSION,
        pass_threshold=settings.PASS_THRESHOLD,
        total_weight=stages.total_weight,
        stages=[spec.id for spec in stages],
    )
