"""
Validation Pipeline: multi-stage credential validation orchestrator.

Runs the stages of a StageRegistry in order against one DocumentEvidence:
- Each stage fans its detectors out through the StageRunner (quorum verdict)
- A failed gating stage stops the run: score 0, single recommendation
- Otherwise the score is aggregated over executed stages and compared with
  PASS_THRESHOLD

`run()` never raises for a bad document or a misbehaving detector. An
unexpected internal fault is reported as an error report (score 0, invalid,
`error` set) instead of an exception. Cancellation is propagated.
"""

import time
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import structlog

from credential_validator.config import Settings
from credential_validator.detectors.registry import DetectorRegistry, build_default_detector_registry
from credential_validator.detectors.validity_checks import Clock
from credential_validator.models.enums import DocumentType, Verdict
from credential_validator.models.evidence import DocumentEvidence
from credential_validator.models.results import StageResult, ValidationReport
from credential_validator.monitoring.metrics import (
    stage_failures_total,
    validation_duration_seconds,
    validation_score,
    validations_total,
)
from credential_validator.pii.redactor import redact_fields
from credential_validator.validation.recommendations import (
    RESUBMIT_DOCUMENT,
    synthesize_recommendations,
)
from credential_validator.validation.scoring import aggregate_score
from credential_validator.validation.stage_runner import StageRunner
from credential_validator.validation.stages import StageRegistry, build_stage_registry

logger = structlog.get_logger(__name__)


@dataclass
class ValidationContext:
    """
    Per-run state passed through the pipeline.

    Created fresh by every `run()` call; nothing in it is shared between runs.
    """

    evidence: DocumentEvidence
    stages: dict[str, StageResult] = field(default_factory=dict)
    gated_by: Optional[str] = None
    started_at: float = field(default_factory=time.perf_counter)

    @property
    def elapsed_seconds(self) -> float:
        return time.perf_counter() - self.started_at


class ValidationPipeline:
    """
    Ordered multi-stage validation orchestrator.

    The pipeline itself is immutable after construction and safe to share
    between concurrent runs.
    """

    def __init__(
        self,
        stages: StageRegistry,
        settings: Settings,
        runner: Optional[StageRunner] = None,
    ):
        """
        Initialize validation pipeline.

        Args:
            stages: Validated stage registry (execution order)
            settings: Application settings (threshold, timeouts, redaction)
            runner: Stage runner; built from settings when omitted
        """
        self.stages = stages
        self.pass_threshold = settings.PASS_THRESHOLD
        self.redact_identifiers = settings.REDACT_IDENTIFIERS
        self.runner = runner or StageRunner(
            default_timeout=settings.DETECTOR_TIMEOUT_SECONDS,
            concurrent=settings.RUN_DETECTORS_CONCURRENTLY,
        )
        self._specs = stages.as_mapping()

        logger.info(
            "ValidationPipeline initialized",
            stages=[spec.id for spec in stages],
            pass_threshold=self.pass_threshold,
            concurrent=self.runner.concurrent,
        )

    async def run(self, evidence: DocumentEvidence) -> ValidationReport:
        """
        Validate one document.

        Args:
            evidence: Decoded document and extracted text fields

        Returns:
            ValidationReport (never raises except on cancellation)
        """
        context = ValidationContext(evidence=evidence)

        logger.info(
            "Starting validation pipeline",
            stages=len(self.stages),
            decodable=evidence.decodable,
            resolution=evidence.resolution,
            fields=redact_fields(evidence.fields, redact_enabled=self.redact_identifiers),
        )

        try:
            await self._execute_stages(context)
            report = self._build_report(context)
        except Exception as e:
            logger.exception(
                "Unexpected error during validation",
                error_type=type(e).__name__,
                stages_completed=list(context.stages),
            )
            report = self._error_report(context, e)

        verdict = self._verdict(report, context)
        self._record_metrics(report, verdict, context)

        logger.info(
            "Validation completed",
            verdict=verdict.value,
            score=report.score,
            is_valid=report.is_valid,
            document_type=report.document_type.value,
            gated_by=context.gated_by,
            failed_stages=[stage_id for stage_id, result in report.stages.items() if not result.passed],
            duration_ms=round(context.elapsed_seconds * 1000, 2),
        )
        return report

    validate = run

    async def _execute_stages(self, context: ValidationContext) -> None:
        for index, spec in enumerate(self.stages):
            result = await self.runner.run_stage(spec, context.evidence)
            context.stages[spec.id] = result

            # An undecodable document stops at the first stage whatever its quorum says
            evidence_fault = index == 0 and not context.evidence.decodable
            if result.passed and not evidence_fault:
                continue

            if spec.is_gating or evidence_fault:
                context.gated_by = spec.id
                logger.info(
                    "Gating stage failed, remaining stages skipped",
                    stage=spec.id,
                    failed_checks=result.failed_checks,
                    decode_error=context.evidence.decode_error,
                    skipped=[skipped.id for skipped in self.stages.specs[index + 1:]],
                )
                return

    def _build_report(self, context: ValidationContext) -> ValidationReport:
        stages = dict(context.stages)
        document_type = self._classify_document(context)

        if context.gated_by is not None:
            return ValidationReport(
                is_valid=False,
                score=0,
                stages=stages,
                recommendations=[self._specs[context.gated_by].failure_message],
                document_type=document_type,
            )

        recommendations = synthesize_recommendations(stages, self._specs)
        score = aggregate_score(stages, self._specs)
        return ValidationReport(
            is_valid=score >= self.pass_threshold,
            score=score,
            stages=stages,
            recommendations=recommendations,
            document_type=document_type,
        )

    def _classify_document(self, context: ValidationContext) -> DocumentType:
        """
        Coarse document classification from the first (format) stage.

        Undecodable input is another kind of document; a decodable image that
        fails the format stage is another kind of image.
        """
        if not context.evidence.decodable:
            return DocumentType.OTHER_DOCUMENT

        first = context.stages.get(self.stages.specs[0].id)
        if first is None:
            return DocumentType.UNKNOWN
        return DocumentType.POTENTIAL_CREDENTIAL if first.passed else DocumentType.OTHER_IMAGE

    @staticmethod
    def _error_report(context: ValidationContext, error: Exception) -> ValidationReport:
        return ValidationReport(
            is_valid=False,
            score=0,
            stages=dict(context.stages),
            recommendations=[RESUBMIT_DOCUMENT],
            document_type=DocumentType.UNKNOWN,
            error=f"{type(error).__name__}: {error}",
        )

    @staticmethod
    def _verdict(report: ValidationReport, context: ValidationContext) -> Verdict:
        if report.error is not None:
            return Verdict.ERROR
        if context.gated_by is not None:
            return Verdict.GATED
        return Verdict.VALID if report.is_valid else Verdict.INVALID

    @staticmethod
    def _record_metrics(report: ValidationReport, verdict: Verdict, context: ValidationContext) -> None:
        validations_total.labels(verdict=verdict.value).inc()
        validation_score.observe(report.score)
        validation_duration_seconds.observe(context.elapsed_seconds)

        for stage_id, result in report.stages.items():
            if not result.passed:
                stage_failures_total.labels(stage=stage_id).inc()


def build_validation_pipeline(
    settings: Settings,
    detectors: Optional[DetectorRegistry] = None,
    today: Clock = date.today,
) -> ValidationPipeline:
    """
    Build a pipeline from settings: detector registry, stage registry, runner.

    Args:
        settings: Application settings
        detectors: Detector registry; the built-in detectors when omitted
        today: Clock for validity detectors (ignored when detectors is given)

    Raises:
        ConfigurationFault: If the stage configuration is invalid
    """
    if detectors is None:
        detectors = build_default_detector_registry(settings, today=today)

    stages = build_stage_registry(settings, detectors)
    return ValidationPipeline(stages, settings)
