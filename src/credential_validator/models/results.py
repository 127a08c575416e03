"""
Result data models for the validation pipeline.

CheckOutcome is produced once per detector invocation, StageResult once per
executed stage, ValidationReport once per validation run. All three are frozen:
once a report is returned to the caller it is never mutated.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from credential_validator.models.enums import DocumentType


class CheckOutcome(BaseModel):
    """
    Result of a single named detector check.

    Confidence, when present, comes only from the detector itself (0-100).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Detector name")
    passed: bool = Field(..., description="Whether the check passed")
    confidence: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=100.0,
        description="Optional detector-reported confidence (0-100)"
    )
    evidence_summary: Optional[str] = Field(
        default=None,
        description="Short human-readable account of what was observed"
    )
    expected: Optional[str] = Field(
        default=None,
        description="What a genuine credential is expected to show for this check"
    )


class StageResult(BaseModel):
    """
    Outcomes of one executed stage.

    `passed` is derived by the stage runner from the stage quorum, never set
    independently of `outcomes`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    stage_id: str = Field(..., min_length=1)
    passed: bool
    outcomes: tuple[CheckOutcome, ...] = Field(
        default=(),
        description="Outcomes in configured detector order"
    )

    @property
    def passed_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.passed)

    @property
    def total_count(self) -> int:
        return len(self.outcomes)

    @property
    def failed_checks(self) -> list[str]:
        return [outcome.name for outcome in self.outcomes if not outcome.passed]


class ValidationReport(BaseModel):
    """
    Complete verdict for one submitted document.

    `stages` preserves execution order. Stages skipped because a gating stage
    failed are absent, never present with a synthetic failure.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_valid: bool = Field(..., description="score >= pass threshold (false when gated or errored)")
    score: int = Field(..., ge=0, le=100, description="Weighted score over executed stages")
    stages: dict[str, StageResult] = Field(default_factory=dict)
    recommendations: list[str] = Field(default_factory=list)
    document_type: DocumentType = Field(default=DocumentType.UNKNOWN)
    error: Optional[str] = Field(
        default=None,
        description="Set only when an unexpected internal fault degraded the run"
    )
