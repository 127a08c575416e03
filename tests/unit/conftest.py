"""Unit test fixtures (fake detectors and stage builders).

Provides in-memory detectors so stage runner, scoring and pipeline behavior
can be tested without decoding any image.
"""

import asyncio
from typing import Any, Optional

import pytest

from credential_validator.detectors.base import BaseDetector
from credential_validator.models.evidence import DocumentEvidence
from credential_validator.models.results import CheckOutcome
from credential_validator.validation.stages import StageRegistry, StageSpec


class StaticDetector(BaseDetector):
    """Returns a fixed verdict, optionally after a delay."""

    def __init__(
        self,
        name: str,
        passed: bool = True,
        summary: Optional[str] = None,
        delay: float = 0.0,
        confidence: Optional[float] = None,
    ):
        self.name = name
        self.passed = passed
        self.summary = summary
        self.delay = delay
        self.confidence = confidence
        self.calls = 0

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.outcome(self.passed, self.summary, confidence=self.confidence)


class RaisingDetector(BaseDetector):
    """Raises the given exception on every call."""

    def __init__(self, name: str, error: Exception):
        self.name = name
        self.error = error

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        raise self.error


class ReturningDetector(BaseDetector):
    """Returns an arbitrary value instead of a CheckOutcome."""

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        return self.value


@pytest.fixture
def make_detector():
    """Factory fixture for StaticDetector.

    Usage:
        def test_something(make_detector):
            detector = make_detector("aspect_ratio", passed=False)
    """
    def _create(name: str, passed: bool = True, **kwargs) -> StaticDetector:
        return StaticDetector(name, passed=passed, **kwargs)

    return _create


@pytest.fixture
def make_raising_detector():
    """Factory fixture for a detector that raises."""
    def _create(name: str, error: Optional[Exception] = None) -> RaisingDetector:
        return RaisingDetector(name, error or RuntimeError("sensor offline"))

    return _create


@pytest.fixture
def make_returning_detector():
    """Factory fixture for a detector returning a non-CheckOutcome value."""
    def _create(name: str, value: Any = None) -> ReturningDetector:
        return ReturningDetector(name, value)

    return _create


@pytest.fixture
def make_stage(make_detector):
    """Factory fixture to create a StageSpec from pass/fail flags.

    Usage:
        def test_something(make_stage):
            stage = make_stage("structure", [True, False, False], weight=25, quorum=2)
    """
    def _create(
        stage_id: str,
        verdicts: list[bool],
        weight: int = 10,
        quorum: int = 1,
        gating: bool = False,
        recommendation: Optional[str] = None,
    ) -> StageSpec:
        detectors = tuple(
            make_detector(f"{stage_id}_check_{index}", passed=passed)
            for index, passed in enumerate(verdicts)
        )
        return StageSpec(
            id=stage_id,
            weight=weight,
            min_passing_checks=quorum,
            is_gating=gating,
            detectors=detectors,
            name=stage_id.title(),
            recommendation=recommendation if recommendation is not None else f"Fix {stage_id}",
        )

    return _create


@pytest.fixture
def five_stage_registry(make_stage):
    """Default-shaped registry (weights 20/25/20/25/10) with structure passing 1 of 3."""
    return StageRegistry(
        [
            make_stage("format", [True, True, True], weight=20, quorum=3, gating=True),
            make_stage(
                "structure",
                [True, False, False],
                weight=25,
                quorum=2,
                recommendation="Verify the data structure (CURP and elector key)",
            ),
            make_stage("design", [True, True], weight=20, quorum=1),
            make_stage("security", [True, True], weight=25, quorum=1),
            make_stage("validity", [True, True, True], weight=10, quorum=2),
        ]
    )


@pytest.fixture
def dummy_evidence(create_evidence) -> DocumentEvidence:
    """Small decodable image; fake detectors ignore its content."""
    return create_evidence(width=160, height=100)
