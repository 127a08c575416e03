"""
Stage Runner: executes one stage's detectors and applies its quorum.

Every configured detector is invoked. A detector that raises, times out or
returns something other than a CheckOutcome is recorded as a failing outcome
("detector error: <reason>"); one bad detector never aborts the stage.

Detectors may run concurrently behind a join barrier. Outcomes are always
ordered by the stage's configured detector order, never by completion order.
Cancellation (asyncio.CancelledError) is not caught: cancelling a run cancels
every in-flight detector task.
"""

import asyncio
from typing import Sequence

import structlog

from credential_validator.detectors.base import BaseDetector
from credential_validator.exceptions import DetectorFault, DetectorTimeout
from credential_validator.models.evidence import DocumentEvidence
from credential_validator.models.results import CheckOutcome, StageResult
from credential_validator.monitoring.metrics import detector_faults_total
from credential_validator.validation.stages import StageSpec

logger = structlog.get_logger(__name__)


class StageRunner:
    """
    Runs a single StageSpec against document evidence.

    Stateless between calls; one instance is shared by all validation runs.
    """

    def __init__(self, default_timeout: float = 10.0, concurrent: bool = True):
        """
        Initialize stage runner.

        Args:
            default_timeout: Per-detector timeout in seconds (stage may override)
            concurrent: Fan detectors out concurrently instead of one by one
        """
        self.default_timeout = default_timeout
        self.concurrent = concurrent

    async def run_stage(self, spec: StageSpec, evidence: DocumentEvidence) -> StageResult:
        """
        Run every detector of the stage and derive the stage verdict.

        Args:
            spec: Stage to execute
            evidence: Document evidence

        Returns:
            StageResult with outcomes in configured order
        """
        timeout = spec.timeout_seconds or self.default_timeout

        if self.concurrent:
            outcomes = await asyncio.gather(
                *(self._invoke(detector, evidence, timeout) for detector in spec.detectors)
            )
        else:
            outcomes = [
                await self._invoke(detector, evidence, timeout) for detector in spec.detectors
            ]

        result = StageResult(
            stage_id=spec.id,
            passed=quorum_reached(outcomes, spec.min_passing_checks),
            outcomes=tuple(outcomes),
        )

        logger.debug(
            "Stage completed",
            stage=spec.id,
            passed=result.passed,
            passed_count=result.passed_count,
            total_count=result.total_count,
            min_passing_checks=spec.min_passing_checks,
            failed_checks=result.failed_checks,
        )
        return result

    async def _invoke(
        self,
        detector: BaseDetector,
        evidence: DocumentEvidence,
        timeout: float,
    ) -> CheckOutcome:
        """Invoke one detector, converting every fault into a failing outcome."""
        try:
            outcome = await asyncio.wait_for(detector.detect(evidence), timeout=timeout)
        except asyncio.TimeoutError:
            return self._fault_outcome(DetectorTimeout(detector.name, timeout))
        except DetectorFault as e:
            return self._fault_outcome(e)
        except Exception as e:
            return self._fault_outcome(
                DetectorFault(detector.name, f"{type(e).__name__}: {e}")
            )

        if not isinstance(outcome, CheckOutcome):
            return self._fault_outcome(
                DetectorFault(detector.name, f"returned {type(outcome).__name__}, expected CheckOutcome")
            )

        if outcome.name != detector.name:
            outcome = outcome.model_copy(update={"name": detector.name})

        return outcome

    @staticmethod
    def _fault_outcome(fault: DetectorFault) -> CheckOutcome:
        logger.warning(
            "Detector fault recorded as failed check",
            detector=fault.detector_name,
            fault=fault.fault_type,
            reason=fault.reason,
        )
        detector_faults_total.labels(detector=fault.detector_name, fault=fault.fault_type).inc()

        return CheckOutcome(
            name=fault.detector_name,
            passed=False,
            evidence_summary=f"detector error: {fault.reason}",
        )


def quorum_reached(outcomes: Sequence[CheckOutcome], min_passing_checks: int) -> bool:
    """
    Quorum rule: at least `min_passing_checks` outcomes passed.

    A stage with no outcomes passes only when its quorum is 0.
    """
    return sum(1 for outcome in outcomes if outcome.passed) >= min_passing_checks
