"""
Abstract base for detector capabilities.

A detector is one named authenticity check. The pipeline knows nothing about
how a detector decides: it only awaits `detect(evidence)` and records the
returned CheckOutcome. This abstraction allows plugging pixel-level detectors
(microtext, UV ink, holograms) without touching the stage runner or pipeline.
"""

from abc import ABC, abstractmethod
from typing import Optional

from credential_validator.models.evidence import DocumentEvidence
from credential_validator.models.results import CheckOutcome


class BaseDetector(ABC):
    """
    Abstract base class for detector capabilities.

    Responsibilities:
    - Inspect the evidence and decide pass/fail for a single named check
    - Report an optional confidence (0-100) from its own measurement
    - Summarize what was observed in a short string

    Does NOT handle:
    - Timeouts (that's StageRunner's job)
    - Quorum or scoring (that's StageRunner's / scoring's job)

    Implementations MAY raise; the stage runner records any exception as a
    failing outcome. They must never use randomness.
    """

    name: str = ""
    expected: Optional[str] = None

    @abstractmethod
    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        """
        Run the check against the evidence.

        Args:
            evidence: Decoded document and extracted fields

        Returns:
            CheckOutcome named after this detector
        """

    def outcome(
        self,
        passed: bool,
        evidence_summary: Optional[str] = None,
        confidence: Optional[float] = None,
    ) -> CheckOutcome:
        """Build a CheckOutcome carrying this detector's name and expectation."""
        return CheckOutcome(
            name=self.name,
            passed=passed,
            confidence=confidence,
            evidence_summary=evidence_summary,
            expected=self.expected,
        )

    def not_decodable(self, evidence: DocumentEvidence) -> CheckOutcome:
        return self.outcome(False, f"document not decodable: {evidence.decode_error}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
