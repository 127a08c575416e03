"""
Fault taxonomy for credential validation.

- DetectorFault / DetectorTimeout: a single capability failed. Recovered by the
  stage runner as a failing CheckOutcome, never propagated to the caller.
- EvidenceFault: the submitted document cannot be decoded. Detectors that need
  pixels raise it; the orchestrator surfaces it as a gating failure of the first stage.
- ConfigurationFault: malformed stage registry. Raised at startup, fatal.
"""

from typing import Any


class ValidationFault(Exception):
    """
    Base exception for all credential validation faults.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize validation fault.

        Args:
            message: Human-readable error description
            details: Structured error data for logging/metrics
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DetectorFault(ValidationFault):
    """
    A detector capability raised or returned something unusable.
    """

    fault_type = "error"

    def __init__(self, detector_name: str, reason: str):
        self.detector_name = detector_name
        self.reason = reason
        super().__init__(reason, {"detector": detector_name})


class DetectorTimeout(DetectorFault):
    """
    A detector did not complete within its time budget.
    """

    fault_type = "timeout"

    def __init__(self, detector_name: str, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(detector_name, f"timed out after {timeout_seconds:g}s")


class EvidenceFault(ValidationFault):
    """
    The document evidence cannot be decoded or read.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Document evidence is not decodable: {reason}")


class ConfigurationFault(ValidationFault):
    """
    The stage registry or a stage definition is malformed.

    Detected while building the registry, before any validation run starts.
    """

    def __init__(
        self,
        message: str,
        stage_id: str | None = None,
        field: str | None = None,
    ):
        """
        Initialize configuration fault.

        Args:
            message: Error description
            stage_id: Offending stage, if the fault is stage-specific
            field: Offending configuration field (e.g., "weight")
        """
        details = {}
        if stage_id:
            details["stage_id"] = stage_id
        if field:
            details["field"] = field

        super().__init__(message, details)
        self.stage_id = stage_id
        self.field = field
