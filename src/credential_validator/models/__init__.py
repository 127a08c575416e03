"""
Data models for the Credential Validator.

Includes:
- Enums (DocumentType, Verdict)
- Evidence (DocumentEvidence)
- Results (CheckOutcome, StageResult, ValidationReport)
"""

from credential_validator.models.enums import DocumentType, Verdict
from credential_validator.models.evidence import DocumentEvidence
from credential_validator.models.results import (
    CheckOutcome,
    StageResult,
    ValidationReport,
)

__all__ = [
    # Enums
    "DocumentType",
    "Verdict",
    # Evidence
    "DocumentEvidence",
    # Results
    "CheckOutcome",
    "StageResult",
    "ValidationReport",
]
