"""
Structure detectors: do the extracted data fields have the official shape?

Text extraction (OCR) happens upstream; these detectors only check the
fields handed over in DocumentEvidence.fields.
"""

import re
from typing import Iterable

from credential_validator.detectors.base import BaseDetector
from credential_validator.models.evidence import DocumentEvidence
from credential_validator.models.results import CheckOutcome
from credential_validator.pii.redactor import redact_identifier

CURP_PATTERN = re.compile(r"^[A-Z]{4}\d{6}[HM][A-Z]{5}[A-Z0-9]{2}$")
ELECTOR_KEY_PATTERN = re.compile(r"^[A-Z]{4}\d{10}[A-Z0-9]{2}$")


class IdentifierFormatDetector(BaseDetector):
    """
    Checks one identifier field against a fixed pattern.

    Subclasses set `name`, `field_name`, `pattern` and `expected`.
    """

    field_name: str = ""
    pattern: re.Pattern[str] = re.compile(r"^$")

    def __init__(self, redact: bool = True):
        self.redact = redact

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        value = evidence.get_field(self.field_name)
        if value is None:
            return self.outcome(False, "not detected")

        normalized = value.upper().replace(" ", "")
        shown = redact_identifier(normalized, redact_enabled=self.redact)

        if self.pattern.fullmatch(normalized):
            return self.outcome(True, shown)
        return self.outcome(False, f"{shown} (invalid format)")


class CurpFormatDetector(IdentifierFormatDetector):
    name = "curp_format"
    field_name = "curp"
    pattern = CURP_PATTERN
    expected = "4 letters + 6 digits + H/M + 5 letters + 2 characters"


class ElectorKeyFormatDetector(IdentifierFormatDetector):
    name = "elector_key_format"
    field_name = "elector_key"
    pattern = ELECTOR_KEY_PATTERN
    expected = "4 letters + 10 digits + 2 characters"


class OfficialTextDetector(BaseDetector):
    """
    The extracted text carries enough of the official headings.

    Confidence is the share of headings found.
    """

    name = "official_text"

    def __init__(self, patterns: Iterable[str], min_matches: int = 3):
        self.patterns = tuple(patterns)
        self.min_matches = min_matches
        self.expected = f"at least {min_matches} of {len(self.patterns)} official headings"

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        text = evidence.get_field("text")
        if text is None or not self.patterns:
            return self.outcome(False, "not detected")

        haystack = text.upper()
        matched = [pattern for pattern in self.patterns if pattern.upper() in haystack]
        confidence = len(matched) / len(self.patterns) * 100

        return self.outcome(
            len(matched) >= self.min_matches,
            f"{len(matched)}/{len(self.patterns)} official headings found",
            confidence=confidence,
        )
