"""
Validity detectors: is the credential current?

Dates come from upstream extraction as ISO strings (YYYY-MM-DD). The clock is
injectable so that a run is reproducible for a fixed "today".
"""

from datetime import date
from typing import Callable, Iterable, Optional

from credential_validator.detectors.base import BaseDetector
from credential_validator.models.evidence import DocumentEvidence
from credential_validator.models.results import CheckOutcome

Clock = Callable[[], date]


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse YYYY-MM-DD, returning None on anything else."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


class NotExpiredDetector(BaseDetector):
    """Expiry date lies in the future."""

    name = "not_expired"
    expected = "expiry date in the future"

    def __init__(self, today: Clock = date.today):
        self.today = today

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        raw = evidence.get_field("expiry_date")
        expiry = parse_iso_date(raw)
        if expiry is None:
            return self.outcome(False, "not detected" if raw is None else f"unreadable date {raw!r}")

        return self.outcome(expiry > self.today(), f"expires {expiry.isoformat()}")


class ValidityPeriodDetector(BaseDetector):
    """Issue-to-expiry span within the legal validity period."""

    name = "validity_period"

    def __init__(self, min_years: int = 1, max_years: int = 10):
        self.min_years = min_years
        self.max_years = max_years
        self.expected = f"between {min_years} and {max_years} years"

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        issued = parse_iso_date(evidence.get_field("issue_date"))
        expiry = parse_iso_date(evidence.get_field("expiry_date"))
        if issued is None or expiry is None:
            return self.outcome(False, "issue/expiry dates not detected")

        years = (expiry - issued).days / 365
        if years > self.max_years:
            return self.outcome(False, f"validity period exceeds {self.max_years} years")
        if years < self.min_years:
            return self.outcome(False, f"validity period shorter than {self.min_years} year(s)")
        return self.outcome(True, f"valid for {round(years)} years")


class CardModelDetector(BaseDetector):
    """Card model letter belongs to a model still in circulation."""

    name = "card_model"

    def __init__(self, valid_models: Iterable[str] = ("D", "E", "F", "G", "H")):
        self.valid_models = tuple(model.upper() for model in valid_models)
        self.expected = "models " + ", ".join(self.valid_models)

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        model = evidence.get_field("model")
        if model is None:
            return self.outcome(False, "not detected")

        return self.outcome(model.upper() in self.valid_models, model.upper())
