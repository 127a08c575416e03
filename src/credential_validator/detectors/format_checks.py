"""
Format detectors: is the submission even shaped like an ID-1 credential image?

These feed the gating format stage. All three are pure functions of the
decoded dimensions and container format.
"""

from typing import Iterable

from credential_validator.detectors.base import BaseDetector
from credential_validator.models.evidence import DocumentEvidence
from credential_validator.models.results import CheckOutcome


class AspectRatioDetector(BaseDetector):
    """Width/height ratio within the credential's physical proportions."""

    name = "aspect_ratio"

    def __init__(self, min_ratio: float = 1.5, max_ratio: float = 1.7):
        self.min_ratio = min_ratio
        self.max_ratio = max_ratio
        self.expected = f"{min_ratio:g} - {max_ratio:g} (86mm x 54mm)"

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        ratio = evidence.aspect_ratio
        if not evidence.decodable or ratio is None:
            return self.not_decodable(evidence)

        passed = self.min_ratio <= ratio <= self.max_ratio
        return self.outcome(passed, f"{ratio:.2f} ({evidence.resolution})")


class MinimumResolutionDetector(BaseDetector):
    """Image large enough for the printed data to be legible."""

    name = "minimum_resolution"

    def __init__(self, min_width: int = 500, min_height: int = 300):
        self.min_width = min_width
        self.min_height = min_height
        self.expected = f"at least {min_width}x{min_height} pixels"

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        if not evidence.decodable:
            return self.not_decodable(evidence)

        passed = evidence.width >= self.min_width and evidence.height >= self.min_height
        return self.outcome(passed, f"{evidence.resolution} pixels")


class ImageFormatDetector(BaseDetector):
    """
    Submission is a raster image in an accepted container format.

    A declared non-image media type (e.g., application/pdf) fails even if
    Pillow could decode the payload.
    """

    name = "image_format"

    def __init__(self, allowed_formats: Iterable[str] = ("JPEG", "PNG", "WEBP")):
        self.allowed_formats = frozenset(fmt.upper() for fmt in allowed_formats)
        self.expected = ", ".join(sorted(self.allowed_formats))

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        if evidence.media_type and not evidence.media_type.startswith("image/"):
            return self.outcome(False, f"not an image ({evidence.media_type})")

        if not evidence.decodable or not evidence.image_format:
            return self.not_decodable(evidence)

        image_format = evidence.image_format.upper()
        return self.outcome(image_format in self.allowed_formats, image_format.lower())
