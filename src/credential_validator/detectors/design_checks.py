"""
Design and print detectors working on decoded pixels.

Pixel work runs in a worker thread so it never blocks the event loop while
other detectors of the same stage are in flight.
"""

import asyncio

from credential_validator.detectors.base import BaseDetector
from credential_validator.models.evidence import DocumentEvidence
from credential_validator.models.results import CheckOutcome

RGB = tuple[int, int, int]


class OfficialColorsDetector(BaseDetector):
    """
    The card background shows the official blue tones.

    Samples the top-left square, ranks colors by frequency (ties broken by
    color value so the ranking is deterministic) and passes when any of the
    dominant colors is blue-dominant.
    """

    name = "official_colors"
    expected = "official blue tones"

    def __init__(self, sample_size: int = 50, dominant_count: int = 3):
        self.sample_size = sample_size
        self.dominant_count = dominant_count

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        if not evidence.decodable:
            return self.not_decodable(evidence)

        dominant = await asyncio.to_thread(self.dominant_colors, evidence)
        has_blue_tones = any(b > r and b > g for r, g, b in dominant)

        return self.outcome(
            has_blue_tones,
            ", ".join(f"{r},{g},{b}" for r, g, b in dominant),
        )

    def dominant_colors(self, evidence: DocumentEvidence) -> list[RGB]:
        with evidence.open_image() as image:
            width = min(self.sample_size, image.width)
            height = min(self.sample_size, image.height)
            sample = image.convert("RGB").crop((0, 0, width, height))

        colors = sample.getcolors(maxcolors=width * height) or []
        ranked = sorted(colors, key=lambda item: (-item[0], item[1]))
        return [color for _, color in ranked[: self.dominant_count]]


class LayoutProportionsDetector(BaseDetector):
    """Proportions and resolution consistent with the official card layout."""

    name = "layout_proportions"
    expected = "standard credential layout"

    def __init__(
        self,
        min_ratio: float = 1.5,
        max_ratio: float = 1.7,
        min_width: int = 600,
        min_height: int = 400,
    ):
        self.min_ratio = min_ratio
        self.max_ratio = max_ratio
        self.min_width = min_width
        self.min_height = min_height

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        ratio = evidence.aspect_ratio
        if not evidence.decodable or ratio is None:
            return self.not_decodable(evidence)

        in_proportion = self.min_ratio <= ratio <= self.max_ratio
        legible = evidence.width >= self.min_width and evidence.height >= self.min_height
        if in_proportion and legible:
            return self.outcome(True, "standard")
        return self.outcome(False, "unusual")


class PrintQualityDetector(BaseDetector):
    """
    Capture resolution good enough to judge print texture.

    high and medium pass, low fails.
    """

    name = "print_quality"
    expected = "high print quality"

    def __init__(
        self,
        high_min_width: int = 1000,
        high_min_height: int = 600,
        medium_min_width: int = 600,
        medium_min_height: int = 400,
    ):
        self.high_min_width = high_min_width
        self.high_min_height = high_min_height
        self.medium_min_width = medium_min_width
        self.medium_min_height = medium_min_height

    def quality_level(self, width: int, height: int) -> str:
        if width >= self.high_min_width and height >= self.high_min_height:
            return "high"
        if width >= self.medium_min_width and height >= self.medium_min_height:
            return "medium"
        return "low"

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        if not evidence.decodable:
            return self.not_decodable(evidence)

        level = self.quality_level(evidence.width, evidence.height)
        return self.outcome(level != "low", f"{level} ({evidence.resolution})")


class FineDetailDetector(BaseDetector):
    """
    Fine security printing (guilloche, relief) is only resolvable at high
    resolution on a correctly proportioned capture.
    """

    name = "fine_detail"
    expected = "resolvable fine security printing"

    def __init__(
        self,
        min_width: int = 1000,
        min_height: int = 600,
        min_ratio: float = 1.5,
        max_ratio: float = 1.7,
    ):
        self.min_width = min_width
        self.min_height = min_height
        self.min_ratio = min_ratio
        self.max_ratio = max_ratio

    async def detect(self, evidence: DocumentEvidence) -> CheckOutcome:
        ratio = evidence.aspect_ratio
        if not evidence.decodable or ratio is None:
            return self.not_decodable(evidence)

        resolvable = (
            evidence.width >= self.min_width
            and evidence.height >= self.min_height
            and self.min_ratio <= ratio <= self.max_ratio
        )
        return self.outcome(resolvable, "detected" if resolvable else "not resolvable")
