"""
Detector registry: name -> capability instance.

Stage configuration refers to detectors by name. Names are resolved once, when
the stage registry is built at startup; the pipeline then holds direct
references and never looks detectors up by name while validating.
"""

from datetime import date
from typing import Iterable, Iterator

import structlog

from credential_validator.config import Settings
from credential_validator.detectors.base import BaseDetector
from credential_validator.detectors.design_checks import (
    FineDetailDetector,
    LayoutProportionsDetector,
    OfficialColorsDetector,
    PrintQualityDetector,
)
from credential_validator.detectors.format_checks import (
    AspectRatioDetector,
    ImageFormatDetector,
    MinimumResolutionDetector,
)
from credential_validator.detectors.structure_checks import (
    CurpFormatDetector,
    ElectorKeyFormatDetector,
    OfficialTextDetector,
)
from credential_validator.detectors.validity_checks import (
    CardModelDetector,
    Clock,
    NotExpiredDetector,
    ValidityPeriodDetector,
)
from credential_validator.exceptions import ConfigurationFault

logger = structlog.get_logger(__name__)


class DetectorRegistry:
    """
    Registry of available detector capabilities, keyed by detector name.

    External detectors (microtext, UV ink, hologram...) are added with
    `register()` before the stage registry is built.
    """

    def __init__(self, detectors: Iterable[BaseDetector] = ()):
        self._detectors: dict[str, BaseDetector] = {}
        for detector in detectors:
            self.register(detector)

    def register(self, detector: BaseDetector) -> None:
        """
        Add a detector.

        Raises:
            ConfigurationFault: If the detector has no name or the name is taken
        """
        if not detector.name:
            raise ConfigurationFault(
                f"Detector {detector.__class__.__name__} has no name",
                field="detectors",
            )
        if detector.name in self._detectors:
            raise ConfigurationFault(
                f"Detector '{detector.name}' is already registered",
                field="detectors",
            )
        self._detectors[detector.name] = detector

    def resolve(self, name: str) -> BaseDetector:
        """
        Look up a detector by name.

        Raises:
            ConfigurationFault: If no detector has that name
        """
        try:
            return self._detectors[name]
        except KeyError:
            raise ConfigurationFault(
                f"Unknown detector '{name}' (available: {', '.join(self.names())})",
                field="detectors",
            ) from None

    def names(self) -> list[str]:
        return list(self._detectors)

    def __contains__(self, name: object) -> bool:
        return name in self._detectors

    def __iter__(self) -> Iterator[BaseDetector]:
        return iter(self._detectors.values())

    def __len__(self) -> int:
        return len(self._detectors)


def build_default_detector_registry(
    settings: Settings,
    today: Clock = date.today,
) -> DetectorRegistry:
    """
    Build the registry of built-in deterministic detectors.

    Args:
        settings: Application settings with detector thresholds
        today: Clock used by validity detectors

    Returns:
        DetectorRegistry with every built-in detector
    """
    registry = DetectorRegistry(
        [
            # Format
            AspectRatioDetector(settings.MIN_ASPECT_RATIO, settings.MAX_ASPECT_RATIO),
            MinimumResolutionDetector(settings.MIN_IMAGE_WIDTH, settings.MIN_IMAGE_HEIGHT),
            ImageFormatDetector(settings.ALLOWED_IMAGE_FORMATS),
            # Structure
            CurpFormatDetector(redact=settings.REDACT_IDENTIFIERS),
            ElectorKeyFormatDetector(redact=settings.REDACT_IDENTIFIERS),
            OfficialTextDetector(
                settings.OFFICIAL_TEXT_PATTERNS,
                min_matches=settings.OFFICIAL_TEXT_MIN_MATCHES,
            ),
            # Design
            OfficialColorsDetector(
                sample_size=settings.COLOR_SAMPLE_SIZE,
                dominant_count=settings.DOMINANT_COLOR_COUNT,
            ),
            LayoutProportionsDetector(
                min_ratio=settings.MIN_ASPECT_RATIO,
                max_ratio=settings.MAX_ASPECT_RATIO,
                min_width=settings.MEDIUM_QUALITY_MIN_WIDTH,
                min_height=settings.MEDIUM_QUALITY_MIN_HEIGHT,
            ),
            # Security
            PrintQualityDetector(
                high_min_width=settings.HIGH_QUALITY_MIN_WIDTH,
                high_min_height=settings.HIGH_QUALITY_MIN_HEIGHT,
                medium_min_width=settings.MEDIUM_QUALITY_MIN_WIDTH,
                medium_min_height=settings.MEDIUM_QUALITY_MIN_HEIGHT,
            ),
            FineDetailDetector(
                min_width=settings.HIGH_QUALITY_MIN_WIDTH,
                min_height=settings.HIGH_QUALITY_MIN_HEIGHT,
                min_ratio=settings.MIN_ASPECT_RATIO,
                max_ratio=settings.MAX_ASPECT_RATIO,
            ),
            # Validity
            NotExpiredDetector(today=today),
            ValidityPeriodDetector(settings.MIN_VALIDITY_YEARS, settings.MAX_VALIDITY_YEARS),
            CardModelDetector(settings.VALID_CARD_MODELS),
        ]
    )

    logger.info("Detector registry built", detectors=registry.names())
    return registry
