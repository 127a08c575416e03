"""
Detector capabilities.

- base.py: BaseDetector capability interface
- registry.py: DetectorRegistry (name -> instance) and the built-in registry
- format_checks.py: aspect ratio, minimum resolution, image format
- structure_checks.py: CURP / elector key format, official headings
- design_checks.py: official colors, layout, print quality, fine detail
- validity_checks.py: expiry, validity period, card model
"""

from credential_validator.detectors.base import BaseDetector
from credential_validator.detectors.registry import (
    DetectorRegistry,
    build_default_detector_registry,
)

__all__ = [
    "BaseDetector",
    "DetectorRegistry",
    "build_default_detector_registry",
]
