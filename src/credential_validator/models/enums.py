"""
Enumerations for Credential Validator data models.
"""

from enum import Enum


class DocumentType(str, Enum):
    """
    Coarse classification of the submitted document, derived from the format stage.

    - POTENTIAL_CREDENTIAL: decodable image shaped like the target credential
    - OTHER_IMAGE: decodable image that failed the format stage
    - OTHER_DOCUMENT: not a decodable image at all
    - UNKNOWN: no stage produced a usable signal (internal error)
    """

    POTENTIAL_CREDENTIAL = "potential_credential"
    OTHER_IMAGE = "other_image"
    OTHER_DOCUMENT = "other_document"
    UNKNOWN = "unknown"


class Verdict(str, Enum):
    """Outcome label of a validation run, used for metrics and logs."""

    VALID = "valid"
    INVALID = "invalid"
    GATED = "gated"
    ERROR = "error"
