"""
Identifier redaction.

- redactor.py: Mask CURP / elector key values in detector summaries and logs
  (if REDACT_IDENTIFIERS=true, the default)
"""

from credential_validator.pii.redactor import SENSITIVE_FIELDS, redact_fields, redact_identifier

__all__ = [
    "SENSITIVE_FIELDS",
    "redact_fields",
    "redact_identifier",
]
