"""
Identifier redaction for evidence summaries and logs.

Credential identifiers (CURP, elector key) are personal data. Detector
summaries end up in reports, logs and metrics backends, so identifiers are
masked before they leave the detector unless REDACT_IDENTIFIERS is disabled.
"""

from typing import Mapping

# Evidence fields holding personal identifiers
SENSITIVE_FIELDS = frozenset({"curp", "elector_key", "name"})


def redact_identifier(
    value: str,
    redact_enabled: bool = True,
    visible_prefix: int = 4,
    mask_char: str = "*",
) -> str:
    """
    Mask an identifier, keeping only a short prefix.

    Args:
        value: Identifier to mask
        redact_enabled: Whether redaction is enabled (from config.REDACT_IDENTIFIERS)
        visible_prefix: Number of leading characters left readable
        mask_char: Replacement character

    Returns:
        Masked identifier, or the original value if redaction is disabled

    Examples:
        >>> redact_identifier("GOME800705HDFMLR09")
        'GOME**************'
    """
    if not redact_enabled or not value:
        return value

    # Short values would be fully readable from the prefix alone
    if len(value) <= visible_prefix:
        return mask_char * len(value)

    return value[:visible_prefix] + mask_char * (len(value) - visible_prefix)


def redact_fields(
    fields: Mapping[str, str],
    redact_enabled: bool = True,
    sensitive_fields: frozenset[str] = SENSITIVE_FIELDS,
) -> dict[str, str]:
    """
    Return a copy of extracted evidence fields safe for logging.

    Free text is reduced to its length since it may contain any identifier.
    """
    if not redact_enabled:
        return dict(fields)

    redacted: dict[str, str] = {}
    for key, value in fields.items():
        if key in sensitive_fields:
            redacted[key] = redact_identifier(str(value))
        elif key == "text":
            redacted[key] = f"<{len(str(value))} chars>"
        else:
            redacted[key] = value

    return redacted
