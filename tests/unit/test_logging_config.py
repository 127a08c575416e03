"""Unit tests for logging processors."""

from credential_validator import __version__
from credential_validator.logging_config import add_app_context, build_identifier_masker


def test_app_context_added():
    event = add_app_context(None, "info", {"event": "x"})

    assert event["app"] == "credential-validator"
    assert event["version"] == __version__


def test_identifiers_masked():
    mask = build_identifier_masker(redact_enabled=True)

    event = mask(None, "info", {"event": "x", "curp": "GOME800705HDFMLR09", "stage": "structure"})

    assert event["curp"] == "GOME**************"
    assert event["stage"] == "structure"


def test_non_string_values_left_alone():
    mask = build_identifier_masker(redact_enabled=True)

    event = mask(None, "info", {"event": "x", "name": None})

    assert event["name"] is None


def test_masking_disabled():
    mask = build_identifier_masker(redact_enabled=False)

    event = mask(None, "info", {"event": "x", "elector_key": "GMMR8007050900H1"})

    assert event["elector_key"] == "GMMR8007050900H1"
