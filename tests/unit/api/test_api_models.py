"""
Unit tests for API request/response models.
"""

import pytest
from pydantic import ValidationError

from credential_validator.api.models import (
    ErrorResponse,
    ValidateRequest,
    ValidationResponse,
)
from credential_validator.models.results import ValidationReport


class TestValidateRequest:
    def test_minimal(self):
        request = ValidateRequest(image="aGVsbG8=")

        assert request.media_type is None
        assert request.fields == {}

    def test_empty_image_rejected(self):
        with pytest.raises(ValidationError):
            ValidateRequest(image="")

    def test_non_string_field_values_rejected(self):
        with pytest.raises(ValidationError):
            ValidateRequest(image="aGVsbG8=", fields={"curp": ["A", "B"]})


class TestValidationResponse:
    def test_serialization(self):
        response = ValidationResponse(
            status="success",
            report=ValidationReport(is_valid=False, score=0, recommendations=["Retry"]),
            processing_duration_ms=12,
        )

        data = response.model_dump(mode="json")

        assert data["status"] == "success"
        assert data["report"]["score"] == 0
        assert data["report"]["document_type"] == "unknown"
        assert data["created_at"].endswith("Z") or "+00:00" in data["created_at"]

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            ValidationResponse(
                status="success",
                report=ValidationReport(is_valid=False, score=0),
                processing_duration_ms=-1,
            )


def test_error_response_defaults():
    error = ErrorResponse(error="invalid_request", message="Request validation failed")

    assert error.details == {}
    assert error.timestamp is not None
