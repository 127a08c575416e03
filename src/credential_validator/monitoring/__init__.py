"""Monitoring and metrics instrumentation for the Credential Validator.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from credential_validator.monitoring.metrics import (
    detector_faults_total,
    stage_failures_total,
    validation_duration_seconds,
    validation_score,
    validations_total,
)

__all__ = [
    "validations_total",
    "validation_score",
    "validation_duration_seconds",
    "stage_failures_total",
    "detector_faults_total",
]
