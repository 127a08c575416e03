"""Custom Prometheus metrics for the Credential Validator.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- validations_total{verdict="error"} (internal faults degrading reports)
- detector_faults_total (a detector erroring or timing out repeatedly)
- stage_failures_total (drift in a stage's failure rate)
"""

from prometheus_client import Counter, Histogram

# === Verdict Metrics ===

validations_total = Counter(
    "validations_total",
    "Total validation runs by verdict",
    ["verdict"],
)
"""
Validation runs counter by verdict.

Labels:
- verdict: valid, invalid (below threshold), gated (gating stage failed), error (internal fault)

Alert thresholds:
- WARN: error rate > 1% of total runs
"""

validation_score = Histogram(
    "validation_score",
    "Distribution of validation scores (0-100)",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

validation_duration_seconds = Histogram(
    "validation_duration_seconds",
    "Wall-clock duration of a full validation run in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# === Stage Metrics ===

stage_failures_total = Counter(
    "stage_failures_total",
    "Total failed stages by stage id",
    ["stage"],
)
"""
Failed stages counter.

Labels:
- stage: stage id from the stage registry (format, structure, design, ...)

A sudden rise for a single stage usually points at a capture problem
(blurred uploads) or at a detector regression rather than at fraud.
"""

# === Detector Metrics ===

detector_faults_total = Counter(
    "detector_faults_total",
    "Detector invocations recorded as failed checks because of a fault",
    ["detector", "fault"],
)
"""
Detector faults counter.

Labels:
- detector: detector name
- fault: error (raised or returned garbage), timeout (exceeded its time budget)

Alert thresholds:
- WARN: any sustained timeout rate (detector backend degraded)
"""
