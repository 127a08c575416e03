"""
Unit tests for the Credential Validator.

Test individual components in isolation:
- Data models (evidence decoding, result constraints)
- Detectors (each built-in check with positive/negative cases)
- Stage registry and stage configuration loading
- Stage runner (quorum, timeouts, detector faults, ordering)
- Score aggregation and recommendation synthesis
- Pipeline orchestrator (gating, error reports, isolation)
- Identifier redactor
"""
