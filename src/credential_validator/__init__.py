"""
Credential Validator.

Scores an identity credential image (Mexican voter credential by default)
through an ordered pipeline of weighted validation stages:
- Stage quorum over independent detector checks
- Gating stages that stop the run on failure
- Weighted 0-100 score and per-stage recommendations

Architecture: FastAPI service + async stage runner + pluggable detectors
"""

__version__ = "0.1.0"
