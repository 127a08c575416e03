"""
Integration tests for the Credential Validator.

Test components together:
- Default pipeline (built-in detectors on generated images, marked integration)
- API endpoints (FastAPI TestClient)
"""
