"""
FastAPI API routes and endpoints.

- routes.py: POST /validate, GET /stages, GET /health, GET /version
- dependencies.py: Cached singletons (settings, registries, pipeline)
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request ID tracing
"""

from credential_validator.api import dependencies, error_handlers, models
from credential_validator.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
