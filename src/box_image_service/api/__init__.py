"""
FastAPI API routes and endpoints.

- routes.py: POST /classify, GET /health, GET /signature
- dependencies.py: Service construction and injection
- models.py: API-specific response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request ID tracing
"""

from box_image_service.api import dependencies, error_handlers, models
from box_image_service.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
