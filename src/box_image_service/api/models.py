"""
API-specific response models for FastAPI endpoints.

The Classify request/response bodies are the transport-neutral messages in
box_image_service.models.messages; these models cover the operational
endpoints and error bodies.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded", "unhealthy"]
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"]
    )
    services: dict[str, str] = Field(
        description="Component-specific health status",
        examples=[{"backend": "ok", "signature": "resolved"}]
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)"
    )


class SignatureResponse(BaseModel):
    """Resolved classification signature and the model dimensions served."""

    model_name: str = Field(description="Model executed by the backend")
    signature_key: str = Field(description="Key the signature was resolved from")
    input_tensor: str = Field(description="Backend tensor bound to the image input")
    scores_tensor: str = Field(description="Backend tensor holding the scores")
    image_size: int = Field(description="Pixels per image side")
    num_channels: int = Field(description="Channels per pixel")
    num_labels: int = Field(description="Number of scores returned")
    image_data_size: int = Field(description="Required length of image_data")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Status code name or error type",
        examples=["INVALID_ARGUMENT", "INTERNAL", "UNAVAILABLE", "invalid_request"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[Any] = Field(
        default=None,
        description="Additional error details (e.g., expected vs actual sizes)"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Error timestamp (UTC)"
    )
