"""
Data models for the Box Image Classification Service.

Exports:
- Messages: ImageRequest, ScoreResponse
- Model context: ModelShape, ModelMetadata, TensorSpec, SignatureDef, Signature
- Enums: StatusCode, SignatureKind
"""

from box_image_service.models.enums import SignatureKind, StatusCode
from box_image_service.models.messages import ImageRequest, ScoreResponse
from box_image_service.models.shape import ModelShape
from box_image_service.models.signature import (
    ModelMetadata,
    Signature,
    SignatureDef,
    TensorSpec,
)

__all__ = [
    "ImageRequest",
    "ScoreResponse",
    "ModelShape",
    "ModelMetadata",
    "Signature",
    "SignatureDef",
    "TensorSpec",
    "SignatureKind",
    "StatusCode",
]
