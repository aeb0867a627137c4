"""
Classification service layer.

Components:
- ClassificationService: Implements Classify over an InferenceBackend
- Classifier: Protocol the transports bind to
- resolve_classification_signature: Construction-time signature lookup
- exceptions: ClassificationError taxonomy returned to callers
"""

from box_image_service.service.classifier import ClassificationService, Classifier
from box_image_service.service.exceptions import (
    BackendExecutionError,
    ClassificationError,
    ContractViolationError,
    InvalidArgumentError,
    SignatureResolutionError,
    SignatureUnavailableError,
)
from box_image_service.service.signature import resolve_classification_signature

__all__ = [
    "ClassificationService",
    "Classifier",
    "resolve_classification_signature",
    "ClassificationError",
    "InvalidArgumentError",
    "SignatureUnavailableError",
    "BackendExecutionError",
    "ContractViolationError",
    "SignatureResolutionError",
]
