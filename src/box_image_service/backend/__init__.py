"""
Inference backend abstraction and implementations.

Components:
- InferenceBackend: Abstract base class for model execution handles
- HttpInferenceBackend: KServe v2 / Triton HTTP implementation
- exceptions: Backend errors carrying a status code and message
"""

from box_image_service.backend.base_backend import InferenceBackend
from box_image_service.backend.http_backend import HttpInferenceBackend
from box_image_service.backend.exceptions import (
    BackendConnectionError,
    BackendError,
    BackendProtocolError,
    BackendTimeoutError,
)

__all__ = [
    "InferenceBackend",
    "HttpInferenceBackend",
    "BackendError",
    "BackendConnectionError",
    "BackendProtocolError",
    "BackendTimeoutError",
]
