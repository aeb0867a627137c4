"""
FastAPI dependency injection for the classification service.

The ClassificationService is built once at startup (it needs the backend's
model metadata) and stored on ``app.state``. Routes receive it through the
dependencies below, which tests override with stubbed services.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from box_image_service.backend.base_backend import InferenceBackend
from box_image_service.backend.http_backend import HttpInferenceBackend
from box_image_service.config import Settings, settings
from box_image_service.models.shape import ModelShape
from box_image_service.service.classifier import ClassificationService, Classifier


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


def build_backend(settings: Settings) -> HttpInferenceBackend:
    """
    Create the inference backend handle from settings.

    Args:
        settings: Application settings

    Returns:
        HttpInferenceBackend instance (connections open lazily)
    """
    return HttpInferenceBackend(
        base_url=settings.BACKEND_URL,
        model_name=settings.MODEL_NAME,
        model_version=settings.MODEL_VERSION,
        timeout=settings.BACKEND_TIMEOUT,
        max_connections=settings.BACKEND_MAX_CONNECTIONS,
        signature_key=settings.SIGNATURE_KEY,
        signature_input_tensor=settings.SIGNATURE_INPUT_TENSOR,
        signature_scores_tensor=settings.SIGNATURE_SCORES_TENSOR,
    )


async def create_classification_service(
    settings: Settings,
    backend: Optional[InferenceBackend] = None,
) -> ClassificationService:
    """
    Fetch model metadata and build the classification service.

    A signature that does not resolve is NOT an error here (the service
    reports it per call). Failing to fetch metadata at all is: the
    BackendError propagates and startup aborts.

    Args:
        settings: Application settings
        backend: Backend handle to use (default: built from settings)

    Returns:
        ClassificationService owning the backend
    """
    backend = backend or build_backend(settings)
    metadata = await backend.get_model_metadata()
    return ClassificationService(
        backend=backend,
        metadata=metadata,
        shape=ModelShape.from_settings(settings),
        signature_key=settings.SIGNATURE_KEY,
    )


def get_service(request: Request) -> Optional[ClassificationService]:
    """
    Get the service built at startup, or None before startup completes.

    Args:
        request: FastAPI request

    Returns:
        ClassificationService or None
    """
    return getattr(request.app.state, "classification_service", None)


def get_classifier(
    service: Optional[ClassificationService] = Depends(get_service),
) -> Classifier:
    """
    Get the classifier for Classify routes.

    Raises:
        HTTPException: 503 if the service has not been initialized
    """
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Classification service not initialized",
        )
    return service
