"""
HTTP API routes.

POST /classify is the HTTP rendition of the Classify RPC. GET /health and
GET /signature are operational endpoints for probes and operators.
"""

import time
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from box_image_service.api.dependencies import get_classifier, get_service, get_settings
from box_image_service.api.models import ErrorResponse, HealthResponse, SignatureResponse
from box_image_service.config import Settings
from box_image_service.models.messages import ImageRequest, ScoreResponse
from box_image_service.monitoring.metrics import (
    classify_duration_seconds,
    classify_requests_total,
)
from box_image_service.service.classifier import ClassificationService, Classifier
from box_image_service.service.exceptions import ClassificationError

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/classify",
    response_model=ScoreResponse,
    status_code=status.HTTP_200_OK,
    summary="Classify one image",
    description="""
    Run the box image model on one flattened image and return its scores.

    `image_data` must hold exactly IMAGE_SIZE * IMAGE_SIZE * NUM_CHANNELS
    samples in row-major order. The response holds exactly NUM_LABELS scores
    in the model's label order.
    """,
    responses={
        200: {"description": "Scores computed"},
        400: {"model": ErrorResponse, "description": "Wrong image_data size or malformed body"},
        500: {"model": ErrorResponse, "description": "Signature unresolved, backend failure or bad model output"},
        503: {"model": ErrorResponse, "description": "Backend unavailable"},
    },
)
async def classify(
    request: ImageRequest,
    classifier: Classifier = Depends(get_classifier),
) -> ScoreResponse:
    """
    Classify a single image.

    Args:
        request: ImageRequest with flattened image samples
        classifier: Classification service (injected)

    Returns:
        ScoreResponse with one score per label
    """
    start_time = time.perf_counter()

    try:
        response = await classifier.classify(request)
    except ClassificationError as exc:
        classify_requests_total.labels(transport="http", code=exc.code_name).inc()
        # Re-raise for exception handlers
        raise
    finally:
        classify_duration_seconds.labels(transport="http").observe(
            time.perf_counter() - start_time
        )

    classify_requests_total.labels(transport="http", code="OK").inc()
    logger.debug(
        "Classify completed",
        num_scores=len(response.scores),
        duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )
    return response


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="""
    Check the health of the service and its inference backend.

    - healthy: backend ready and classification signature resolved
    - degraded: signature resolved but backend not ready (calls may fail)
    - unhealthy: signature unresolved or service not initialized
    """,
    responses={
        200: {"description": "Service healthy or degraded"},
        503: {"description": "Service cannot classify"},
    },
)
async def health_check(
    service: Optional[ClassificationService] = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    """
    Check health of the classification service.

    Args:
        service: Classification service, None before startup (injected)
        settings: Application settings (injected)

    Returns:
        HealthResponse with component statuses
    """
    services: dict[str, str] = {}

    if service is None:
        services["backend"] = "not_initialized"
        services["signature"] = "not_initialized"
    else:
        backend_ready = await service.backend.health_check()
        services["backend"] = "ok" if backend_ready else "unreachable"
        services["signature"] = "resolved" if service.ready else "unresolved"

    if services["signature"] != "resolved":
        health_status = "unhealthy"
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif services["backend"] != "ok":
        health_status = "degraded"
        status_code = status.HTTP_200_OK
    else:
        health_status = "healthy"
        status_code = status.HTTP_200_OK

    logger.debug("Health check", status=health_status, services=services)

    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services=services,
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/signature",
    response_model=SignatureResponse,
    summary="Get the resolved classification signature",
    responses={
        503: {"description": "Signature unresolved or service not initialized"},
    },
)
async def get_signature(
    service: Optional[ClassificationService] = Depends(get_service),
) -> SignatureResponse:
    """
    Return the tensor names and dimensions Classify runs with.

    Args:
        service: Classification service (injected)

    Returns:
        SignatureResponse
    """
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Classification service not initialized",
        )
    if service.signature is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=service.signature_error.message,
        )

    shape = service.shape
    return SignatureResponse(
        model_name=service.model_name,
        signature_key=service.signature_key,
        input_tensor=service.signature.input_tensor,
        scores_tensor=service.signature.scores_tensor,
        image_size=shape.image_size,
        num_channels=shape.num_channels,
        num_labels=shape.num_labels,
        image_data_size=shape.image_data_size,
    )
