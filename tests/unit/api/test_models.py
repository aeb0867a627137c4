"""
Unit tests for API response models.
"""

from datetime import datetime

from box_image_service.api.models import ErrorResponse, HealthResponse, SignatureResponse


def test_health_response_timestamp_default():
    response = HealthResponse(
        status="healthy",
        version="0.1.0",
        services={"backend": "ok", "signature": "resolved"},
    )

    assert isinstance(response.timestamp, datetime)
    assert response.timestamp.tzinfo is not None


def test_error_response_serialization():
    response = ErrorResponse(
        error="INVALID_ARGUMENT",
        message="expected image_data of size 22500, got 3",
        details={"expected_size": 22500, "actual_size": 3},
    )

    data = response.model_dump(mode="json")

    assert data["error"] == "INVALID_ARGUMENT"
    assert data["details"]["actual_size"] == 3
    assert isinstance(data["timestamp"], str)


def test_error_response_details_optional():
    response = ErrorResponse(error="INTERNAL", message="boom")

    assert response.details is None


def test_signature_response():
    response = SignatureResponse(
        model_name="box_image",
        signature_key="default",
        input_tensor="images",
        scores_tensor="scores",
        image_size=150,
        num_channels=1,
        num_labels=4,
        image_data_size=22500,
    )

    assert response.model_dump()["image_data_size"] == 22500
