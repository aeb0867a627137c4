"""
Unit tests for API exception handlers.
"""

import json
from unittest.mock import MagicMock

import pytest

from box_image_service.api.error_handlers import (
    classification_error_handler,
    generic_error_handler,
    http_status_for,
)
from box_image_service.models.enums import StatusCode
from box_image_service.service.exceptions import (
    BackendExecutionError,
    InvalidArgumentError,
)


@pytest.mark.parametrize(
    "code, expected",
    [
        (StatusCode.INVALID_ARGUMENT, 400),
        (StatusCode.FAILED_PRECONDITION, 400),
        (StatusCode.NOT_FOUND, 404),
        (StatusCode.RESOURCE_EXHAUSTED, 429),
        (StatusCode.UNIMPLEMENTED, 501),
        (StatusCode.UNAVAILABLE, 503),
        (StatusCode.DEADLINE_EXCEEDED, 504),
        (StatusCode.INTERNAL, 500),
        (StatusCode.UNKNOWN, 500),
        (StatusCode.DATA_LOSS, 500),
        ("unavailable", 503),
        ("backend-unavailable", 500),
    ],
)
def test_http_status_for(code, expected):
    assert http_status_for(code) == expected


@pytest.mark.asyncio
async def test_classification_error_body():
    exc = InvalidArgumentError(
        "expected image_data of size 4, got 3",
        details={"expected_size": 4, "actual_size": 3},
    )

    response = await classification_error_handler(MagicMock(), exc)

    assert response.status_code == 400
    body = json.loads(response.body)
    assert body["error"] == "INVALID_ARGUMENT"
    assert body["message"] == "expected image_data of size 4, got 3"
    assert body["details"] == {"expected_size": 4, "actual_size": 3}
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_non_canonical_code_kept_in_body():
    exc = BackendExecutionError("backend-unavailable", "model not loaded")

    response = await classification_error_handler(MagicMock(), exc)

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["error"] == "backend-unavailable"
    assert body["message"] == "model not loaded"
    assert body["details"] is None


@pytest.mark.asyncio
async def test_generic_error_hides_message():
    response = await generic_error_handler(MagicMock(), RuntimeError("secret internals"))

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["error"] == "internal_error"
    assert "secret" not in body["message"]
