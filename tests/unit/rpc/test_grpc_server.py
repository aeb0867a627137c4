"""
Unit tests for the gRPC status mapping and the BoxImageService messages.
"""

import grpc
import pytest

from box_image_service.models.enums import StatusCode
from box_image_service.rpc import box_image_inference_pb2 as pb2
from box_image_service.rpc import box_image_inference_pb2_grpc as pb2_grpc
from box_image_service.rpc.grpc_server import (
    CLASSIFY_METHOD,
    SERVICE_NAME,
    BoxImageServicer,
    grpc_status_for,
)


@pytest.mark.parametrize("code", [code for code in StatusCode if code is not StatusCode.OK])
def test_every_error_code_has_grpc_status(code):
    assert grpc_status_for(code).name == code.name


@pytest.mark.parametrize(
    "code, expected",
    [
        ("resource_exhausted", grpc.StatusCode.RESOURCE_EXHAUSTED),
        ("backend-unavailable", grpc.StatusCode.UNKNOWN),
        (StatusCode.OK, grpc.StatusCode.UNKNOWN),
    ],
)
def test_grpc_status_for_strings(code, expected):
    assert grpc_status_for(code) == expected


def test_method_path():
    assert SERVICE_NAME == "tensorflow.serving.BoxImageService"
    assert CLASSIFY_METHOD == "/tensorflow.serving.BoxImageService/Classify"


def test_servicer_implements_generated_service(make_service):
    servicer = BoxImageServicer(make_service())

    assert isinstance(servicer, pb2_grpc.BoxImageServiceServicer)


def test_request_samples_are_packed_floats():
    data = pb2.BoxImageRequest(image_data=[1.0, 0.5]).SerializeToString()

    # field 1, length-delimited, two little-endian float32 values
    assert data == b"\x0a\x08\x00\x00\x80\x3f\x00\x00\x00\x3f"


def test_response_scores_field():
    reply = pb2.BoxImageResponse.FromString(
        pb2.BoxImageResponse(value=[0.25, 0.75]).SerializeToString()
    )

    assert list(reply.value) == [0.25, 0.75]
