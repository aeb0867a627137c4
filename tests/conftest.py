"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
Model dimensions are shrunk to a 2x2 grayscale image and 4 labels so that
image_data_size == num_labels == 4, which keeps payloads readable. The
``wide_shape`` fixture (3x3, 4 labels) keeps the two sizes apart.
"""

import asyncio
from typing import Callable, Mapping, Optional, Sequence, Union

import numpy as np
import pytest

from box_image_service.backend.base_backend import InferenceBackend
from box_image_service.backend.exceptions import BackendError
from box_image_service.config import Settings
from box_image_service.models.enums import SignatureKind
from box_image_service.models.messages import ImageRequest
from box_image_service.models.shape import ModelShape
from box_image_service.models.signature import ModelMetadata, SignatureDef, TensorSpec
from box_image_service.service.classifier import ClassificationService

DEFAULT_SCORES = [0.125, 0.25, 0.5, 0.125]

Outputs = Union[list, Callable[[Mapping[str, np.ndarray]], list]]


class StubBackend(InferenceBackend):
    """In-memory backend that records calls and returns canned outputs.

    ``outputs`` may be a list of arrays or a callable receiving the inputs
    mapping. ``error`` is raised from ``run`` instead of returning.
    """

    def __init__(
        self,
        outputs: Optional[Outputs] = None,
        error: Optional[BackendError] = None,
        metadata: Optional[ModelMetadata] = None,
        metadata_error: Optional[BackendError] = None,
        healthy: bool = True,
        delay: float = 0.0,
    ):
        super().__init__("box_image")
        if outputs is None:
            outputs = [np.array([DEFAULT_SCORES], dtype=np.float64)]
        self.outputs = outputs
        self.error = error
        self.metadata = metadata
        self.metadata_error = metadata_error
        self.healthy = healthy
        self.delay = delay
        self.calls: list[tuple[dict, list, list]] = []
        self.closed = False

    async def run(
        self,
        inputs: Mapping[str, np.ndarray],
        output_names: Sequence[str],
        target_nodes: Sequence[str] = (),
    ) -> list[np.ndarray]:
        self.calls.append((dict(inputs), list(output_names), list(target_nodes)))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if callable(self.outputs):
            return self.outputs(inputs)
        return self.outputs

    async def get_model_metadata(self) -> ModelMetadata:
        if self.metadata_error is not None:
            raise self.metadata_error
        return self.metadata

    async def health_check(self) -> bool:
        return self.healthy

    async def aclose(self) -> None:
        self.closed = True


def echo_scores(inputs: Mapping[str, np.ndarray]) -> list[np.ndarray]:
    """Return the input image as the scores (valid while image_data_size == num_labels)."""
    (tensor,) = inputs.values()
    return [np.asarray(tensor, dtype=np.float64).reshape(1, -1)]


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.BACKEND_URL = "http://custom:8000"
    """
    return Settings(
        # === Application ===
        APP_NAME="Box Image Classification Service (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Model Shape ===
        IMAGE_SIZE=2,
        NUM_CHANNELS=1,
        NUM_LABELS=4,

        # === Inference Backend ===
        BACKEND_URL="http://backend.test:8000",
        MODEL_NAME="box_image",
        BACKEND_TIMEOUT=5.0,

        # === Transport ===
        GRPC_ENABLED=False,  # Tests start gRPC explicitly on an ephemeral port
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def model_shape() -> ModelShape:
    """2x2 grayscale images, 4 labels."""
    return ModelShape(image_size=2, num_channels=1, num_labels=4)


@pytest.fixture
def wide_shape() -> ModelShape:
    """3x3 grayscale images, 4 labels: 9 samples in, 4 scores out."""
    return ModelShape(image_size=3, num_channels=1, num_labels=4)


@pytest.fixture
def model_metadata() -> ModelMetadata:
    """Metadata declaring a valid "default" classification signature."""
    return ModelMetadata(
        name="box_image",
        versions=["1"],
        platform="onnxruntime_onnx",
        inputs=[TensorSpec(name="images", shape=[-1, 4])],
        outputs=[TensorSpec(name="scores", shape=[-1, 4])],
        signatures={
            "default": SignatureDef(
                kind=SignatureKind.CLASSIFICATION,
                inputs={"input": "images"},
                outputs={"scores": "scores"},
            )
        },
    )


@pytest.fixture
def unresolvable_metadata() -> ModelMetadata:
    """Metadata without any signature."""
    return ModelMetadata(name="box_image")


@pytest.fixture
def image_request() -> ImageRequest:
    """Valid request for the 2x2 test shape."""
    return ImageRequest(image_data=[0.0, 0.25, 0.5, 1.0])


@pytest.fixture
def stub_backend() -> StubBackend:
    """Backend returning DEFAULT_SCORES as a [1, 4] float64 tensor."""
    return StubBackend()


@pytest.fixture
def make_service(model_metadata, model_shape):
    """Factory for ClassificationService over a StubBackend.

    Usage:
        service = make_service(backend=StubBackend(error=...))
        service = make_service(metadata=ModelMetadata(name="m"))
        service = make_service(shape=ModelShape(image_size=3, num_channels=1, num_labels=4))
    """

    def _make(
        backend: Optional[InferenceBackend] = None,
        metadata: Optional[ModelMetadata] = None,
        signature_key: str = "default",
        shape: Optional[ModelShape] = None,
    ) -> ClassificationService:
        return ClassificationService(
            backend=backend or StubBackend(),
            metadata=metadata or model_metadata,
            shape=shape or model_shape,
            signature_key=signature_key,
        )

    return _make


@pytest.fixture
def stub_backend_cls() -> type[StubBackend]:
    """The StubBackend class, for tests that configure their own stub."""
    return StubBackend


@pytest.fixture
def echo_backend() -> StubBackend:
    """Backend that echoes each input image back as the scores."""
    return StubBackend(outputs=echo_scores)
