"""
Classification service: the Classify operation.

Wraps one inference backend handle and a classification signature resolved
once at construction. Each call validates the request, runs the backend
with a single [1, image_data_size] tensor, validates the single score
tensor it gets back and returns the scores.
"""

from typing import Optional, Protocol, runtime_checkable

import numpy as np
import structlog

from box_image_service.backend.base_backend import InferenceBackend
from box_image_service.backend.exceptions import BackendError
from box_image_service.models.messages import ImageRequest, ScoreResponse
from box_image_service.models.shape import ModelShape
from box_image_service.models.signature import ModelMetadata, Signature
from box_image_service.monitoring.metrics import signature_resolution_failures_total
from box_image_service.service.exceptions import (
    BackendExecutionError,
    ContractViolationError,
    InvalidArgumentError,
    SignatureResolutionError,
    SignatureUnavailableError,
)
from box_image_service.service.signature import resolve_classification_signature
from box_image_service.service.tensors import build_input_tensor, describe_shape


logger = structlog.get_logger(__name__)


@runtime_checkable
class Classifier(Protocol):
    """The RPC-facing interface. Transports bind to this, not to a concrete class."""

    async def classify(self, request: ImageRequest) -> ScoreResponse:
        ...


class ClassificationService:
    """
    Classify images with a shared inference backend.

    The service owns the backend handle and shares it, without locking,
    across concurrent calls. Signature resolution happens exactly once:
    a failure does not abort construction but is raised from every
    subsequent ``classify`` call.

    Exit points of ``classify``:
    - InvalidArgumentError: wrong number of samples (backend not called)
    - SignatureUnavailableError: signature did not resolve (backend not called)
    - BackendExecutionError: backend failure, code and message unchanged
    - ContractViolationError: output count, type or shape mismatch
    - ScoreResponse: success
    """

    def __init__(
        self,
        backend: InferenceBackend,
        metadata: ModelMetadata,
        shape: ModelShape,
        signature_key: str = "default",
    ):
        """
        Initialize the service and resolve the classification signature.

        Args:
            backend: Loaded model handle (ownership passes to the service)
            metadata: Metadata of the loaded model
            shape: Image and label dimensions of the model
            signature_key: Signature to serve
        """
        self.backend = backend
        self.shape = shape
        self.signature_key = signature_key
        self.model_name = metadata.name

        self._signature: Optional[Signature] = None
        self._signature_error: Optional[SignatureResolutionError] = None

        try:
            self._signature = resolve_classification_signature(metadata, signature_key)
        except SignatureResolutionError as e:
            self._signature_error = e
            signature_resolution_failures_total.inc()
            logger.error(
                "Classification signature resolution failed; Classify will fail until restart",
                model=metadata.name,
                signature_key=signature_key,
                error=e.message,
            )
        else:
            logger.info(
                "Classification service ready",
                model=metadata.name,
                signature_key=signature_key,
                input_tensor=self._signature.input_tensor,
                scores_tensor=self._signature.scores_tensor,
                image_data_size=shape.image_data_size,
                num_labels=shape.num_labels,
            )

    @property
    def signature(self) -> Optional[Signature]:
        return self._signature

    @property
    def signature_error(self) -> Optional[SignatureResolutionError]:
        return self._signature_error

    @property
    def ready(self) -> bool:
        """True when the signature resolved and calls can reach the backend."""
        return self._signature is not None

    async def classify(self, request: ImageRequest) -> ScoreResponse:
        """
        Classify one image.

        Args:
            request: Flattened image samples

        Returns:
            ScoreResponse with exactly num_labels scores

        Raises:
            ClassificationError: One of the subclasses listed on the class
        """
        expected_size = self.shape.image_data_size
        actual_size = len(request.image_data)
        if actual_size != expected_size:
            raise InvalidArgumentError(
                f"expected image_data of size {expected_size}, got {actual_size}",
                details={"expected_size": expected_size, "actual_size": actual_size},
            )

        if self._signature_error is not None:
            raise SignatureUnavailableError(
                self._signature_error.message,
                details={"signature_key": self.signature_key},
            )

        signature = self._signature
        input_tensor = build_input_tensor(request.image_data, self.shape)

        try:
            outputs = await self.backend.run(
                {signature.input_tensor: input_tensor},
                [signature.scores_tensor],
                target_nodes=[],
            )
        except BackendError as e:
            logger.warning(
                "Backend execution failed",
                model=self.model_name,
                code=e.code_name,
                error=e.message,
            )
            raise BackendExecutionError(e.code, e.message, details=e.details) from e

        return self._build_response(outputs)

    def _build_response(self, outputs: list[np.ndarray]) -> ScoreResponse:
        """Validate backend outputs against the contract and copy out the scores."""
        if len(outputs) != 1:
            raise ContractViolationError(
                f"expected 1 model output, got {len(outputs)}",
                details={"expected_count": 1, "actual_count": len(outputs)},
            )

        score_tensor = np.asarray(outputs[0])
        expected_shape = self.shape.output_shape
        if score_tensor.shape != expected_shape:
            raise ContractViolationError(
                f"expected output of shape {describe_shape(expected_shape)}, "
                f"got {describe_shape(score_tensor.shape)}",
                details={
                    "expected_shape": list(expected_shape),
                    "actual_shape": list(score_tensor.shape),
                },
            )
        if not np.issubdtype(score_tensor.dtype, np.floating):
            raise ContractViolationError(
                f"expected floating-point model output, got {score_tensor.dtype}",
                details={"dtype": str(score_tensor.dtype)},
            )

        return ScoreResponse(scores=score_tensor.ravel().tolist())

    async def aclose(self) -> None:
        """Release the backend handle."""
        await self.backend.aclose()
