"""
Abstract base class for inference backends.

Defines the interface the classification service uses to execute the
loaded model. This abstraction allows swapping inference servers (Triton,
KServe, an in-process runtime) without changing the service or API layers.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Sequence

import numpy as np
import structlog

from box_image_service.models.signature import ModelMetadata


logger = structlog.get_logger(__name__)


class InferenceBackend(ABC):
    """
    Handle to an already-loaded model.

    Responsibilities:
    - Execute the model graph for named input tensors
    - Report metadata about the loaded model (tensor specs, signatures)
    - Report failures as BackendError with a status code and message

    Does NOT handle:
    - Loading or discovering models (the inference server owns that)
    - Request validation or output contract checks (ClassificationService)
    - Retries of any kind

    Implementations must allow ``run`` to be awaited concurrently from
    many tasks; the service never serializes calls.
    """

    def __init__(self, model_name: str, **kwargs):
        """
        Initialize base backend.

        Args:
            model_name: Name of the model this handle executes
            **kwargs: Additional provider-specific config
        """
        self.model_name = model_name
        self.extra_config = kwargs

        logger.info(
            "Initialized inference backend",
            backend_class=self.__class__.__name__,
            model_name=model_name,
        )

    @abstractmethod
    async def run(
        self,
        inputs: Mapping[str, np.ndarray],
        output_names: Sequence[str],
        target_nodes: Sequence[str] = (),
    ) -> list[np.ndarray]:
        """
        Execute the model graph.

        Args:
            inputs: Backend tensor name -> tensor value
            output_names: Backend tensor names to fetch, in order
            target_nodes: Extra operations to run without fetching output

        Returns:
            The fetched output tensors

        Raises:
            BackendError: The backend failed; carries its status code and message
        """
        pass

    @abstractmethod
    async def get_model_metadata(self) -> ModelMetadata:
        """
        Describe the loaded model.

        Returns:
            ModelMetadata with declared tensors and signatures

        Raises:
            BackendError: Metadata could not be fetched
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the backend is ready to execute the model.

        Returns:
            True if ready, False otherwise

        Note:
            This should NOT raise exceptions - return False on error.
        """
        pass

    async def aclose(self) -> None:
        """
        Release connections and other resources.

        Default implementation does nothing. Subclasses holding persistent
        connections should override.
        """
        logger.debug("Closing inference backend", backend_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model_name={self.model_name})"
