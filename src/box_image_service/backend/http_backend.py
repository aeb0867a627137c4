"""
KServe v2 (Open Inference Protocol) backend over HTTP.

Communicates with Triton, KServe or any v2-compatible inference server
using httpx AsyncClient. Supports:
- Tensor inference via POST /v2/models/{model}/infer
- Model metadata via GET /v2/models/{model}
- Readiness via GET /v2/health/ready
- Connection pooling shared by all concurrent requests

The server owns model loading and request batching. This client never
retries: every failure is mapped to a status code and raised.
"""

import time
from typing import Any, Mapping, Optional, Sequence

import httpx
import numpy as np
import structlog

from box_image_service.backend.base_backend import InferenceBackend
from box_image_service.backend.exceptions import (
    BackendConnectionError,
    BackendError,
    BackendProtocolError,
    BackendTimeoutError,
)
from box_image_service.models.enums import SignatureKind, StatusCode
from box_image_service.models.signature import ModelMetadata, SignatureDef, TensorSpec
from box_image_service.monitoring.metrics import backend_latency_seconds


logger = structlog.get_logger(__name__)

# KServe v2 datatype names <-> numpy dtypes
V2_TO_NUMPY: dict[str, np.dtype] = {
    "BOOL": np.dtype(np.bool_),
    "UINT8": np.dtype(np.uint8),
    "UINT16": np.dtype(np.uint16),
    "UINT32": np.dtype(np.uint32),
    "UINT64": np.dtype(np.uint64),
    "INT8": np.dtype(np.int8),
    "INT16": np.dtype(np.int16),
    "INT32": np.dtype(np.int32),
    "INT64": np.dtype(np.int64),
    "FP16": np.dtype(np.float16),
    "FP32": np.dtype(np.float32),
    "FP64": np.dtype(np.float64),
}
NUMPY_TO_V2: dict[np.dtype, str] = {dtype: name for name, dtype in V2_TO_NUMPY.items()}

# HTTP status -> status code reported to the service
HTTP_STATUS_TO_CODE: dict[int, StatusCode] = {
    400: StatusCode.INVALID_ARGUMENT,
    401: StatusCode.UNAUTHENTICATED,
    403: StatusCode.PERMISSION_DENIED,
    404: StatusCode.NOT_FOUND,
    409: StatusCode.ALREADY_EXISTS,
    429: StatusCode.RESOURCE_EXHAUSTED,
    499: StatusCode.CANCELLED,
    500: StatusCode.INTERNAL,
    501: StatusCode.UNIMPLEMENTED,
    503: StatusCode.UNAVAILABLE,
    504: StatusCode.DEADLINE_EXCEEDED,
}


def status_from_http(status_code: int) -> StatusCode:
    """Map an HTTP error status to a status code."""
    if status_code in HTTP_STATUS_TO_CODE:
        return HTTP_STATUS_TO_CODE[status_code]
    if status_code >= 500:
        return StatusCode.INTERNAL
    return StatusCode.UNKNOWN


def encode_tensor(name: str, value: np.ndarray) -> dict[str, Any]:
    """Encode a numpy array as a v2 request input (row-major flattened data)."""
    array = np.asarray(value)
    datatype = NUMPY_TO_V2.get(array.dtype)
    if datatype is None:
        raise BackendError(
            StatusCode.INVALID_ARGUMENT,
            f"unsupported input dtype {array.dtype} for tensor {name}",
            details={"tensor": name, "dtype": str(array.dtype)},
        )
    return {
        "name": name,
        "shape": list(array.shape),
        "datatype": datatype,
        "data": array.ravel().tolist(),
    }


def decode_tensor(output: Mapping[str, Any]) -> np.ndarray:
    """Decode a v2 response output into a numpy array of its declared shape."""
    try:
        name = output["name"]
        shape = [int(dim) for dim in output["shape"]]
        datatype = output["datatype"]
        data = output["data"]
    except (KeyError, TypeError, ValueError) as e:
        raise BackendProtocolError(
            f"malformed output tensor in inference response: {e}",
            details={"output_keys": sorted(output) if isinstance(output, Mapping) else None},
        ) from e

    dtype = V2_TO_NUMPY.get(datatype)
    if dtype is None:
        raise BackendProtocolError(
            f"unsupported output datatype {datatype} for tensor {name}",
            details={"tensor": name, "datatype": datatype},
        )

    try:
        return np.asarray(data, dtype=dtype).reshape(shape)
    except (TypeError, ValueError) as e:
        raise BackendProtocolError(
            f"output tensor {name} data does not fit shape {shape}",
            details={"tensor": name, "shape": shape},
        ) from e


class HttpInferenceBackend(InferenceBackend):
    """
    Inference backend speaking the KServe v2 HTTP/REST protocol.

    API Endpoints:
    - POST /v2/models/{model}[/versions/{version}]/infer: Execute the model
    - GET /v2/models/{model}[/versions/{version}]: Model metadata
    - GET /v2/health/ready: Server readiness

    Signatures:
        v2 metadata has no signature concept, so one classification
        signature is registered under ``signature_key``. Tensor names come
        from ``signature_input_tensor`` / ``signature_scores_tensor`` when
        configured, otherwise from the model's only input / only output.
    """

    def __init__(
        self,
        base_url: str = "http://triton:8000",
        model_name: str = "box_image",
        model_version: Optional[str] = None,
        timeout: float = 30.0,
        max_connections: int = 100,
        signature_key: str = "default",
        signature_input_tensor: Optional[str] = None,
        signature_scores_tensor: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize the v2 backend.

        Args:
            base_url: Inference server URL
            model_name: Model to execute
            model_version: Pinned model version (None = server default)
            timeout: Request timeout in seconds
            max_connections: Connection pool size shared by concurrent calls
            signature_key: Key the classification signature is registered under
            signature_input_tensor: Explicit input tensor name
            signature_scores_tensor: Explicit scores tensor name
            transport: Custom httpx transport (tests use httpx.MockTransport)
            **kwargs: Additional config
        """
        super().__init__(model_name, **kwargs)
        self.base_url = base_url.rstrip("/")
        self.model_version = model_version
        self.timeout = timeout
        self.signature_key = signature_key
        self.signature_input_tensor = signature_input_tensor
        self.signature_scores_tensor = signature_scores_tensor

        self._client: Optional[httpx.AsyncClient] = None
        self._transport = transport
        self._connection_limits = httpx.Limits(
            max_keepalive_connections=max_connections,
            max_connections=max_connections,
            keepalive_expiry=30.0,
        )

        logger.info(
            "HTTP inference backend initialized",
            base_url=self.base_url,
            model_name=model_name,
            model_version=model_version,
            timeout=timeout,
            max_connections=max_connections,
        )

    @property
    def model_path(self) -> str:
        path = f"/v2/models/{self.model_name}"
        if self.model_version:
            path += f"/versions/{self.model_version}"
        return path

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def _request(
        self, method: str, path: str, json: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON body, mapping failures to BackendError."""
        client = await self._get_client()
        try:
            response = await client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            raise BackendTimeoutError(
                f"inference server did not answer within {self.timeout}s",
                details={"path": path, "error_type": type(e).__name__},
            ) from e
        except httpx.TransportError as e:
            raise BackendConnectionError(
                f"inference server unreachable: {e}",
                details={"path": path, "error_type": type(e).__name__},
            ) from e

        if response.is_error:
            raise BackendError(
                status_from_http(response.status_code),
                self._error_message(response),
                details={"path": path, "status": response.status_code},
            )

        try:
            body = response.json()
        except ValueError as e:
            raise BackendProtocolError(
                "inference server returned a non-JSON body",
                details={"path": path, "content_snippet": response.text[:200]},
            ) from e
        if not isinstance(body, dict):
            raise BackendProtocolError(
                "inference server returned a non-object JSON body",
                details={"path": path},
            )
        return body

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract the v2 ``error`` field, falling back to the raw body."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return response.text or f"HTTP {response.status_code}"

    async def run(
        self,
        inputs: Mapping[str, np.ndarray],
        output_names: Sequence[str],
        target_nodes: Sequence[str] = (),
    ) -> list[np.ndarray]:
        """
        Execute the model via POST {model_path}/infer.

        Request:
        {
            "inputs": [{"name": "images", "shape": [1, 22500], "datatype": "FP32", "data": [...]}],
            "outputs": [{"name": "scores"}]
        }

        Response:
        {
            "model_name": "box_image",
            "outputs": [{"name": "scores", "shape": [1, 4], "datatype": "FP32", "data": [...]}]
        }

        Outputs are returned in the order the server lists them.
        """
        if target_nodes:
            raise BackendError(
                StatusCode.UNIMPLEMENTED,
                "target nodes are not supported by the KServe v2 protocol",
                details={"target_nodes": list(target_nodes)},
            )

        payload = {
            "inputs": [encode_tensor(name, value) for name, value in inputs.items()],
            "outputs": [{"name": name} for name in output_names],
        }

        start_time = time.perf_counter()
        success = "false"
        try:
            body = await self._request("POST", f"{self.model_path}/infer", json=payload)
            raw_outputs = body.get("outputs")
            if not isinstance(raw_outputs, list):
                raise BackendProtocolError(
                    "inference response has no outputs list",
                    details={"response_keys": sorted(body)},
                )
            outputs = [decode_tensor(output) for output in raw_outputs]
            success = "true"
            return outputs
        finally:
            backend_latency_seconds.labels(
                model=self.model_name, success=success
            ).observe(time.perf_counter() - start_time)

    async def get_model_metadata(self) -> ModelMetadata:
        """
        Fetch model metadata via GET {model_path}.

        Response:
        {
            "name": "box_image",
            "versions": ["1"],
            "platform": "onnxruntime_onnx",
            "inputs": [{"name": "images", "datatype": "FP32", "shape": [-1, 22500]}],
            "outputs": [{"name": "scores", "datatype": "FP32", "shape": [-1, 4]}]
        }
        """
        body = await self._request("GET", self.model_path)

        try:
            inputs = [
                TensorSpec(name=t["name"], datatype=t.get("datatype", "FP32"), shape=t.get("shape", []))
                for t in body.get("inputs", [])
            ]
            outputs = [
                TensorSpec(name=t["name"], datatype=t.get("datatype", "FP32"), shape=t.get("shape", []))
                for t in body.get("outputs", [])
            ]
            metadata = ModelMetadata(
                name=body.get("name", self.model_name),
                versions=[str(v) for v in body.get("versions", [])],
                platform=body.get("platform"),
                inputs=inputs,
                outputs=outputs,
                signatures=self._build_signatures(inputs, outputs),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise BackendProtocolError(
                f"malformed model metadata: {e}",
                details={"model": self.model_name},
            ) from e

        logger.info(
            "Fetched model metadata",
            model=metadata.name,
            versions=metadata.versions,
            platform=metadata.platform,
            inputs=[t.name for t in inputs],
            outputs=[t.name for t in outputs],
            signatures=list(metadata.signatures),
        )
        return metadata

    def _build_signatures(
        self, inputs: list[TensorSpec], outputs: list[TensorSpec]
    ) -> dict[str, SignatureDef]:
        input_name = self.signature_input_tensor
        if input_name is None and len(inputs) == 1:
            input_name = inputs[0].name
        scores_name = self.signature_scores_tensor
        if scores_name is None and len(outputs) == 1:
            scores_name = outputs[0].name

        if input_name is None and scores_name is None:
            logger.warning(
                "Cannot derive a classification signature from model metadata",
                input_count=len(inputs),
                output_count=len(outputs),
            )
            return {}

        # A missing role is left out so signature resolution can name it
        return {
            self.signature_key: SignatureDef(
                kind=SignatureKind.CLASSIFICATION,
                inputs={"input": input_name} if input_name else {},
                outputs={"scores": scores_name} if scores_name else {},
            )
        }

    async def health_check(self) -> bool:
        """
        Check server readiness via GET /v2/health/ready.

        Returns True if the server responds 200, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get("/v2/health/ready", timeout=5.0)
            response.raise_for_status()
            logger.debug("Inference server health check passed")
            return True
        except httpx.HTTPError as e:
            logger.warning("Inference server health check failed", error=str(e))
            return False

    async def aclose(self) -> None:
        """Close the HTTP client connection pool."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed inference backend connection pool")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"model_name={self.model_name}, "
            f"timeout={self.timeout}s)"
        )
