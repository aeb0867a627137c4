"""
gRPC transport for the Classify RPC.

Serves ``tensorflow.serving.BoxImageService/Classify`` on a grpc.aio server
using the messages generated from ``box_image_inference.proto``:

    BoxImageRequest  { repeated float image_data = 1; }
    BoxImageResponse { repeated float value = 1; }

A ClassificationError aborts the call with the gRPC status of the same
name and the error message unchanged.
"""

import time
import uuid
from typing import Optional

import grpc
import structlog

from box_image_service.models.enums import StatusCode
from box_image_service.models.messages import ImageRequest, ScoreResponse
from box_image_service.monitoring.metrics import (
    classify_duration_seconds,
    classify_requests_total,
)
from box_image_service.rpc import box_image_inference_pb2 as pb2
from box_image_service.rpc import box_image_inference_pb2_grpc as pb2_grpc
from box_image_service.service.classifier import Classifier
from box_image_service.service.exceptions import ClassificationError

logger = structlog.get_logger(__name__)

SERVICE_NAME = pb2.DESCRIPTOR.services_by_name["BoxImageService"].full_name
CLASSIFY_METHOD = f"/{SERVICE_NAME}/Classify"
REQUEST_ID_METADATA_KEY = "x-request-id"


def grpc_status_for(code: StatusCode | str) -> grpc.StatusCode:
    """gRPC status with the same canonical name, UNKNOWN when there is none."""
    member = StatusCode.lookup(code)
    if member is None or member is StatusCode.OK:
        return grpc.StatusCode.UNKNOWN
    return grpc.StatusCode[member.name]


class BoxImageServicer(pb2_grpc.BoxImageServiceServicer):
    """Binds the Classify RPC to a Classifier."""

    def __init__(self, classifier: Classifier):
        self.classifier = classifier

    async def Classify(  # noqa: N802
        self, request: pb2.BoxImageRequest, context: grpc.aio.ServicerContext
    ) -> pb2.BoxImageResponse:
        metadata = dict(context.invocation_metadata() or ())
        structlog.contextvars.bind_contextvars(
            request_id=metadata.get(REQUEST_ID_METADATA_KEY) or str(uuid.uuid4()),
            transport="grpc",
            method=CLASSIFY_METHOD,
        )
        try:
            return await self._classify(request, context)
        finally:
            structlog.contextvars.clear_contextvars()

    async def _classify(
        self, request: pb2.BoxImageRequest, context: grpc.aio.ServicerContext
    ) -> pb2.BoxImageResponse:
        start_time = time.perf_counter()
        try:
            response = await self.classifier.classify(
                ImageRequest(image_data=list(request.image_data))
            )
        except ClassificationError as exc:
            classify_requests_total.labels(transport="grpc", code=exc.code_name).inc()
            logger.warning(
                "Classify failed",
                error_type=type(exc).__name__,
                code=exc.code_name,
                error=exc.message,
            )
            await context.abort(grpc_status_for(exc.code), exc.message)
        finally:
            classify_duration_seconds.labels(transport="grpc").observe(
                time.perf_counter() - start_time
            )

        classify_requests_total.labels(transport="grpc", code="OK").inc()
        return pb2.BoxImageResponse(value=response.scores)


async def start_grpc_server(
    classifier: Classifier,
    port: int,
    host: str = "0.0.0.0",
    max_concurrent_rpcs: Optional[int] = None,
) -> tuple[grpc.aio.Server, int]:
    """
    Start serving Classify over gRPC.

    Args:
        classifier: Service that handles each call
        port: Port to bind (0 picks a free port)
        host: Interface to bind
        max_concurrent_rpcs: Reject calls beyond this many in flight

    Returns:
        (server, bound port)
    """
    server = grpc.aio.server(maximum_concurrent_rpcs=max_concurrent_rpcs)
    pb2_grpc.add_BoxImageServiceServicer_to_server(BoxImageServicer(classifier), server)
    bound_port = server.add_insecure_port(f"{host}:{port}")
    await server.start()

    logger.info("gRPC server started", host=host, port=bound_port, service=SERVICE_NAME)
    return server, bound_port


async def stop_grpc_server(server: grpc.aio.Server, grace: Optional[float] = None) -> None:
    """Stop accepting calls, letting in-flight calls finish within ``grace`` seconds."""
    await server.stop(grace)
    logger.info("gRPC server stopped")


class BoxImageClient:
    """
    Async client for the gRPC Classify RPC.

    Usage:
        async with BoxImageClient("localhost:9000") as client:
            response = await client.classify(ImageRequest(image_data=[...]))
    """

    def __init__(self, target: str, timeout: Optional[float] = None):
        self.target = target
        self.timeout = timeout
        self._channel = grpc.aio.insecure_channel(target)
        self._stub = pb2_grpc.BoxImageServiceStub(self._channel)

    async def classify(self, request: ImageRequest) -> ScoreResponse:
        """
        Call Classify.

        Raises:
            grpc.aio.AioRpcError: Server aborted the call
        """
        reply = await self._stub.Classify(
            pb2.BoxImageRequest(image_data=request.image_data), timeout=self.timeout
        )
        return ScoreResponse(scores=list(reply.value))

    async def aclose(self) -> None:
        await self._channel.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
