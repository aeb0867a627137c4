"""gRPC transport for the Classify RPC."""

from box_image_service.rpc.grpc_server import (
    CLASSIFY_METHOD,
    REQUEST_ID_METADATA_KEY,
    SERVICE_NAME,
    BoxImageClient,
    BoxImageServicer,
    grpc_status_for,
    start_grpc_server,
    stop_grpc_server,
)

__all__ = [
    "CLASSIFY_METHOD",
    "REQUEST_ID_METADATA_KEY",
    "SERVICE_NAME",
    "BoxImageClient",
    "BoxImageServicer",
    "grpc_status_for",
    "start_grpc_server",
    "stop_grpc_server",
]
