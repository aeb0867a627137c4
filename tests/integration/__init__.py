"""
Integration tests for the Box Image Classification Service.

Test components together or against real external services:
- HTTP API endpoints (FastAPI TestClient over a stubbed service)
- gRPC transport (real grpc.aio server on an ephemeral port)
- Live inference server (skipped when none is reachable)
"""
