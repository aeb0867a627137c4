"""
Box Image Classification Service.

Exposes a trained image classifier over HTTP and gRPC:
- Accepts a fixed-size image payload (flattened float samples)
- Forwards it to a remote inference backend (KServe v2 protocol)
- Returns one score per class, validated against the model contract

Architecture: FastAPI + grpc.aio front ends over a shared ClassificationService
"""

__version__ = "0.1.0"
