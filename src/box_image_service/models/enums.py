"""
Enumerations for the Box Image Classification Service.

StatusCode mirrors the canonical RPC status code names so the same value can
be carried from the inference backend through the service to either
transport (gRPC status or HTTP status) without reinterpretation.
"""

from enum import Enum


class StatusCode(str, Enum):
    """
    Canonical RPC status codes.

    Error codes are compared by name, so a backend that reports a plain
    string (e.g. "UNAVAILABLE") matches the corresponding member.
    """

    OK = "OK"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
    FAILED_PRECONDITION = "FAILED_PRECONDITION"
    ABORTED = "ABORTED"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    UNIMPLEMENTED = "UNIMPLEMENTED"
    INTERNAL = "INTERNAL"
    UNAVAILABLE = "UNAVAILABLE"
    DATA_LOSS = "DATA_LOSS"
    UNAUTHENTICATED = "UNAUTHENTICATED"

    @classmethod
    def lookup(cls, code: "StatusCode | str") -> "StatusCode | None":
        """Return the member named by ``code``, or None if it is not canonical."""
        if isinstance(code, cls):
            return code
        try:
            return cls(str(code).upper())
        except ValueError:
            return None


class SignatureKind(str, Enum):
    """Kinds of signatures a model can declare. Only CLASSIFICATION is served."""

    CLASSIFICATION = "classification"
    REGRESSION = "regression"
    PREDICT = "predict"
