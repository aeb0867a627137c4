"""
Custom exceptions for the inference backend layer.

A backend failure is always reported as a status code plus a message. The
classification service forwards both unchanged, so backends must choose
the code themselves rather than leaving interpretation to callers.
"""

from typing import Any

from box_image_service.models.enums import StatusCode


class BackendError(Exception):
    """
    Base exception for all inference backend errors.

    Attributes:
        code: Status code reported by the backend. Usually a StatusCode, but
            any string is accepted and carried through verbatim.
        message: Human-readable description from the backend
        details: Structured data for logging (never shown as the message)
    """
    def __init__(
        self,
        code: StatusCode | str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    @property
    def code_name(self) -> str:
        """Code as a plain string, for logs and metrics labels."""
        if isinstance(self.code, StatusCode):
            return self.code.value
        return str(self.code)


class BackendConnectionError(BackendError):
    """
    Raised when the inference server cannot be reached.

    Includes refused connections, DNS failures and dropped sockets.
    """
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(StatusCode.UNAVAILABLE, message, details)


class BackendTimeoutError(BackendError):
    """Raised when the inference server does not answer within the client timeout."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(StatusCode.DEADLINE_EXCEEDED, message, details)


class BackendProtocolError(BackendError):
    """
    Raised when the inference server answers with something that is not a
    valid protocol response (non-JSON body, missing fields, data that does
    not fit the declared shape).
    """
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(StatusCode.INTERNAL, message, details)
