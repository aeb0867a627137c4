"""
Service-level exceptions for the Classify operation.

Every failure of a Classify call is raised as a ClassificationError carrying
a status code and message. The transports translate the code (HTTP status
or gRPC status) and pass the message through untouched.

Taxonomy:
- InvalidArgumentError: request does not match the configured image size
- SignatureUnavailableError: the model signature could not be resolved at startup
- BackendExecutionError: the backend failed; its own code and message are kept
- ContractViolationError: the backend returned outputs of the wrong count/type/shape
"""

from typing import Any

from box_image_service.models.enums import StatusCode


class ClassificationError(Exception):
    """
    Base exception for all Classify failures.

    Attributes:
        code: Status code returned to the caller
        message: Human-readable error description returned to the caller
        details: Structured error data for logging/metrics
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
        """Code as a plain string, for metrics labels and response bodies."""
        if isinstance(self.code, StatusCode):
            return self.code.value
        return str(self.code)


class InvalidArgumentError(ClassificationError):
    """Request rejected before reaching the backend."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(StatusCode.INVALID_ARGUMENT, message, details)


class SignatureUnavailableError(ClassificationError):
    """
    The classification signature failed to resolve when the service was built.

    Raised identically on every call until the process restarts with a
    valid model.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(StatusCode.INTERNAL, message, details)


class BackendExecutionError(ClassificationError):
    """
    The inference backend reported a failure.

    The backend's code and message are carried verbatim; the service does
    not reinterpret them.
    """
    pass


class ContractViolationError(ClassificationError):
    """
    The backend returned outputs that break the model contract.

    Raised when the output count is not exactly one, or the score tensor
    is not a floating-point tensor of shape [1, num_labels]. Treated as a
    model/backend misconfiguration.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(StatusCode.INTERNAL, message, details)


class SignatureResolutionError(Exception):
    """
    Raised by signature resolution when model metadata has no usable
    classification signature.

    Construction-time only: ClassificationService stores it and surfaces
    it as SignatureUnavailableError on each call.
    """

    def __init__(self, message: str, signature_key: str | None = None):
        super().__init__(message)
        self.message = message
        self.signature_key = signature_key
