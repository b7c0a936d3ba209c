"""Domain layer — enums, value objects, and custom exceptions."""

from cattle_vision.domain.enums import BackendMode, ErrorCode, InputSource, UploadStatus
from cattle_vision.domain.errors import (
    BackendNotConfiguredError,
    BackendTimeoutError,
    BackendUnavailableError,
    ClassificationError,
    ConfigurationError,
    PayloadTooLargeError,
    TransportError,
    ValidationError,
)

__all__ = [
    "BackendMode",
    "BackendNotConfiguredError",
    "BackendTimeoutError",
    "BackendUnavailableError",
    "ClassificationError",
    "ConfigurationError",
    "ErrorCode",
    "InputSource",
    "PayloadTooLargeError",
    "TransportError",
    "UploadStatus",
    "ValidationError",
]
