"""Domain enums used across all layers."""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable ``ApiError.code`` values."""

    BAD_REQUEST = "BAD_REQUEST"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    MODEL_NOT_CONFIGURED = "MODEL_NOT_CONFIGURED"
    BACKEND_TIMEOUT = "BACKEND_TIMEOUT"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"


class UploadStatus(str, Enum):
    """Client-side classification lifecycle."""

    IDLE = "idle"
    CLASSIFYING = "classifying"
    SUCCESS = "success"
    ERROR = "error"
    NOT_CONFIGURED = "not_configured"


class InputSource(str, Enum):
    """Where an image was acquired from."""

    FILE_PICKER = "file_picker"
    DRAG_DROP = "drag_drop"
    PASTE = "paste"
    CAMERA = "camera"


class BackendMode(str, Enum):
    """How the proxy resolves classification requests."""

    HTTP = "http"
    SIMULATED = "simulated"
    UNCONFIGURED = "unconfigured"
