"""Domain-specific exceptions for clean error handling."""


class ConfigurationError(RuntimeError):
    """Raised when runtime configuration is invalid or missing."""


class BackendNotConfiguredError(ConfigurationError):
    """Raised when a real inference backend is required but none is set."""


class BackendUnavailableError(RuntimeError):
    """Raised when the inference backend cannot be reached."""


class BackendTimeoutError(BackendUnavailableError):
    """Raised when the inference backend does not answer in time."""


class ClassificationError(RuntimeError):
    """Raised when a classification pipeline step fails."""


class TransportError(RuntimeError):
    """Raised by client transports on network-level failures."""


class ValidationError(ValueError):
    """Raised when domain-level validation fails."""


class PayloadTooLargeError(ValidationError):
    """Raised when a request body exceeds the configured limit."""
