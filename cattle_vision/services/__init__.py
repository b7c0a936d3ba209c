"""Services package — inference backends."""

from cattle_vision.services.inference_backend import (
    BackendReply,
    HttpInferenceBackend,
    InferenceBackend,
    SimulatedInferenceBackend,
    UnconfiguredInferenceBackend,
    build_inference_backend,
)

__all__ = [
    "BackendReply",
    "HttpInferenceBackend",
    "InferenceBackend",
    "SimulatedInferenceBackend",
    "UnconfiguredInferenceBackend",
    "build_inference_backend",
]
