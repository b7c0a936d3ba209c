"""Models package — wire schemas and client view models."""

from cattle_vision.models.schemas import (
    DEFAULT_TOP_K,
    ApiError,
    BreedPrediction,
    ClassificationRequest,
    ClassificationResponse,
    HealthResponse,
    PredictionRow,
    ResultsView,
)

__all__ = [
    "DEFAULT_TOP_K",
    "ApiError",
    "BreedPrediction",
    "ClassificationRequest",
    "ClassificationResponse",
    "HealthResponse",
    "PredictionRow",
    "ResultsView",
]
