"""Pydantic request/response schemas (Model Layer).

Wire names are camelCase, attributes are snake_case. Every model accepts
either form on input and ``to_wire()`` emits the camelCase form.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from cattle_vision import __version__
from cattle_vision.domain.enums import BackendMode, UploadStatus

DEFAULT_TOP_K = 5


class WireModel(BaseModel):
    """Immutable model serialized with its wire aliases."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# ── Value objects ─────────────────────────────────────────


class BreedPrediction(WireModel):
    """A single ranked breed guess."""

    label: str = Field(validation_alias=AliasChoices("label", "breed"))
    confidence: float = Field(ge=0.0, le=1.0)


class ApiError(WireModel):
    """Error body returned by the proxy."""

    code: str
    message: str


# ── Requests ──────────────────────────────────────────────


class ClassificationRequest(WireModel):
    """Inbound ``POST /api/classify`` body."""

    image_base64: str = Field(alias="imageBase64", min_length=1, strict=True)
    top_k: int = Field(default=DEFAULT_TOP_K, alias="topK", ge=1, strict=True)

    @field_validator("top_k", mode="before")
    @classmethod
    def default_missing_top_k(cls, value: Any) -> Any:
        return DEFAULT_TOP_K if value is None else value


# ── Responses ─────────────────────────────────────────────


class ClassificationResponse(WireModel):
    """Normalized classification result."""

    model: str
    latency_ms: int = Field(alias="latencyMs", ge=0)
    predictions: List[BreedPrediction] = Field(default_factory=list)

    @field_validator("latency_ms", mode="before")
    @classmethod
    def round_fractional_latency(cls, value: Any) -> Any:
        if isinstance(value, float):
            return int(round(value))
        return value


class HealthResponse(WireModel):
    """Health check response."""

    status: str
    model: str
    backend: BackendMode
    backend_configured: bool = Field(alias="backendConfigured")
    simulated: bool
    version: str = __version__


# ── Client view models ────────────────────────────────────


class PredictionRow(WireModel):
    """One rendered progress indicator."""

    label: str
    percent: int
    bar_value: int = Field(alias="barValue")


class ResultsView(WireModel):
    """Everything a results panel needs to draw itself."""

    status: UploadStatus
    image: Optional[str] = None
    top_label: Optional[str] = Field(default=None, alias="topLabel")
    rows: List[PredictionRow] = Field(default_factory=list)
    error: Optional[str] = None
