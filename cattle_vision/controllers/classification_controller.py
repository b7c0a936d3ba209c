"""Classification Controller (Controller Layer)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from cattle_vision.domain.enums import BackendMode
from cattle_vision.domain.errors import ClassificationError, ValidationError
from cattle_vision.models.schemas import (
    BreedPrediction,
    ClassificationRequest,
    ClassificationResponse,
)
from cattle_vision.services.inference_backend import (
    DEFAULT_EXTERNAL_MODEL,
    InferenceBackend,
    build_inference_backend,
)

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ProxyResult:
    """HTTP status and JSON body to send back to the caller."""

    status_code: int
    body: Any


class ClassificationController:
    """Validates requests, delegates to a backend and shapes the reply.

    Successful backend replies are normalized into a
    ``ClassificationResponse``. Non-2xx replies are passed through with
    their original status and body.
    """

    def __init__(
        self,
        settings: Any = None,
        backend: Optional[InferenceBackend] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if settings is None:
            from config import get_settings

            settings = get_settings()

        self._settings = settings
        self._backend = backend if backend is not None else build_inference_backend(settings)
        self._clock = clock

    @property
    def backend_mode(self) -> BackendMode:
        return self._backend.mode

    @property
    def backend_configured(self) -> bool:
        return self._backend.mode == BackendMode.HTTP

    @property
    def model_name(self) -> str:
        return self._backend.model_name

    @property
    def max_request_bytes(self) -> int:
        return self._settings.max_request_bytes

    def parse_request(self, payload: Any) -> ClassificationRequest:
        """Validate a decoded JSON body into a ``ClassificationRequest``."""
        if not isinstance(payload, dict):
            raise ValidationError("JSON body is required")

        try:
            request = ClassificationRequest.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError(self._describe(exc)) from exc

        if request.top_k > self._settings.max_top_k:
            raise ValidationError(self._top_k_message())
        return request

    def classify(self, request: ClassificationRequest) -> ProxyResult:
        """Run one classification through the configured backend."""
        started = self._clock()
        reply = self._backend.predict(request)

        if not reply.ok:
            logger.info("Passing through backend status %d", reply.status_code)
            return ProxyResult(status_code=reply.status_code, body=reply.body)

        response = self._normalize(reply.body, request.top_k, started)
        return ProxyResult(status_code=200, body=response.to_wire())

    def _normalize(self, body: Any, top_k: int, started: float) -> ClassificationResponse:
        if not isinstance(body, dict):
            raise ClassificationError("Inference backend returned a non-object body")

        raw_predictions = body.get("predictions")
        if raw_predictions is None:
            raw_predictions = []
        if not isinstance(raw_predictions, list):
            raise ClassificationError("Inference backend returned malformed predictions")

        model = body.get("model")
        latency_ms = body.get("latencyMs")
        if latency_ms is None:
            latency_ms = int(round((self._clock() - started) * 1000))

        try:
            predictions: List[BreedPrediction] = [
                BreedPrediction.model_validate(item) for item in raw_predictions
            ]
            predictions.sort(key=lambda prediction: prediction.confidence, reverse=True)
            return ClassificationResponse(
                model=model if model is not None else DEFAULT_EXTERNAL_MODEL,
                latency_ms=latency_ms,
                predictions=predictions[:top_k],
            )
        except PydanticValidationError as exc:
            raise ClassificationError(f"Inference backend returned malformed data: {exc}") from exc

    def _top_k_message(self) -> str:
        return f"topK must be an integer between 1 and {self._settings.max_top_k}"

    def _describe(self, exc: PydanticValidationError) -> str:
        errors = exc.errors()
        field = errors[0]["loc"][0] if errors and errors[0]["loc"] else None
        if field == "imageBase64":
            return "imageBase64 is required"
        if field == "topK":
            return self._top_k_message()
        return "Invalid request payload"
