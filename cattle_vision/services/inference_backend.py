"""Inference backends — HTTP forwarding and deterministic simulation."""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Tuple
from urllib import error as url_error
from urllib import request as url_request

from cattle_vision.domain.enums import BackendMode
from cattle_vision.domain.errors import (
    BackendNotConfiguredError,
    BackendTimeoutError,
    BackendUnavailableError,
    ClassificationError,
)
from cattle_vision.models.schemas import (
    BreedPrediction,
    ClassificationRequest,
    ClassificationResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_EXTERNAL_MODEL = "external"


@dataclass(frozen=True)
class BackendReply:
    """Raw status and decoded JSON body from a backend."""

    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class InferenceBackend(ABC):
    """Interface for anything that can answer a classification request."""

    mode: BackendMode
    model_name: str

    @abstractmethod
    def predict(self, request: ClassificationRequest) -> BackendReply:
        raise NotImplementedError


class HttpInferenceBackend(InferenceBackend):
    """Forwards the request body to an external inference endpoint."""

    mode = BackendMode.HTTP
    model_name = DEFAULT_EXTERNAL_MODEL

    def __init__(self, url: str, api_key: str = "", timeout: float = 30.0) -> None:
        self._url = url
        self._api_key = api_key
        self._timeout = timeout

    def predict(self, request: ClassificationRequest) -> BackendReply:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        http_request = url_request.Request(
            self._url,
            data=json.dumps(request.to_wire()).encode("utf-8"),
            headers=headers,
            method="POST",
        )

        logger.info("Forwarding classification to %s (topK=%d)", self._url, request.top_k)
        try:
            with url_request.urlopen(http_request, timeout=self._timeout) as response:
                return BackendReply(
                    status_code=response.status,
                    body=self._decode(response.read()),
                )
        except url_error.HTTPError as exc:
            logger.warning("Inference backend answered HTTP %d", exc.code)
            return BackendReply(status_code=exc.code, body=self._decode(exc.read()))
        except TimeoutError as exc:
            raise BackendTimeoutError(
                f"Inference backend timed out after {self._timeout:g}s"
            ) from exc
        except url_error.URLError as exc:
            if isinstance(exc.reason, TimeoutError):
                raise BackendTimeoutError(
                    f"Inference backend timed out after {self._timeout:g}s"
                ) from exc
            raise BackendUnavailableError(
                f"Inference backend unreachable: {exc.reason}"
            ) from exc

    @staticmethod
    def _decode(raw: bytes) -> Any:
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            raise ClassificationError("Inference backend returned a non-JSON body") from exc


class SimulatedInferenceBackend(InferenceBackend):
    """Deterministic stand-in used while no inference URL is configured."""

    mode = BackendMode.SIMULATED
    model_name = "simulated-model/v1"
    CANNED_PREDICTIONS: Sequence[Tuple[str, float]] = (
        ("Fake Breed 1", 0.78),
        ("Fake Breed 2", 0.12),
        ("Fake Breed 3", 0.05),
    )

    def __init__(
        self,
        latency_ms: int = 800,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._latency_ms = latency_ms
        self._sleep = sleep

    def predict(self, request: ClassificationRequest) -> BackendReply:
        logger.warning(
            "INFERENCE_URL not set. Simulating a fake model response. "
            "Set INFERENCE_URL to your model's endpoint."
        )
        self._sleep(self._latency_ms / 1000.0)

        predictions = [
            BreedPrediction(label=label, confidence=confidence)
            for label, confidence in self.CANNED_PREDICTIONS[: request.top_k]
        ]
        response = ClassificationResponse(
            model=self.model_name,
            latency_ms=self._latency_ms,
            predictions=predictions,
        )
        return BackendReply(status_code=200, body=response.to_wire())


class UnconfiguredInferenceBackend(InferenceBackend):
    """Refuses every request; used when a real backend is mandatory."""

    mode = BackendMode.UNCONFIGURED
    model_name = "unconfigured"

    def predict(self, request: ClassificationRequest) -> BackendReply:
        raise BackendNotConfiguredError(
            "Model backend not configured. Set INFERENCE_URL "
            "(and optionally INFERENCE_API_KEY) for the server."
        )


def build_inference_backend(settings: Any) -> InferenceBackend:
    """Pick the backend matching the current configuration."""
    if settings.inference_url:
        return HttpInferenceBackend(
            url=settings.inference_url,
            api_key=settings.inference_api_key,
            timeout=settings.inference_timeout_seconds,
        )
    if settings.require_inference_backend:
        logger.error("INFERENCE_URL is required but not set")
        return UnconfiguredInferenceBackend()
    return SimulatedInferenceBackend(latency_ms=settings.simulated_latency_ms)
