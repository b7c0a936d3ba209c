"""Pytest configuration & shared fixtures."""

import os
import sys
from typing import Any, List, Optional

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set test environment variables before any imports
os.environ.setdefault("HOST", "127.0.0.1")
os.environ.setdefault("PORT", "8000")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ENVIRONMENT", "test")

from cattle_vision.client.transport import ApiReply  # noqa: E402
from cattle_vision.domain.enums import BackendMode  # noqa: E402
from cattle_vision.services.inference_backend import (  # noqa: E402
    BackendReply,
    InferenceBackend,
)


class StubBackend(InferenceBackend):
    """Backend returning a scripted reply (or raising) and recording requests."""

    mode = BackendMode.HTTP
    model_name = "external"

    def __init__(self, reply: Any = None, error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.requests: List[Any] = []

    def predict(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


class FlaskTransport:
    """Client transport that talks to a Flask test client."""

    def __init__(self, client) -> None:
        self.client = client
        self.payloads: List[dict] = []

    def post_classify(self, payload):
        self.payloads.append(payload)
        resp = self.client.post("/api/classify", json=payload)
        return ApiReply(status_code=resp.status_code, body=resp.get_json(silent=True))


@pytest.fixture
def settings():
    from config import Settings

    return Settings(
        inference_url="",
        inference_api_key="",
        require_inference_backend=False,
        simulated_latency_ms=800,
        max_top_k=20,
        max_request_bytes=1024 * 1024,
    )


@pytest.fixture
def sleeps():
    """Records simulated-latency sleeps instead of actually sleeping."""
    return []


@pytest.fixture
def make_client(settings, sleeps):
    """Build a Flask test client around a real controller."""
    from cattle_vision.controllers.classification_controller import ClassificationController
    from cattle_vision.services.inference_backend import SimulatedInferenceBackend
    from cattle_vision.views.routes import create_app

    def _make(backend=None, **overrides):
        app_settings = settings.model_copy(update=overrides) if overrides else settings
        if backend is None and not app_settings.inference_url and not app_settings.require_inference_backend:
            backend = SimulatedInferenceBackend(
                latency_ms=app_settings.simulated_latency_ms,
                sleep=sleeps.append,
            )
        controller = ClassificationController(settings=app_settings, backend=backend)
        app = create_app(controller)
        app.config["TESTING"] = True
        client = app.test_client()
        return client

    return _make


@pytest.fixture
def app_client(make_client):
    """Flask test client backed by the simulated model."""
    return make_client()


@pytest.fixture
def jpeg_file(tmp_path):
    """A 10KB file with a JPEG header."""
    path = tmp_path / "cow.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0" + b"\x00" * (10 * 1024 - 4))
    return path
