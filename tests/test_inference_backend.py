"""Tests for cattle_vision.services.inference_backend."""

from __future__ import annotations

import io
import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch
from urllib import error as url_error

import pytest

from cattle_vision.domain.enums import BackendMode
from cattle_vision.domain.errors import (
    BackendNotConfiguredError,
    BackendTimeoutError,
    BackendUnavailableError,
    ClassificationError,
)
from cattle_vision.models.schemas import ClassificationRequest
from cattle_vision.services.inference_backend import (
    HttpInferenceBackend,
    SimulatedInferenceBackend,
    UnconfiguredInferenceBackend,
    build_inference_backend,
)

URL = "http://model.local/predict"


def _request(top_k=5):
    return ClassificationRequest(image_base64="data:image/jpeg;base64,AAAA", top_k=top_k)


def _response(status, body: bytes):
    response = MagicMock()
    response.status = status
    response.read.return_value = body
    response.__enter__.return_value = response
    return response


def _settings(**overrides):
    values = {
        "inference_url": "",
        "inference_api_key": "",
        "inference_timeout_seconds": 30.0,
        "require_inference_backend": False,
        "simulated_latency_ms": 800,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestSimulatedInferenceBackend:
    def test_canned_predictions(self):
        sleep = MagicMock()
        reply = SimulatedInferenceBackend(sleep=sleep).predict(_request())
        assert reply.status_code == 200
        assert reply.ok is True
        assert reply.body["model"] == "simulated-model/v1"
        assert reply.body["latencyMs"] == 800
        assert reply.body["predictions"] == [
            {"label": "Fake Breed 1", "confidence": 0.78},
            {"label": "Fake Breed 2", "confidence": 0.12},
            {"label": "Fake Breed 3", "confidence": 0.05},
        ]
        sleep.assert_called_once_with(0.8)

    @pytest.mark.parametrize("top_k,expected", [(1, 1), (2, 2), (3, 3), (10, 3)])
    def test_truncated_to_top_k(self, top_k, expected):
        reply = SimulatedInferenceBackend(sleep=lambda _: None).predict(_request(top_k))
        assert len(reply.body["predictions"]) == expected

    def test_deterministic(self):
        backend = SimulatedInferenceBackend(sleep=lambda _: None)
        assert backend.predict(_request()).body == backend.predict(_request()).body

    def test_mode(self):
        assert SimulatedInferenceBackend().mode == BackendMode.SIMULATED
        assert SimulatedInferenceBackend().model_name == "simulated-model/v1"


class TestHttpInferenceBackend:
    @patch("cattle_vision.services.inference_backend.url_request.urlopen")
    def test_forwards_request_body(self, mock_urlopen):
        mock_urlopen.return_value = _response(200, b'{"predictions": []}')
        backend = HttpInferenceBackend(URL, timeout=12)

        reply = backend.predict(_request(top_k=3))

        assert reply.status_code == 200
        assert reply.body == {"predictions": []}
        sent = mock_urlopen.call_args[0][0]
        assert sent.full_url == URL
        assert sent.get_method() == "POST"
        assert json.loads(sent.data) == {
            "imageBase64": "data:image/jpeg;base64,AAAA",
            "topK": 3,
        }
        assert sent.get_header("Content-type") == "application/json"
        assert sent.get_header("Authorization") is None
        assert mock_urlopen.call_args.kwargs["timeout"] == 12

    @patch("cattle_vision.services.inference_backend.url_request.urlopen")
    def test_bearer_token_attached(self, mock_urlopen):
        mock_urlopen.return_value = _response(200, b"{}")
        HttpInferenceBackend(URL, api_key="secret").predict(_request())
        sent = mock_urlopen.call_args[0][0]
        assert sent.get_header("Authorization") == "Bearer secret"

    @patch("cattle_vision.services.inference_backend.url_request.urlopen")
    def test_http_error_returned_as_reply(self, mock_urlopen):
        mock_urlopen.side_effect = url_error.HTTPError(
            URL,
            500,
            "Internal Server Error",
            None,
            io.BytesIO(b'{"code": "INTERNAL_ERROR", "message": "boom"}'),
        )
        reply = HttpInferenceBackend(URL).predict(_request())
        assert reply.status_code == 500
        assert reply.ok is False
        assert reply.body == {"code": "INTERNAL_ERROR", "message": "boom"}

    @patch("cattle_vision.services.inference_backend.url_request.urlopen")
    def test_connection_error(self, mock_urlopen):
        mock_urlopen.side_effect = url_error.URLError("connection refused")
        with pytest.raises(BackendUnavailableError, match="unreachable"):
            HttpInferenceBackend(URL).predict(_request())

    @patch("cattle_vision.services.inference_backend.url_request.urlopen")
    def test_timeout(self, mock_urlopen):
        mock_urlopen.side_effect = TimeoutError("timed out")
        with pytest.raises(BackendTimeoutError):
            HttpInferenceBackend(URL, timeout=2).predict(_request())

    @patch("cattle_vision.services.inference_backend.url_request.urlopen")
    def test_timeout_wrapped_in_url_error(self, mock_urlopen):
        mock_urlopen.side_effect = url_error.URLError(TimeoutError("timed out"))
        with pytest.raises(BackendTimeoutError):
            HttpInferenceBackend(URL).predict(_request())

    @patch("cattle_vision.services.inference_backend.url_request.urlopen")
    def test_non_json_body(self, mock_urlopen):
        mock_urlopen.return_value = _response(200, b"<html>oops</html>")
        with pytest.raises(ClassificationError):
            HttpInferenceBackend(URL).predict(_request())


class TestUnconfiguredInferenceBackend:
    def test_always_raises(self):
        with pytest.raises(BackendNotConfiguredError, match="INFERENCE_URL"):
            UnconfiguredInferenceBackend().predict(_request())


class TestBuildInferenceBackend:
    def test_http_when_url_set(self):
        backend = build_inference_backend(_settings(inference_url=URL, inference_api_key="k"))
        assert isinstance(backend, HttpInferenceBackend)
        assert backend.model_name == "external"
        assert backend.mode == BackendMode.HTTP

    def test_simulated_by_default(self):
        backend = build_inference_backend(_settings())
        assert isinstance(backend, SimulatedInferenceBackend)

    def test_unconfigured_when_required(self):
        backend = build_inference_backend(_settings(require_inference_backend=True))
        assert isinstance(backend, UnconfiguredInferenceBackend)
        assert backend.mode == BackendMode.UNCONFIGURED
        assert backend.model_name == "unconfigured"
