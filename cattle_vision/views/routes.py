"""Flask Routes (View Layer) — all HTTP endpoints."""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from cattle_vision.domain.enums import BackendMode, ErrorCode
from cattle_vision.domain.errors import (
    BackendNotConfiguredError,
    BackendTimeoutError,
    PayloadTooLargeError,
    ValidationError,
)
from cattle_vision.models.schemas import ApiError, HealthResponse

logger = logging.getLogger(__name__)


def _error_response(code: ErrorCode, message: str, status: int):
    return jsonify(ApiError(code=code.value, message=message).to_wire()), status


def create_app(controller: Any = None) -> Flask:
    """Flask application factory (MVC pattern)."""
    app = Flask(__name__)

    if controller is None:
        from cattle_vision.controllers.classification_controller import ClassificationController

        controller = ClassificationController()

    app.config["MAX_CONTENT_LENGTH"] = controller.max_request_bytes

    # ── Error handlers ───────────────────────────────
    @app.errorhandler(ValidationError)
    def bad_request(error: ValidationError):
        return _error_response(ErrorCode.BAD_REQUEST, str(error), 400)

    @app.errorhandler(PayloadTooLargeError)
    def payload_too_large(error: PayloadTooLargeError):
        return _error_response(ErrorCode.PAYLOAD_TOO_LARGE, str(error), 413)

    @app.errorhandler(413)
    def request_entity_too_large(_error):
        return _error_response(ErrorCode.PAYLOAD_TOO_LARGE, "Request body is too large", 413)

    @app.errorhandler(BackendNotConfiguredError)
    def not_configured(error: BackendNotConfiguredError):
        return _error_response(ErrorCode.MODEL_NOT_CONFIGURED, str(error), 503)

    @app.errorhandler(BackendTimeoutError)
    def backend_timeout(error: BackendTimeoutError):
        logger.warning("/api/classify backend timeout: %s", error)
        return _error_response(ErrorCode.BACKEND_TIMEOUT, "Inference backend timed out", 504)

    @app.errorhandler(404)
    def not_found(_error):
        return _error_response(ErrorCode.NOT_FOUND, "Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return _error_response(ErrorCode.METHOD_NOT_ALLOWED, "Method not allowed", 405)

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        status = error.code or 500
        code = ErrorCode.BAD_REQUEST if status < 500 else ErrorCode.INTERNAL_ERROR
        return _error_response(code, error.description or "Request failed", status)

    @app.errorhandler(Exception)
    def internal_error(error: Exception):
        logger.exception("%s error: %s", request.path, error)
        return _error_response(ErrorCode.INTERNAL_ERROR, "Unexpected server error", 500)

    @app.route("/health")
    def health():
        response = HealthResponse(
            status="healthy",
            model=controller.model_name,
            backend=controller.backend_mode,
            backend_configured=controller.backend_configured,
            simulated=controller.backend_mode == BackendMode.SIMULATED,
        )
        return jsonify(response.to_wire())

    @app.route("/api/classify", methods=["POST"])
    def classify():
        limit = controller.max_request_bytes
        if request.content_length is not None and request.content_length > limit:
            raise PayloadTooLargeError(f"Request body exceeds {limit} bytes")

        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError("JSON body is required")

        schema = controller.parse_request(data)
        result = controller.classify(schema)
        return jsonify(result.body), result.status_code

    return app
