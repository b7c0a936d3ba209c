"""Controllers package — proxy orchestration."""

from cattle_vision.controllers.classification_controller import (
    ClassificationController,
    ProxyResult,
)

__all__ = ["ClassificationController", "ProxyResult"]
