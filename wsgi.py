"""WSGI entrypoint for Gunicorn."""

from cattle_vision.controllers.classification_controller import ClassificationController
from cattle_vision.views.routes import create_app
from config import get_settings

settings = get_settings()
controller = ClassificationController(settings)
app = create_app(controller)
