"""Views package — Flask application factory."""

from cattle_vision.views.routes import create_app

__all__ = ["create_app"]
