"""Cattle Vision — breed classification proxy and upload client.

Package layout (MVC + DDD):
    cattle_vision/
    ├── domain/        # Enums, errors
    ├── models/        # Pydantic wire schemas and view models
    ├── services/      # Inference backends (HTTP forwarding, simulation)
    ├── controllers/   # Proxy orchestration: validate, forward, normalize
    ├── views/         # Flask routes (HTTP layer)
    └── client/        # Upload/status controller, image inputs, transport
"""

__version__ = "1.0.0"
