"""Client package — upload/status controller and its collaborators."""

from cattle_vision.client.events import PASTE, ClipboardItem, EventTarget, PasteEvent
from cattle_vision.client.images import ImageBytes, ImageFile, ImageInput, to_data_uri
from cattle_vision.client.transport import ApiReply, HttpTransport
from cattle_vision.client.upload_controller import UploadController, confidence_percent

__all__ = [
    "PASTE",
    "ApiReply",
    "ClipboardItem",
    "EventTarget",
    "HttpTransport",
    "ImageBytes",
    "ImageFile",
    "ImageInput",
    "PasteEvent",
    "UploadController",
    "confidence_percent",
    "to_data_uri",
]
