"""Image inputs accepted by the upload controller and their data-URI encoding."""

from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class ImageFile:
    """A file chosen through the picker, a drop, or the camera."""

    path: Path
    mime_type: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def content_type(self) -> str:
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(self.path.name)
        return guessed or "application/octet-stream"

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True)
class ImageBytes:
    """In-memory image data, e.g. from the clipboard."""

    data: bytes
    mime_type: str
    name: str = "pasted-image"

    @property
    def content_type(self) -> str:
        return self.mime_type

    def read_bytes(self) -> bytes:
        return self.data


ImageInput = Union[ImageFile, ImageBytes]


def is_image_type(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.lower().startswith("image/")


def to_data_uri(image: ImageInput) -> str:
    """Encode an image as ``data:<mime>;base64,<payload>``.

    Raises ``OSError`` when a file cannot be read.
    """
    payload = base64.b64encode(image.read_bytes()).decode("ascii")
    return f"data:{image.content_type};base64,{payload}"
