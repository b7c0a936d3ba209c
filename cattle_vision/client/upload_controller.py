"""Upload/Status Controller — image acquisition and classification lifecycle."""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from threading import Lock
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence

from pydantic import ValidationError as PydanticValidationError

from cattle_vision.client.events import PASTE, EventTarget, PasteEvent
from cattle_vision.client.images import ImageInput, is_image_type, to_data_uri
from cattle_vision.client.transport import ApiReply
from cattle_vision.domain.enums import ErrorCode, InputSource, UploadStatus
from cattle_vision.domain.errors import TransportError
from cattle_vision.models.schemas import (
    DEFAULT_TOP_K,
    BreedPrediction,
    ClassificationResponse,
    PredictionRow,
    ResultsView,
)

logger = logging.getLogger(__name__)

NOT_AN_IMAGE_MESSAGE = "Please upload an image file."
UNREADABLE_MESSAGE = "Could not read the selected file."
NOT_CONFIGURED_MESSAGE = (
    "Model backend not configured. Set INFERENCE_URL "
    "(and optionally INFERENCE_API_KEY) for the server."
)
CLASSIFY_FAILED_MESSAGE = "Failed to classify the image."
NETWORK_ERROR_MESSAGE = "Network error while classifying the image."


class ClassifyTransport(Protocol):
    def post_classify(self, payload: Dict[str, Any]) -> ApiReply:
        ...


def confidence_percent(confidence: float) -> int:
    """Round ``confidence * 100`` half-up."""
    return int(math.floor(confidence * 100 + 0.5))


class UploadController:
    """Owns the upload status state machine.

    Every input modality funnels into :meth:`handle_files`. Each
    classification is tagged with a sequence number and only the most
    recent one may update state, so a slow stale response never
    overwrites a newer result or a reset.
    """

    def __init__(self, transport: ClassifyTransport, top_k: int = DEFAULT_TOP_K) -> None:
        self._transport = transport
        self._top_k = top_k
        self._lock = Lock()
        self._sequence = 0
        self._status = UploadStatus.IDLE
        self._image: Optional[str] = None
        self._predictions: Optional[List[BreedPrediction]] = None
        self._error: Optional[str] = None
        self._paste_target: Optional[EventTarget] = None

    # ── State ────────────────────────────────────────

    @property
    def status(self) -> UploadStatus:
        return self._status

    @property
    def image(self) -> Optional[str]:
        return self._image

    @property
    def predictions(self) -> Optional[List[BreedPrediction]]:
        return self._predictions

    @property
    def error(self) -> Optional[str]:
        return self._error

    def reset(self) -> None:
        with self._lock:
            self._sequence += 1
            self._status = UploadStatus.IDLE
            self._image = None
            self._predictions = None
            self._error = None

    # ── Paste subscription ───────────────────────────

    @property
    def is_mounted(self) -> bool:
        return self._paste_target is not None

    def mount(self, target: EventTarget) -> None:
        """Start listening for paste events on ``target``."""
        if self._paste_target is not None:
            raise RuntimeError("UploadController is already mounted")
        target.add_listener(PASTE, self.on_paste)
        self._paste_target = target

    def unmount(self) -> None:
        if self._paste_target is None:
            return
        self._paste_target.remove_listener(PASTE, self.on_paste)
        self._paste_target = None

    @contextmanager
    def mounted(self, target: EventTarget) -> Iterator["UploadController"]:
        self.mount(target)
        try:
            yield self
        finally:
            self.unmount()

    # ── Acquisition ──────────────────────────────────

    def on_file_selected(self, files: Sequence[ImageInput]) -> UploadStatus:
        return self.handle_files(files, InputSource.FILE_PICKER)

    def on_drop(self, files: Sequence[ImageInput]) -> UploadStatus:
        return self.handle_files(files, InputSource.DRAG_DROP)

    def on_camera_capture(self, files: Sequence[ImageInput]) -> UploadStatus:
        return self.handle_files(files, InputSource.CAMERA)

    def on_paste(self, event: PasteEvent) -> UploadStatus:
        image = event.first_image()
        if image is None:
            return self._status
        return self.handle_files([image], InputSource.PASTE)

    def handle_files(
        self,
        files: Sequence[ImageInput],
        source: InputSource = InputSource.FILE_PICKER,
    ) -> UploadStatus:
        """Validate the first file, encode it and classify it."""
        if not files:
            return self._status

        image = files[0]
        if not is_image_type(image.content_type):
            logger.info("Rejected %s input with type %s", source.value, image.content_type)
            with self._lock:
                self._sequence += 1
                self._status = UploadStatus.ERROR
                self._error = NOT_AN_IMAGE_MESSAGE
            return self._status

        try:
            data_uri = to_data_uri(image)
        except OSError as exc:
            logger.warning("Could not read %s: %s", getattr(image, "name", "image"), exc)
            with self._lock:
                self._sequence += 1
                self._status = UploadStatus.ERROR
                self._error = UNREADABLE_MESSAGE
            return self._status

        return self.classify(data_uri)

    # ── Classification ───────────────────────────────

    def classify(self, data_uri: str) -> UploadStatus:
        with self._lock:
            self._sequence += 1
            sequence = self._sequence
            self._image = data_uri
            self._status = UploadStatus.CLASSIFYING
            self._error = None

        payload = {"imageBase64": data_uri, "topK": self._top_k}
        try:
            reply = self._transport.post_classify(payload)
        except TransportError as exc:
            logger.warning("Classification request failed: %s", exc)
            self._apply(sequence, UploadStatus.ERROR, error=NETWORK_ERROR_MESSAGE)
            return self._status

        if reply.ok:
            self._apply_success(sequence, reply)
        else:
            self._apply_failure(sequence, reply)
        return self._status

    def _apply_success(self, sequence: int, reply: ApiReply) -> None:
        try:
            response = ClassificationResponse.model_validate(reply.body)
        except PydanticValidationError as exc:
            logger.warning("Unexpected classification body: %s", exc)
            self._apply(sequence, UploadStatus.ERROR, error=CLASSIFY_FAILED_MESSAGE)
            return
        self._apply(sequence, UploadStatus.SUCCESS, predictions=list(response.predictions))

    def _apply_failure(self, sequence: int, reply: ApiReply) -> None:
        body = reply.body if isinstance(reply.body, dict) else {}
        if reply.status_code == 503 and body.get("code") == ErrorCode.MODEL_NOT_CONFIGURED.value:
            self._apply(sequence, UploadStatus.NOT_CONFIGURED, error=NOT_CONFIGURED_MESSAGE)
            return
        message = body.get("message")
        if not isinstance(message, str) or not message:
            message = CLASSIFY_FAILED_MESSAGE
        self._apply(sequence, UploadStatus.ERROR, error=message)

    def _apply(
        self,
        sequence: int,
        status: UploadStatus,
        predictions: Optional[List[BreedPrediction]] = None,
        error: Optional[str] = None,
    ) -> None:
        with self._lock:
            if sequence != self._sequence:
                logger.debug("Discarding stale response #%d (latest #%d)", sequence, self._sequence)
                return
            self._status = status
            self._error = error
            if predictions is not None:
                self._predictions = predictions

    # ── Rendering ────────────────────────────────────

    def render(self) -> ResultsView:
        """Snapshot of the results panel."""
        with self._lock:
            status = self._status
            predictions = list(self._predictions or [])
            image = self._image
            error = self._error

        rows: List[PredictionRow] = []
        top_label: Optional[str] = None
        if status == UploadStatus.SUCCESS:
            for prediction in predictions:
                percent = confidence_percent(prediction.confidence)
                rows.append(
                    PredictionRow(label=prediction.label, percent=percent, bar_value=max(1, percent))
                )
            top_label = predictions[0].label if predictions else None

        return ResultsView(
            status=status,
            image=image,
            top_label=top_label,
            rows=rows,
            error=error,
        )
