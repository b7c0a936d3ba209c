"""Minimal event target used to scope document-level listeners."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Tuple

from cattle_vision.client.images import ImageBytes, is_image_type

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]

PASTE = "paste"


@dataclass(frozen=True)
class ClipboardItem:
    """One entry of a paste event."""

    mime_type: str
    data: Optional[bytes] = None

    def as_image(self) -> Optional[ImageBytes]:
        if not is_image_type(self.mime_type) or self.data is None:
            return None
        return ImageBytes(data=self.data, mime_type=self.mime_type)


@dataclass(frozen=True)
class PasteEvent:
    """Clipboard contents delivered to paste listeners."""

    items: Tuple[ClipboardItem, ...] = field(default_factory=tuple)

    def first_image(self) -> Optional[ImageBytes]:
        for item in self.items:
            if is_image_type(item.mime_type):
                return item.as_image()
        return None


class EventTarget:
    """Dispatches named events to registered listeners."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self._lock = RLock()

    def add_listener(self, event_type: str, listener: Listener) -> None:
        with self._lock:
            self._listeners[event_type].append(listener)

    def remove_listener(self, event_type: str, listener: Listener) -> None:
        with self._lock:
            listeners = self._listeners.get(event_type, [])
            if listener in listeners:
                listeners.remove(listener)

    def listener_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._listeners.get(event_type, []))

    def dispatch(self, event_type: str, event: Any) -> None:
        with self._lock:
            listeners = list(self._listeners.get(event_type, []))
        logger.debug("Dispatching %s to %d listener(s)", event_type, len(listeners))
        for listener in listeners:
            listener(event)
